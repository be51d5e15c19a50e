"""Explicit waits for asynchronous page readiness."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .base import BrowserSession, Element, Locator, StaleElementError

LOGGER = logging.getLogger(__name__)


class ReadinessTimeoutError(TimeoutError):
    """Raised when a readiness predicate does not hold before the deadline."""

    def __init__(self, description: str, timeout: float) -> None:
        super().__init__(f"Timed out after {timeout:g}s waiting for {description}")
        self.description = description
        self.timeout = timeout


@dataclass(frozen=True)
class ReadinessPredicate:
    """A named condition over the page that yields an element once satisfied."""

    description: str
    check: Callable[[BrowserSession], Optional[Element]]

    def __call__(self, session: BrowserSession) -> Optional[Element]:
        return self.check(session)


def element_present(locator: Locator) -> ReadinessPredicate:
    return ReadinessPredicate(f"presence of {locator}", lambda session: session.query(locator))


def element_visible(locator: Locator) -> ReadinessPredicate:
    def _check(session: BrowserSession) -> Optional[Element]:
        element = session.query(locator)
        if element is not None and element.is_displayed():
            return element
        return None

    return ReadinessPredicate(f"visibility of {locator}", _check)


def element_clickable(locator: Locator) -> ReadinessPredicate:
    def _check(session: BrowserSession) -> Optional[Element]:
        element = session.query(locator)
        if element is not None and element.is_displayed() and element.is_enabled():
            return element
        return None

    return ReadinessPredicate(f"{locator} to be clickable", _check)


def text_matches(locator: Locator, text: str) -> ReadinessPredicate:
    """Element whose text contains ``text``, compared case-insensitively."""

    needle = text.lower()

    def _check(session: BrowserSession) -> Optional[Element]:
        element = session.query(locator)
        if element is not None and needle in element.text.lower():
            return element
        return None

    return ReadinessPredicate(f"text {text!r} in {locator}", _check)


def wait_until(
    session: BrowserSession,
    predicate: ReadinessPredicate,
    timeout: float = 10.0,
    poll_interval: float = 0.5,
) -> Element:
    """Poll ``predicate`` until it returns an element or ``timeout`` elapses.

    A stale handle during evaluation counts as "not ready"; the next poll does a
    fresh lookup.
    """

    LOGGER.debug("Waiting up to %ss for %s", timeout, predicate.description)
    deadline = time.monotonic() + timeout
    while True:
        try:
            element = predicate(session)
        except StaleElementError:
            LOGGER.debug("Stale element while waiting for %s", predicate.description)
            element = None
        if element is not None:
            return element
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise ReadinessTimeoutError(predicate.description, timeout)
        time.sleep(min(poll_interval, remaining))
