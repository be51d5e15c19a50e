"""Per-scenario session setup and teardown."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .browser.base import BrowserSession

LOGGER = logging.getLogger(__name__)

SessionFactory = Callable[[], BrowserSession]


@contextmanager
def scenario_session(factory: SessionFactory) -> Iterator[BrowserSession]:
    """Yield a freshly started session and always release it on exit.

    Teardown errors are logged and never replace an error raised in the block.
    """

    session: Optional[BrowserSession] = None
    try:
        session = factory()
        session.start()
        yield session
    finally:
        if session is not None:
            _teardown(session)


def _teardown(session: BrowserSession) -> None:
    try:
        session.stop()
    except Exception:
        LOGGER.exception("Failed to stop browser session during teardown")
