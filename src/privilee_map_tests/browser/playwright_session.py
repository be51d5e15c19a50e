"""Playwright-powered browser session implementation."""

from __future__ import annotations

import logging
from typing import List, Optional

from playwright.sync_api import ElementHandle, Error, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..config import BrowserConfig, TimeoutConfig
from .base import (
    BrowserActionError,
    BrowserSession,
    Element,
    EnvironmentUnavailableError,
    Locator,
    LocatorMissError,
    StaleElementError,
)
from .gestures import drag_by
from .provision import ensure_browser_installed

LOGGER = logging.getLogger(__name__)

_SUBMIT_FORM = """
element => {
    const form = element.form || element.closest('form');
    if (!form) {
        return false;
    }
    if (typeof form.requestSubmit === 'function') {
        form.requestSubmit();
    } else {
        form.submit();
    }
    return true;
}
"""


class PlaywrightElement:
    """Element handle backed by a Playwright ``ElementHandle``."""

    def __init__(self, handle: ElementHandle, description: str = "") -> None:
        self.handle = handle
        self._description = description

    @property
    def text(self) -> str:
        try:
            return self.handle.inner_text()
        except Error as exc:
            raise _translate(exc, self._description) from exc

    def click(self) -> None:
        try:
            self.handle.click()
        except Error as exc:
            raise _translate(exc, self._description) from exc

    def type(self, text: str) -> None:
        try:
            self.handle.fill(text)
        except Error as exc:
            raise _translate(exc, self._description) from exc

    def press(self, key: str) -> None:
        try:
            self.handle.press(key)
        except Error as exc:
            raise _translate(exc, self._description) from exc

    def submit(self) -> None:
        try:
            submitted = self.handle.evaluate(_SUBMIT_FORM)
        except Error as exc:
            raise _translate(exc, self._description) from exc
        if not submitted:
            raise BrowserActionError(f"{self._description or 'Element'} is not inside a form")

    def is_displayed(self) -> bool:
        try:
            return self.handle.is_visible()
        except Error as exc:
            raise _translate(exc, self._description) from exc

    def is_enabled(self) -> bool:
        try:
            return self.handle.is_enabled()
        except Error as exc:
            raise _translate(exc, self._description) from exc


class PlaywrightBrowserSession(BrowserSession):
    """Browser session backed by Playwright's Chromium."""

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        timeouts: Optional[TimeoutConfig] = None,
    ) -> None:
        self._config = config or BrowserConfig()
        timeouts = timeouts or TimeoutConfig()
        self.implicit_timeout = timeouts.implicit
        self.explicit_timeout = timeouts.explicit
        self.poll_interval = timeouts.poll_interval
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    @property
    def is_active(self) -> bool:
        return self._page is not None

    @property
    def page(self):
        if not self._page:
            raise BrowserActionError("Browser session is not started")
        return self._page

    def start(self) -> None:
        if self.is_active:
            raise BrowserActionError("Browser session is already started")
        if self._config.install_browser:
            ensure_browser_installed("chromium")
        LOGGER.debug("Starting Playwright browser session")
        maximize = self._config.maximized and not self._config.headless
        launch_kwargs = {
            "headless": self._config.headless,
            "slow_mo": self._config.slow_mo,
            "args": ["--start-maximized"] if maximize else [],
        }
        if maximize:
            context_kwargs: dict[str, object] = {"no_viewport": True}
        else:
            context_kwargs = {
                "viewport": {
                    "width": self._config.viewport_width,
                    "height": self._config.viewport_height,
                }
            }
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(**launch_kwargs)
            self._context = self._browser.new_context(**context_kwargs)
            page = self._context.new_page()
        except Error as exc:
            try:
                self.stop()
            except Exception:
                LOGGER.exception("Failed to clean up after launch failure")
            raise EnvironmentUnavailableError(str(exc)) from exc
        page.set_default_timeout(self.implicit_timeout * 1000)
        self._page = page

    def stop(self) -> None:
        if not (self._playwright or self._browser or self._context):
            return
        LOGGER.debug("Stopping Playwright browser session")
        try:
            if self._context:
                self._context.close()
        finally:
            try:
                if self._browser:
                    self._browser.close()
            finally:
                playwright, self._playwright = self._playwright, None
                self._context = None
                self._browser = None
                self._page = None
                if playwright:
                    playwright.stop()

    def navigate(self, url: str) -> None:
        LOGGER.info("Navigating to %s", url)
        try:
            self.page.goto(url, wait_until="load")
        except Error as exc:
            raise BrowserActionError(str(exc)) from exc

    def query(self, locator: Locator) -> Optional[Element]:
        try:
            handle = self.page.query_selector(locator.selector)
        except Error as exc:
            raise _translate(exc, str(locator)) from exc
        if handle is None:
            return None
        return PlaywrightElement(handle, str(locator))

    def find(self, locator: Locator) -> Element:
        try:
            handle = self.page.wait_for_selector(
                locator.selector,
                state="attached",
                timeout=self.implicit_timeout * 1000,
            )
        except PlaywrightTimeoutError as exc:
            raise LocatorMissError(locator, self.implicit_timeout) from exc
        except Error as exc:
            raise _translate(exc, str(locator)) from exc
        if handle is None:
            raise LocatorMissError(locator, self.implicit_timeout)
        return PlaywrightElement(handle, str(locator))

    def find_all(self, locator: Locator) -> List[Element]:
        try:
            self.page.wait_for_selector(
                locator.selector,
                state="attached",
                timeout=self.implicit_timeout * 1000,
            )
        except PlaywrightTimeoutError:
            LOGGER.debug("No elements for %s within %ss", locator, self.implicit_timeout)
            return []
        except Error as exc:
            raise _translate(exc, str(locator)) from exc
        try:
            handles = self.page.query_selector_all(locator.selector)
        except Error as exc:
            raise _translate(exc, str(locator)) from exc
        return [PlaywrightElement(handle, str(locator)) for handle in handles]

    def drag_by(self, element: Element, dx: int, dy: int) -> None:
        if not isinstance(element, PlaywrightElement):
            raise BrowserActionError("Can only drag elements returned by this session")
        try:
            drag_by(self.page, element.handle, dx, dy)
        except Error as exc:
            raise _translate(exc, "drag target") from exc


_STALE_MARKERS = (
    "not attached",
    "disposed",
    "execution context was destroyed",
    "frame was detached",
)


def _translate(exc: Error, description: str) -> BrowserActionError:
    message = str(exc)
    lowered = message.lower()
    if any(marker in lowered for marker in _STALE_MARKERS):
        return StaleElementError(f"{description or 'Element'} is stale: {message}")
    return BrowserActionError(message)
