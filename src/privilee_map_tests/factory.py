"""Factories for constructing components from configuration."""

from __future__ import annotations

from .browser.playwright_session import PlaywrightBrowserSession
from .config import SuiteConfig
from .lifecycle import SessionFactory
from .notifications.base import ConsoleNotifier, Notifier


def build_browser(config: SuiteConfig) -> PlaywrightBrowserSession:
    return PlaywrightBrowserSession(config.browser, config.timeouts)


def session_factory(config: SuiteConfig) -> SessionFactory:
    """Return a callable producing a new, unstarted session per scenario."""

    return lambda: build_browser(config)


def build_notifier(channel: str = "console") -> Notifier:
    if channel.lower() == "console":
        return ConsoleNotifier()
    raise ValueError(f"Unsupported notification channel: {channel}")
