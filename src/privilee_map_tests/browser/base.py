"""Browser session abstractions."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol

if TYPE_CHECKING:
    from .waits import ReadinessPredicate


class BrowserActionError(RuntimeError):
    """Raised when executing a browser action fails."""


class EnvironmentUnavailableError(BrowserActionError):
    """Raised when the browser cannot be provisioned or launched."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"environment unavailable: {reason}")
        self.reason = reason


class LocatorMissError(BrowserActionError):
    """Raised when an element is not found within the implicit timeout."""

    def __init__(self, locator: "Locator", timeout: float) -> None:
        super().__init__(f"Element {locator} not found within {timeout:g}s")
        self.locator = locator
        self.timeout = timeout


class StaleElementError(BrowserActionError):
    """Raised when an element handle no longer points at an attached node."""


class LocatorStrategy(str, enum.Enum):
    """How a locator query is interpreted."""

    CLASS_NAME = "class-name"
    CSS_SELECTOR = "css-selector"
    XPATH = "xpath"


@dataclass(frozen=True)
class Locator:
    """A named (strategy, query) pair identifying DOM elements."""

    strategy: LocatorStrategy
    query: str
    name: str = ""

    @property
    def selector(self) -> str:
        """Return the equivalent Playwright selector string."""

        if self.strategy == LocatorStrategy.CLASS_NAME:
            return f"css=.{self.query}"
        if self.strategy == LocatorStrategy.CSS_SELECTOR:
            return f"css={self.query}"
        return f"xpath={self.query}"

    def __str__(self) -> str:
        label = f"{self.name} " if self.name else ""
        return f"{label}[{self.strategy.value}: {self.query}]"


class Element(Protocol):
    """A resolved reference to a DOM node."""

    @property
    def text(self) -> str:
        """Rendered text content of the node."""

    def click(self) -> None:
        """Click the node."""

    def type(self, text: str) -> None:
        """Enter plain text into the node."""

    def press(self, key: str) -> None:
        """Press a single key (e.g. ``Enter``) while the node has focus."""

    def submit(self) -> None:
        """Submit the form the node belongs to."""

    def is_displayed(self) -> bool:
        """Return whether the node is visible."""

    def is_enabled(self) -> bool:
        """Return whether the node accepts interaction."""


class BrowserSession(ABC):
    """Interface for an automation-capable browser session."""

    implicit_timeout: float = 10.0
    explicit_timeout: float = 10.0
    poll_interval: float = 0.5

    @abstractmethod
    def start(self) -> None:
        """Launch the browser session."""

    @abstractmethod
    def stop(self) -> None:
        """Terminate the browser session. Safe to call more than once."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """Whether a live browser is attached to this session."""

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Load ``url`` in the current page."""

    @abstractmethod
    def query(self, locator: Locator) -> Optional[Element]:
        """Return the first element matching ``locator`` without waiting."""

    @abstractmethod
    def find(self, locator: Locator) -> Element:
        """Return the first match, waiting up to the implicit timeout."""

    @abstractmethod
    def find_all(self, locator: Locator) -> List[Element]:
        """Return all matches once at least one appears or the implicit timeout passes."""

    @abstractmethod
    def drag_by(self, element: Element, dx: int, dy: int) -> None:
        """Press on ``element``, move the pointer by ``(dx, dy)`` and release."""

    def wait_until(self, predicate: "ReadinessPredicate", timeout: Optional[float] = None) -> Element:
        """Block until ``predicate`` holds, using the explicit timeout by default."""

        from .waits import wait_until

        return wait_until(
            self,
            predicate,
            timeout=self.explicit_timeout if timeout is None else timeout,
            poll_interval=self.poll_interval,
        )
