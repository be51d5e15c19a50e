from __future__ import annotations

from typing import Callable, Optional

import pytest

from privilee_map_tests.browser.base import (
    BrowserSession,
    Element,
    EnvironmentUnavailableError,
    Locator,
    LocatorMissError,
    StaleElementError,
)
from privilee_map_tests.pages.map_page import MAP_URL, MapLocators


class FakeElement:
    def __init__(
        self,
        text: str = "",
        *,
        displayed: bool = True,
        enabled: bool = True,
        on_click: Optional[Callable[[], None]] = None,
        on_enter: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._text = text
        self.displayed = displayed
        self.enabled = enabled
        self.stale = False
        self.on_click = on_click
        self.on_enter = on_enter
        self.clicks = 0
        self.typed = ""
        self.pressed: list[str] = []
        self.submitted = 0

    def _ensure_attached(self) -> None:
        if self.stale:
            raise StaleElementError("element is not attached to the DOM")

    @property
    def text(self) -> str:
        self._ensure_attached()
        return self._text

    def click(self) -> None:
        self._ensure_attached()
        self.clicks += 1
        if self.on_click:
            self.on_click()

    def type(self, text: str) -> None:
        self._ensure_attached()
        self.typed += text

    def press(self, key: str) -> None:
        self._ensure_attached()
        self.pressed.append(key)
        if key == "Enter" and self.on_enter:
            self.on_enter(self.typed)

    def submit(self) -> None:
        self._ensure_attached()
        self.submitted += 1
        if self.on_enter:
            self.on_enter(self.typed)

    def is_displayed(self) -> bool:
        self._ensure_attached()
        return self.displayed

    def is_enabled(self) -> bool:
        self._ensure_attached()
        return self.enabled


class FakeBrowserSession(BrowserSession):
    implicit_timeout = 0.05
    explicit_timeout = 0.2
    poll_interval = 0.01

    def __init__(
        self,
        on_navigate: Optional[Callable[["FakeBrowserSession"], None]] = None,
        *,
        fail_start: bool = False,
        fail_stop: bool = False,
    ) -> None:
        self.dom: dict[Locator, list[FakeElement]] = {}
        self.on_navigate = on_navigate
        self.fail_start = fail_start
        self.fail_stop = fail_stop
        self.started = False
        self.start_calls = 0
        self.stop_calls = 0
        self.visited: list[str] = []
        self.drags: list[tuple[Element, int, int]] = []

    @property
    def is_active(self) -> bool:
        return self.started

    def start(self) -> None:
        self.start_calls += 1
        if self.fail_start:
            raise EnvironmentUnavailableError("chromium could not be launched")
        self.started = True

    def stop(self) -> None:
        self.stop_calls += 1
        if self.fail_stop:
            raise RuntimeError("browser process already gone")
        self.started = False

    def _require_active(self) -> None:
        assert self.started, "session used outside its lifetime"

    def navigate(self, url: str) -> None:
        self._require_active()
        self.visited.append(url)
        self.dom = {}
        if self.on_navigate:
            self.on_navigate(self)

    def add(self, locator: Locator, *elements: FakeElement) -> None:
        self.dom.setdefault(locator, []).extend(elements)

    def query(self, locator: Locator) -> Optional[Element]:
        self._require_active()
        elements = self.dom.get(locator) or []
        return elements[0] if elements else None

    def find(self, locator: Locator) -> Element:
        element = self.query(locator)
        if element is None:
            raise LocatorMissError(locator, self.implicit_timeout)
        return element

    def find_all(self, locator: Locator) -> list[Element]:
        self._require_active()
        return list(self.dom.get(locator) or [])

    def drag_by(self, element: Element, dx: int, dy: int) -> None:
        self._require_active()
        self.drags.append((element, dx, dy))


class FakeMapSite:
    """Scripted venue map that reacts to searches, filters and marker clicks."""

    def __init__(
        self,
        venues: tuple[str, ...] = ("Reset Fitness JLT", "Beach Club Palm Jumeirah", "Gym Nation"),
        gyms: tuple[str, ...] = ("Gym Nation", "Reset Fitness JLT"),
        markers: int = 3,
        details_on_click: bool = True,
    ) -> None:
        self.venues = venues
        self.gyms = gyms
        self.markers = markers
        self.details_on_click = details_on_click
        self.fixed_results: Optional[tuple[str, ...]] = None

    def load(self, session: FakeBrowserSession) -> None:
        def _show_details() -> None:
            if self.details_on_click:
                session.add(MapLocators.VENUE_DETAILS, FakeElement("Venue details"))

        def _search(text: str) -> None:
            session.dom.pop(MapLocators.VENUE_LIST_ITEM, None)
            session.dom.pop(MapLocators.NO_RESULTS_BANNER, None)
            if self.fixed_results is not None:
                matches = list(self.fixed_results)
            else:
                matches = [venue for venue in self.venues if text.lower() in venue.lower()]
            if matches:
                session.add(MapLocators.VENUE_LIST_ITEM, *(FakeElement(name) for name in matches))
            else:
                session.add(MapLocators.NO_RESULTS_BANNER, FakeElement("No results found"))

        def _apply_gym() -> None:
            session.dom.pop(MapLocators.VENUE_LIST_ITEM, None)
            session.add(MapLocators.VENUE_LIST_ITEM, *(FakeElement(name) for name in self.gyms))

        def _open_filters() -> None:
            session.add(MapLocators.GYM_FILTER_CHIP, FakeElement("Gym", on_click=_apply_gym))

        session.add(
            MapLocators.VENUE_MARKER,
            *(FakeElement(on_click=_show_details) for _ in range(self.markers)),
        )
        session.add(MapLocators.SEARCH_INPUT, FakeElement(on_enter=_search))
        session.add(MapLocators.ZOOM_IN_BUTTON, FakeElement("+"))
        session.add(MapLocators.ZOOM_OUT_BUTTON, FakeElement("-"))
        session.add(MapLocators.FILTER_BUTTON, FakeElement("Filters", on_click=_open_filters))
        session.add(MapLocators.MAP_CONTAINER, FakeElement())


@pytest.fixture
def fake_element() -> type[FakeElement]:
    return FakeElement


@pytest.fixture
def fake_session_cls() -> type[FakeBrowserSession]:
    return FakeBrowserSession


@pytest.fixture
def site() -> FakeMapSite:
    return FakeMapSite()


@pytest.fixture
def sessions() -> list[FakeBrowserSession]:
    """Every session handed out by ``session_factory`` during a test."""

    return []


@pytest.fixture
def session_factory(site: FakeMapSite, sessions: list[FakeBrowserSession]):
    def _factory() -> FakeBrowserSession:
        session = FakeBrowserSession(on_navigate=site.load)
        sessions.append(session)
        return session

    return _factory


@pytest.fixture
def session(site: FakeMapSite) -> FakeBrowserSession:
    session = FakeBrowserSession(on_navigate=site.load)
    session.start()
    yield session
    session.stop()


@pytest.fixture
def map_url() -> str:
    return MAP_URL
