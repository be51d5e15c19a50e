"""Page object for the venue map."""

from __future__ import annotations

import logging
from typing import List

from ..browser.base import BrowserSession, Element, Locator, LocatorStrategy
from ..browser.waits import element_clickable, element_present, element_visible

LOGGER = logging.getLogger(__name__)

MAP_URL = "https://staging-website.privilee.ae/map"


class MapLocators:
    """Selectors for every affordance on the map page."""

    VENUE_MARKER = Locator(LocatorStrategy.CLASS_NAME, "venue-marker", "venue marker")
    SEARCH_INPUT = Locator(
        LocatorStrategy.CSS_SELECTOR,
        "input[placeholder='Search venues']",
        "search input",
    )
    VENUE_LIST_ITEM = Locator(LocatorStrategy.CLASS_NAME, "venue-list-item", "venue list item")
    NO_RESULTS_BANNER = Locator(
        LocatorStrategy.XPATH,
        "//p[contains(text(),'No results found')]",
        "no-results banner",
    )
    ZOOM_IN_BUTTON = Locator(LocatorStrategy.CLASS_NAME, "zoom-in-button", "zoom-in button")
    ZOOM_OUT_BUTTON = Locator(LocatorStrategy.CLASS_NAME, "zoom-out-button", "zoom-out button")
    FILTER_BUTTON = Locator(LocatorStrategy.CLASS_NAME, "filter-button", "filter button")
    GYM_FILTER_CHIP = Locator(
        LocatorStrategy.XPATH,
        "//button[contains(text(),'Gym')]",
        "gym filter chip",
    )
    MAP_CONTAINER = Locator(LocatorStrategy.CLASS_NAME, "map-container", "map container")
    VENUE_DETAILS = Locator(LocatorStrategy.CLASS_NAME, "venue-details", "venue details panel")

    @classmethod
    def all(cls) -> dict[str, Locator]:
        return {
            name: value
            for name, value in vars(cls).items()
            if isinstance(value, Locator)
        }


class MapPage:
    """User-level operations on the venue map, expressed through :class:`MapLocators`."""

    def __init__(self, session: BrowserSession) -> None:
        self.session = session

    def open(self) -> None:
        self.session.navigate(MAP_URL)

    def markers(self) -> List[Element]:
        return self.session.find_all(MapLocators.VENUE_MARKER)

    def wait_for_marker(self) -> Element:
        return self.session.wait_until(element_present(MapLocators.VENUE_MARKER))

    def search(self, text: str, *, submit_form: bool = False) -> None:
        """Type ``text`` into the search box, then press Return or submit its form."""

        search_box = self.session.find(MapLocators.SEARCH_INPUT)
        search_box.type(text)
        if submit_form:
            search_box.submit()
        else:
            search_box.press("Enter")
        LOGGER.debug("Searched for %r", text)

    def results(self) -> List[Element]:
        return self.session.find_all(MapLocators.VENUE_LIST_ITEM)

    def wait_for_result(self) -> Element:
        return self.session.wait_until(element_present(MapLocators.VENUE_LIST_ITEM))

    def first_result_text(self) -> str:
        return self.session.find(MapLocators.VENUE_LIST_ITEM).text

    def wait_for_no_results_banner(self) -> Element:
        return self.session.wait_until(element_visible(MapLocators.NO_RESULTS_BANNER))

    def zoom_buttons(self) -> tuple[Element, Element]:
        return (
            self.session.find(MapLocators.ZOOM_IN_BUTTON),
            self.session.find(MapLocators.ZOOM_OUT_BUTTON),
        )

    def wait_for_details(self) -> Element:
        return self.session.wait_until(element_visible(MapLocators.VENUE_DETAILS))

    def apply_gym_filter(self) -> None:
        self.session.find(MapLocators.FILTER_BUTTON).click()
        self.session.wait_until(element_clickable(MapLocators.GYM_FILTER_CHIP)).click()

    def map_container(self) -> Element:
        return self.session.find(MapLocators.MAP_CONTAINER)

    def drag_map(self, dx: int, dy: int) -> Element:
        container = self.map_container()
        self.session.drag_by(container, dx, dy)
        return container
