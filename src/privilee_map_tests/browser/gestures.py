"""Compound pointer gestures."""

from __future__ import annotations

import logging

from playwright.sync_api import ElementHandle, Page

from .base import BrowserActionError

LOGGER = logging.getLogger(__name__)


def drag_by(page: Page, handle: ElementHandle, dx: int, dy: int) -> None:
    """Press and hold on the centre of ``handle``, move by ``(dx, dy)`` CSS pixels, release."""

    handle.scroll_into_view_if_needed()
    box = handle.bounding_box()
    if box is None:
        raise BrowserActionError("Cannot drag an element that is not rendered")
    start_x = box["x"] + box["width"] / 2
    start_y = box["y"] + box["height"] / 2
    LOGGER.debug("Dragging from (%.1f, %.1f) by (%s, %s)", start_x, start_y, dx, dy)
    page.mouse.move(start_x, start_y)
    page.mouse.down()
    page.mouse.move(start_x + dx, start_y + dy)
    page.mouse.up()
