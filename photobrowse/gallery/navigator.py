"""
Viewer navigator.

Tracks which image of the current page the full-screen viewer shows.
Stepping inside the page is handled here, synchronously. Stepping past
either edge produces a LoadRequest for the adjacent page instead; the
caller hands that to the page loader and feeds the resulting PageLoaded
event back through ``apply``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from photobrowse.gallery.errors import EmptyPageError, GalleryError
from photobrowse.gallery.models import (
    Direction,
    Image,
    Landing,
    LoadRequest,
    Page,
    PageLoaded,
    ViewerState,
)

logger = logging.getLogger(__name__)


class ViewerNavigator:
    """Position of the viewer within the currently loaded page."""

    def __init__(self, error_sink: Optional[Callable[[GalleryError], None]] = None) -> None:
        self._page: Optional[Page] = None
        self._state = ViewerState()
        self._error_sink = error_sink

    @property
    def page(self) -> Optional[Page]:
        return self._page

    @property
    def state(self) -> ViewerState:
        return self._state

    @property
    def current_image(self) -> Optional[Image]:
        """Image the viewer displays right now, read from the page on every call."""
        if not self._state.visible or self._page is None or self._page.is_empty:
            return None
        return self._page.images[self._state.current_index]

    @property
    def current_image_url(self) -> Optional[str]:
        image = self.current_image
        return image.view_url if image is not None else None

    # ------------------------------------------------------------------
    # Viewer transitions
    # ------------------------------------------------------------------

    def show(self, index: int) -> ViewerState:
        """Open the viewer on ``index`` of the current page."""
        count = len(self._page) if self._page is not None else 0
        if not 0 <= index < count:
            raise IndexError(f"Image index {index} out of range for page of {count}")
        self._state = ViewerState(current_index=index, visible=True)
        return self._state

    def toggle(self) -> ViewerState:
        self._state = replace(self._state, visible=not self._state.visible)
        return self._state

    def hide(self) -> ViewerState:
        self._state = replace(self._state, visible=False)
        return self._state

    def next(self) -> Optional[LoadRequest]:
        return self._step(Direction.FORWARD)

    def previous(self) -> Optional[LoadRequest]:
        return self._step(Direction.BACKWARD)

    def _step(self, direction: Direction) -> Optional[LoadRequest]:
        if self._page is None or self._page.is_empty:
            return None

        offset = 1 if direction is Direction.FORWARD else -1
        target = self._state.current_index + offset
        if 0 <= target < len(self._page):
            self._state = ViewerState(current_index=target, visible=True)
            return None

        link = self._page.link_for(direction)
        if link is None:
            logger.debug("No '%s' link at page edge; staying at %d", direction.link_name, self._state.current_index)
            return None

        landing = Landing.first() if direction is Direction.FORWARD else Landing.last()
        return LoadRequest(cursor=link.cursor, reveal=True, landing=landing)

    # ------------------------------------------------------------------
    # Page replacement
    # ------------------------------------------------------------------

    def apply(self, event: PageLoaded) -> ViewerState:
        """Swap in a freshly loaded page and land on the requested image."""
        page = event.page
        request = event.request
        visible = True if request.reveal else self._state.visible

        try:
            index = request.landing.resolve(len(page))
        except EmptyPageError as exc:
            self._page = page
            self._state = ViewerState(current_index=0, visible=False)
            if request.reveal:
                logger.warning("Load #%d returned an empty page; viewer closed", event.sequence)
                if self._error_sink is not None:
                    self._error_sink(exc)
            return self._state

        self._page = page
        self._state = ViewerState(current_index=index, visible=visible)
        return self._state

    def reset(self) -> ViewerState:
        """Forget the page; keep whether the viewer is open."""
        self._page = None
        self._state = ViewerState(current_index=0, visible=self._state.visible)
        return self._state
