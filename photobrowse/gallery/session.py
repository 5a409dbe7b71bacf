"""
Gallery session: one browsing session over a filtered image collection.

Wires a PageLoader and a ViewerNavigator together and publishes a
GallerySnapshot to subscribed renderers (grid, nav bar, viewer overlay)
after every state change.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from photobrowse.client.http_client import GalleryHttpClient
from photobrowse.config.settings import ClientSettings, get_settings
from photobrowse.gallery.loader import ErrorSink, PageLoader, log_error
from photobrowse.gallery.models import (
    GalleryFilter,
    GallerySnapshot,
    Landing,
    LoadRequest,
    PageLoaded,
    ViewerState,
)
from photobrowse.gallery.navigator import ViewerNavigator

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[GallerySnapshot], None]


class GallerySession:
    """
    Browsing state for one gallery filter.

    All methods must be called from the event loop that awaits them;
    the only concurrency is the loader's fetch running in a worker thread.
    """

    def __init__(
        self,
        gallery_filter: Optional[GalleryFilter] = None,
        client: Optional[GalleryHttpClient] = None,
        settings: Optional[ClientSettings] = None,
        error_sink: Optional[ErrorSink] = None,
    ) -> None:
        self._settings = settings or get_settings().client
        self._owns_client = client is None
        self._client = client or GalleryHttpClient(self._settings)
        self._filter = gallery_filter or GalleryFilter(path=self._settings.default_path)
        self._error_sink = error_sink or log_error
        self._subscribers: list[SnapshotCallback] = []
        self._navigator = ViewerNavigator(error_sink=self._error_sink)
        self._loader = PageLoader(
            self._client,
            self._filter,
            listener=self._on_page_loaded,
            error_sink=self._error_sink,
        )
        self._disposed = False

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def filter(self) -> GalleryFilter:
        return self._filter

    @property
    def navigator(self) -> ViewerNavigator:
        return self._navigator

    @property
    def loader(self) -> PageLoader:
        return self._loader

    @property
    def state(self) -> ViewerState:
        return self._navigator.state

    def snapshot(self) -> GallerySnapshot:
        return GallerySnapshot(
            filter=self._filter,
            page=self._navigator.page,
            viewer=self._navigator.state,
            image_url=self._navigator.current_image_url,
            loading=self._loader.loading,
        )

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a renderer. Returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ------------------------------------------------------------------
    # Page loading
    # ------------------------------------------------------------------

    async def mount(self) -> Optional[PageLoaded]:
        """Load the first page of the current filter."""
        return await self._load(LoadRequest())

    async def follow(self, cursor: Optional[str], index: Optional[int] = None) -> Optional[PageLoaded]:
        """Load the page a nav-bar link points at, without opening the viewer."""
        return await self._load(LoadRequest(cursor=cursor, landing=Landing.from_requested_index(index)))

    async def follow_link(self, name: str) -> Optional[PageLoaded]:
        page = self._navigator.page
        link = page.links.get(name) if page is not None else None
        if link is None:
            logger.info("No '%s' link on the current page", name)
            return None
        return await self.follow(link.cursor)

    async def set_filter(self, gallery_filter: GalleryFilter) -> Optional[PageLoaded]:
        """
        Switch to another filter and load its first page.

        The caller decides what counts as a new filter by passing a new
        object; passing the current one again does nothing.
        """
        if gallery_filter is self._filter:
            return None

        logger.info(
            "Filter changed: %s %s => %s %s",
            self._filter.path, dict(self._filter.params),
            gallery_filter.path, dict(gallery_filter.params),
        )
        self._filter = gallery_filter
        self._loader.filter = gallery_filter
        self._loader.invalidate()
        self._navigator.reset()
        self._publish()
        return await self._load(LoadRequest())

    async def _load(self, request: LoadRequest) -> Optional[PageLoaded]:
        if self._disposed:
            return None
        pending = self._loader.start(request)
        # Renderers see the loading flag before the fetch suspends us
        self._publish()
        event = await pending
        if event is None and not self._disposed:
            self._publish()
        return event

    def _on_page_loaded(self, event: PageLoaded) -> None:
        if self._disposed:
            return
        self._navigator.apply(event)
        self._publish()

    # ------------------------------------------------------------------
    # Viewer
    # ------------------------------------------------------------------

    def show(self, index: int) -> ViewerState:
        state = self._navigator.show(index)
        self._drop_pending_reveal()
        self._publish()
        return state

    def toggle(self) -> ViewerState:
        state = self._navigator.toggle()
        self._drop_pending_reveal()
        self._publish()
        return state

    def close(self) -> ViewerState:
        state = self._navigator.hide()
        self._drop_pending_reveal()
        self._publish()
        return state

    async def next(self) -> ViewerState:
        request = self._navigator.next()
        return await self._after_step(request)

    async def previous(self) -> ViewerState:
        request = self._navigator.previous()
        return await self._after_step(request)

    async def _after_step(self, request: Optional[LoadRequest]) -> ViewerState:
        if request is None:
            self._drop_pending_reveal()
            self._publish()
        else:
            await self._load(request)
        return self._navigator.state

    def _drop_pending_reveal(self) -> None:
        # A boundary load only stands while it is the latest thing the user asked for
        pending = self._loader.pending_request
        if pending is not None and pending.reveal:
            logger.debug("Viewer action supersedes pending load (cursor=%s)", pending.cursor)
            self._loader.invalidate()

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Tear down; results of fetches still in flight are never applied."""
        if self._disposed:
            return
        self._disposed = True
        self._loader.dispose()
        self._subscribers.clear()
        if self._owns_client:
            self._client.close()

    def _publish(self) -> None:
        if self._disposed:
            return
        snapshot = self.snapshot()
        for callback in list(self._subscribers):
            callback(snapshot)
