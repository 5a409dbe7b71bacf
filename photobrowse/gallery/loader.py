"""
Page loader.

Fetches one page for the current filter and hands it to a listener as a
PageLoaded event. Each load is tagged with a sequence number; only the
result of the most recently issued load is ever delivered, so a slow
response can never overwrite the answer to a newer request.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from photobrowse.gallery.errors import FetchFailure, GalleryError
from photobrowse.gallery.models import GalleryFilter, Landing, LoadRequest, Page, PageLoaded

if TYPE_CHECKING:
    from photobrowse.client.http_client import GalleryHttpClient

logger = logging.getLogger(__name__)

PageListener = Callable[[PageLoaded], None]
ErrorSink = Callable[[GalleryError], None]


def log_error(error: GalleryError) -> None:
    """Default error sink: log and move on."""
    logger.error("Gallery error: %s", error)


class PageLoader:
    """Loads pages for one gallery filter and reports the latest result."""

    def __init__(
        self,
        client: "GalleryHttpClient",
        gallery_filter: GalleryFilter,
        listener: Optional[PageListener] = None,
        error_sink: Optional[ErrorSink] = None,
    ) -> None:
        self._client = client
        self._filter = gallery_filter
        self._listener = listener
        self._error_sink = error_sink or log_error
        self._sequence = 0
        self._in_flight: set[int] = set()
        self._latest: Optional[LoadRequest] = None
        self._disposed = False

    @property
    def filter(self) -> GalleryFilter:
        return self._filter

    @filter.setter
    def filter(self, gallery_filter: GalleryFilter) -> None:
        self._filter = gallery_filter

    @property
    def sequence(self) -> int:
        """Sequence number of the most recently issued load."""
        return self._sequence

    @property
    def loading(self) -> bool:
        """True while the latest issued load has not finished."""
        return self._sequence in self._in_flight

    @property
    def pending_request(self) -> Optional[LoadRequest]:
        """The request behind the latest load, while that load is in flight."""
        return self._latest if self.loading else None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def invalidate(self) -> int:
        """Supersede every in-flight load without issuing a new one."""
        self._sequence += 1
        return self._sequence

    def dispose(self) -> None:
        """Stop delivering results, including those of loads already started."""
        self._disposed = True
        self._listener = None

    async def load(
        self,
        cursor: Optional[str] = None,
        reveal: bool = False,
        landing: Optional[Landing] = None,
    ) -> Optional[PageLoaded]:
        """
        Fetch the page at ``cursor`` and deliver it if still current.

        Returns the delivered event, or None when the load failed, was
        superseded by a newer one, or the loader was disposed meanwhile.
        Fetch failures go to the error sink and never propagate.
        """
        request = LoadRequest(cursor=cursor, reveal=reveal, landing=landing or Landing.first())
        return await self.start(request)

    def start(self, request: LoadRequest) -> Awaitable[Optional[PageLoaded]]:
        """
        Issue a load now and return the awaitable that completes it.

        The sequence number is taken immediately, so ``loading`` is already
        true when this returns.
        """
        if self._disposed:
            logger.debug("Ignoring load on disposed loader (cursor=%s)", request.cursor)
            return _nothing()

        sequence = self.invalidate()
        self._in_flight.add(sequence)
        self._latest = request
        logger.debug("Load #%d started: path=%s cursor=%s", sequence, self._filter.path, request.cursor)
        return self._complete(sequence, self._filter, request)

    async def _complete(
        self,
        sequence: int,
        gallery_filter: GalleryFilter,
        request: LoadRequest,
    ) -> Optional[PageLoaded]:
        try:
            if not self._is_current(sequence):
                logger.debug("Load #%d superseded before fetching", sequence)
                return None
            page = await self._fetch(gallery_filter, request.cursor)
        except FetchFailure as exc:
            if self._is_current(sequence):
                logger.warning("Load #%d failed: %s", sequence, exc)
                self._error_sink(exc)
            else:
                logger.debug("Dropping failure of superseded load #%d: %s", sequence, exc)
            return None
        finally:
            self._in_flight.discard(sequence)

        if not self._is_current(sequence):
            logger.debug("Discarding stale page from load #%d (latest is #%d)", sequence, self._sequence)
            return None

        event = PageLoaded(page=page, request=request, sequence=sequence)
        if self._listener is not None:
            self._listener(event)
        return event

    async def _fetch(self, gallery_filter: GalleryFilter, cursor: Optional[str]) -> Page:
        # requests is blocking; keep the event loop free while it runs
        return await asyncio.to_thread(self._client.fetch_page, gallery_filter, cursor)

    def _is_current(self, sequence: int) -> bool:
        return not self._disposed and sequence == self._sequence


async def _nothing() -> None:
    return None
