"""HTTP client for gallery page requests."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from photobrowse.client.parser import PageParser
from photobrowse.config.settings import ClientSettings, get_settings
from photobrowse.gallery.errors import FetchFailure, MalformedResponseError
from photobrowse.gallery.models import GalleryFilter, Page

logger = logging.getLogger(__name__)


class GalleryHttpClient:
    """
    Fetches one page of image metadata per call.

    Single attempt per request: failures surface as FetchFailure and the
    caller decides what to do with them.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        session: Optional[requests.Session] = None,
        parser: Optional[PageParser] = None,
    ) -> None:
        self._settings = settings or get_settings().client
        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": self._settings.user_agent,
            "Accept": "application/json",
        })
        self._parser = parser or PageParser(self._settings.base_url)

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    def absolute_url(self, part: str) -> str:
        return f"{self._settings.base_url}{part}"

    def fetch_page(self, gallery_filter: GalleryFilter, cursor: Optional[str] = None) -> Page:
        """Request the page at ``cursor`` (first page when None) and parse it."""
        url = self.absolute_url(gallery_filter.path)
        params = gallery_filter.query_params(cursor, cursor_param=self._settings.cursor_param)
        payload = self.get_json(url, params)
        page = self._parser.parse(payload, url=url)
        logger.debug(
            "Fetched %d images from %s (cursor=%s, links=%s)",
            len(page), url, cursor, sorted(page.links),
        )
        return page

    def get_json(self, url: str, params: Optional[dict[str, str]] = None) -> Any:
        """GET ``url`` and return the decoded JSON body."""
        try:
            response = self._session.get(
                url,
                params=params or None,
                timeout=self._settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise FetchFailure(f"Request to {url} failed: {exc}", url=url) from exc

        if response.status_code >= 400:
            raise FetchFailure(
                f"HTTP request failed with status {response.status_code} for URL: {url}",
                url=url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"Response from {url} is not valid JSON", url=url,
                status_code=response.status_code,
            ) from exc

    def close(self) -> None:
        self._session.close()
