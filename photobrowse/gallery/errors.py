"""Exception types raised and reported by the gallery core."""

from __future__ import annotations

from typing import Optional


class GalleryError(Exception):
    """Base class for every error the gallery core reports."""


class FetchFailure(GalleryError):
    """A page request failed: transport error, non-2xx status, or bad payload."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponseError(FetchFailure):
    """The server answered 2xx but the body is not a valid page payload."""


class EmptyPageError(GalleryError):
    """A display index was requested on a page that holds no images."""
