"""
Shared fixtures for the photobrowse test suite.

Provides page/image factories and a fake gallery client that serves
canned pages by cursor, so session and loader tests never touch the
network.
"""

from __future__ import annotations

import threading
from typing import Optional

import pytest

from photobrowse.config.settings import ClientSettings
from photobrowse.gallery.errors import FetchFailure, GalleryError
from photobrowse.gallery.models import GalleryFilter, Image, Link, Page

BASE_URL = "http://gallery.test"


# ---------------------------------------------------------------------------
# Sample data factories
# ---------------------------------------------------------------------------


def make_image(name: str) -> Image:
    """An image whose id and URLs are derived from ``name``."""
    return Image(
        id=name,
        view_url=f"{BASE_URL}/photos/{name}/view",
        thumb_url=f"{BASE_URL}/photos/{name}/thumb",
    )


def make_page(names: list[str], **links: str) -> Page:
    """A page of images named ``names``; keyword args become links, e.g. next="p2"."""
    return Page(
        images=tuple(make_image(n) for n in names),
        links={name: Link(name=name, cursor=cursor, url=f"{BASE_URL}{cursor}") for name, cursor in links.items()},
    )


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeGalleryClient:
    """
    Serves pages from a dict keyed by (filter path, cursor).

    A cursor listed in ``failures`` raises FetchFailure. A cursor listed in
    ``gates`` blocks its worker thread until the test sets the event.
    """

    def __init__(self, pages: Optional[dict] = None) -> None:
        self.pages: dict[tuple[str, Optional[str]], Page] = dict(pages or {})
        self.failures: set[Optional[str]] = set()
        self.gates: dict[Optional[str], threading.Event] = {}
        self.calls: list[tuple[GalleryFilter, Optional[str]]] = []
        self.closed = False

    def add(self, page: Page, cursor: Optional[str] = None, path: str = "/photos") -> None:
        self.pages[(path, cursor)] = page

    def gate(self, cursor: Optional[str]) -> threading.Event:
        event = threading.Event()
        self.gates[cursor] = event
        return event

    def fetch_page(self, gallery_filter: GalleryFilter, cursor: Optional[str] = None) -> Page:
        self.calls.append((gallery_filter, cursor))
        gate = self.gates.get(cursor)
        if gate is not None and not gate.wait(timeout=5):
            raise FetchFailure(f"gate for {cursor} never opened")
        if cursor in self.failures:
            raise FetchFailure(f"boom at {cursor}", url=f"{BASE_URL}{gallery_filter.path}", status_code=500)
        try:
            return self.pages[(gallery_filter.path, cursor)]
        except KeyError:
            raise FetchFailure(f"no page for {gallery_filter.path} cursor={cursor}", status_code=404)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def client_settings() -> ClientSettings:
    return ClientSettings(base_url=BASE_URL)


@pytest.fixture
def fake_client() -> FakeGalleryClient:
    return FakeGalleryClient()


@pytest.fixture
def errors() -> list[GalleryError]:
    """Error sink that collects everything reported to it."""
    return []
