"""Parsing of gallery JSON payloads into Page values."""

from __future__ import annotations

from typing import Any, Optional

from photobrowse.gallery.errors import MalformedResponseError
from photobrowse.gallery.models import Image, Link, Page


class PageParser:
    """
    Turns ``{"data": [...], "links": [...]}`` into a Page.

    Relative hrefs in the payload are made absolute by prefixing
    ``base_url``. Link hrefs are kept verbatim as cursor tokens.
    """

    def __init__(self, base_url: str = "") -> None:
        self._base_url = base_url

    def absolute_url(self, part: str) -> str:
        return f"{self._base_url}{part}"

    def parse(self, payload: Any, url: Optional[str] = None) -> Page:
        if not isinstance(payload, dict):
            raise MalformedResponseError("Page payload is not a JSON object", url=url)

        data = payload.get("data")
        if not isinstance(data, list):
            raise MalformedResponseError("Page payload has no 'data' list", url=url)

        images = [self._parse_image(item, position, url) for position, item in enumerate(data)]
        links = self._parse_links(payload.get("links"), url)
        return Page(images=tuple(images), links=links)

    def _parse_image(self, item: Any, position: int, url: Optional[str]) -> Image:
        if not isinstance(item, dict):
            raise MalformedResponseError(f"Item {position} is not a JSON object", url=url)

        item_links = item.get("links")
        view = item_links.get("view") if isinstance(item_links, dict) else None
        if not isinstance(view, str) or not view:
            raise MalformedResponseError(f"Item {position} has no 'links.view'", url=url)

        thumb = item_links.get("thumb")
        metadata = {key: value for key, value in item.items() if key != "links"}
        return Image(
            id=str(item.get("id", position)),
            view_url=self.absolute_url(view),
            thumb_url=self.absolute_url(thumb) if isinstance(thumb, str) and thumb else None,
            metadata=metadata,
        )

    def _parse_links(self, raw_links: Any, url: Optional[str]) -> dict[str, Link]:
        if raw_links is None:
            return {}
        if not isinstance(raw_links, list):
            raise MalformedResponseError("Page 'links' is not a list", url=url)

        links: dict[str, Link] = {}
        for raw in raw_links:
            if not isinstance(raw, dict):
                raise MalformedResponseError("Page link is not a JSON object", url=url)
            name = raw.get("name")
            href = raw.get("href")
            if not isinstance(name, str) or not isinstance(href, str):
                raise MalformedResponseError("Page link needs string 'name' and 'href'", url=url)
            # Later entries with the same name replace earlier ones
            links[name] = Link(name=name, cursor=href, url=self.absolute_url(href))
        return links
