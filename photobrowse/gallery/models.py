"""
Value types for the gallery core.

All of these are frozen dataclasses. State transitions build new values
instead of mutating old ones, so a renderer holding a Page or a
ViewerState never sees it change underneath it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from photobrowse.gallery.errors import EmptyPageError


def _frozen_mapping(value: Optional[Mapping]) -> Mapping:
    return MappingProxyType(dict(value or {}))


# ---------------------------------------------------------------------------
# Filter: which collection endpoint and query constraints define a gallery
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GalleryFilter:
    """
    Collection path plus fixed query parameters.

    A session treats a filter as replaced only when it receives a
    different object; it never compares params itself.
    """

    path: str = "/photos"
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", _frozen_mapping(self.params))

    def query_params(self, cursor: Optional[str] = None, cursor_param: str = "c") -> dict[str, str]:
        """Filter params, plus the cursor under ``cursor_param`` when one is given."""
        query = dict(self.params)
        if cursor:
            query[cursor_param] = cursor
        return query


# ---------------------------------------------------------------------------
# Page contents
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Image:
    """One entry of a page. Identity is its position in the page."""

    # Server-side id, or the position in the page when the server sent none
    id: str

    # Absolute URL of the full-size rendition
    view_url: str

    # Absolute URL of the thumbnail, when the server links one
    thumb_url: Optional[str] = None

    # Everything else the server sent for this item, untouched
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _frozen_mapping(self.metadata))


@dataclass(frozen=True)
class Link:
    """A named pagination handle from the server, e.g. "next" or "previous"."""

    name: str

    # Opaque token echoed back as the cursor parameter
    cursor: str

    # base_url + href, for renderers that display the link
    url: str


class Direction(enum.Enum):
    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def link_name(self) -> str:
        return LINK_NAMES[self]


# The only place link names are spelled out
LINK_NAMES: Mapping[Direction, str] = MappingProxyType({
    Direction.FORWARD: "next",
    Direction.BACKWARD: "previous",
})


@dataclass(frozen=True)
class Page:
    """One fetched batch of images with its named navigation links."""

    images: tuple[Image, ...] = ()
    links: Mapping[str, Link] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "images", tuple(self.images))
        object.__setattr__(self, "links", _frozen_mapping(self.links))

    def __len__(self) -> int:
        return len(self.images)

    @property
    def is_empty(self) -> bool:
        return not self.images

    def link_for(self, direction: Direction) -> Optional[Link]:
        return self.links.get(direction.link_name)


# ---------------------------------------------------------------------------
# Viewer position
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ViewerState:
    """
    Position of the full-screen viewer inside the current page.

    ``current_index`` only means something relative to the page it was
    computed for; a new page always comes with a freshly resolved index.
    """

    current_index: int = 0
    visible: bool = False


class LandingKind(enum.Enum):
    FIRST_OF_PAGE = "first"
    LAST_OF_PAGE = "last"
    AT_INDEX = "index"


@dataclass(frozen=True)
class Landing:
    """Where the viewer lands on a page that has just been loaded."""

    kind: LandingKind = LandingKind.FIRST_OF_PAGE
    index: int = 0

    @classmethod
    def first(cls) -> "Landing":
        return cls(LandingKind.FIRST_OF_PAGE)

    @classmethod
    def last(cls) -> "Landing":
        return cls(LandingKind.LAST_OF_PAGE)

    @classmethod
    def at(cls, index: int) -> "Landing":
        if index < 0:
            raise ValueError(f"Landing index must be non-negative, got {index}")
        if index == 0:
            return cls.first()
        return cls(LandingKind.AT_INDEX, index)

    @classmethod
    def from_requested_index(cls, index: Optional[int]) -> "Landing":
        """
        Translate the numeric form used by navigation links.

        None or 0 lands on the first image, any negative value on the last
        image, anything else on that literal index.
        """
        if not index:
            return cls.first()
        if index < 0:
            return cls.last()
        return cls.at(index)

    def resolve(self, count: int) -> int:
        """Concrete index for a page of ``count`` images."""
        if count <= 0:
            raise EmptyPageError(f"Cannot land on {self.kind.value} image of an empty page")
        if self.kind is LandingKind.LAST_OF_PAGE:
            return count - 1
        if self.kind is LandingKind.AT_INDEX:
            return min(self.index, count - 1)
        return 0


# ---------------------------------------------------------------------------
# Messages between navigator, loader and session
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadRequest:
    """Ask the page loader for a page; emitted when the viewer runs off an edge."""

    cursor: Optional[str] = None
    reveal: bool = False
    landing: Landing = field(default_factory=Landing.first)


@dataclass(frozen=True)
class PageLoaded:
    """A load finished and is still the latest one issued."""

    page: Page
    request: LoadRequest
    sequence: int


@dataclass(frozen=True)
class GallerySnapshot:
    """Everything a grid, nav bar or viewer overlay needs to render."""

    filter: GalleryFilter
    page: Optional[Page]
    viewer: ViewerState
    image_url: Optional[str]
    loading: bool = False

    @property
    def images(self) -> tuple[Image, ...]:
        return self.page.images if self.page is not None else ()

    @property
    def links(self) -> Mapping[str, Link]:
        return self.page.links if self.page is not None else MappingProxyType({})
