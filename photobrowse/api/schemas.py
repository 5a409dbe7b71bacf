"""Pydantic response models for the reference gallery API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PhotoLinks(BaseModel):
    """Relative links of one photo."""

    view: str
    thumb: Optional[str] = None


class PhotoResponse(BaseModel):
    """A single photo's metadata."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    date_taken: str = Field("", alias="dateTaken")
    tags: list[str] = []
    links: PhotoLinks


class NavLink(BaseModel):
    """A named pagination link; ``href`` is an opaque cursor."""

    name: str
    href: str


class PhotoPageResponse(BaseModel):
    """One page of photos with its navigation links."""

    data: list[PhotoResponse]
    links: list[NavLink] = []


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
