"""Photo listing routes."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Request

from photobrowse.api.catalog import PhotoRecord
from photobrowse.api.pagination import Window, decode_cursor
from photobrowse.api.schemas import (
    ErrorResponse,
    NavLink,
    PhotoLinks,
    PhotoPageResponse,
    PhotoResponse,
)

router = APIRouter(tags=["photos"])


def _to_response(record: PhotoRecord) -> PhotoResponse:
    return PhotoResponse(
        id=record.id,
        name=record.name,
        date_taken=record.date_taken,
        tags=list(record.tags),
        links=PhotoLinks(view=record.view_path, thumb=record.thumb_path),
    )


@router.get("/photos", response_model=PhotoPageResponse)
def list_photos(
    request: Request,
    c: str | None = Query(None, description="Pagination cursor"),
    tag: str | None = Query(None, description="Only photos carrying this tag"),
    order: Literal["asc", "desc"] = Query("asc", description="Sort by capture date"),
    page_size: int | None = Query(None, ge=1, description="Photos per page"),
) -> PhotoPageResponse:
    """Return one page of photos with next/previous cursor links."""
    catalog = request.app.state.catalog
    api_settings = request.app.state.settings.api

    size = min(page_size or api_settings.default_page_size, api_settings.max_page_size)
    records = catalog.find(tag=tag, descending=order == "desc")
    offset = decode_cursor(c) if c else 0
    window = Window.from_results(records, offset=offset, page_size=size)

    links = []
    if window.next_cursor:
        links.append(NavLink(name="next", href=window.next_cursor))
    if window.previous_cursor:
        links.append(NavLink(name="previous", href=window.previous_cursor))

    return PhotoPageResponse(
        data=[_to_response(record) for record in window.items],
        links=links,
    )


@router.get(
    "/photos/{photo_id}",
    response_model=PhotoResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_photo(request: Request, photo_id: str) -> PhotoResponse:
    """Return a single photo's metadata."""
    record = request.app.state.catalog.get(photo_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No photo with id {photo_id}")
    return _to_response(record)
