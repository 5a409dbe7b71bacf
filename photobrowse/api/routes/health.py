"""Health route."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["system"])


@router.get("/health")
def health(request: Request) -> dict:
    """Liveness check, with the catalog size for a quick sanity look."""
    return {"status": "ok", "photos": len(request.app.state.catalog)}
