"""Cursor-based pagination utilities."""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Optional


def encode_cursor(offset: int) -> str:
    """Encode an integer offset into an opaque cursor string."""
    return base64.urlsafe_b64encode(json.dumps({"o": offset}).encode()).decode()


def decode_cursor(cursor: str) -> int:
    """Decode cursor string back to integer offset. Returns 0 on invalid input."""
    try:
        data = json.loads(base64.urlsafe_b64decode(cursor.encode()))
        return max(0, int(data.get("o", 0)))
    except (binascii.Error, ValueError, TypeError, AttributeError):
        return 0


@dataclass
class Window:
    """One page worth of items plus the cursors of its neighbours."""

    items: list[Any]
    offset: int
    page_size: int
    total: int
    next_cursor: Optional[str] = None
    previous_cursor: Optional[str] = None

    @classmethod
    def from_results(
        cls,
        all_items: list[Any],
        offset: int,
        page_size: int,
    ) -> "Window":
        """Slice results at offset and build cursors for both neighbours."""
        total = len(all_items)
        # A cursor past the end lands on the last full window
        if offset >= total and total:
            offset = max(0, total - page_size)
        items = all_items[offset: offset + page_size]

        next_cursor = None
        if offset + page_size < total:
            next_cursor = encode_cursor(offset + page_size)

        previous_cursor = None
        if offset > 0:
            previous_cursor = encode_cursor(max(0, offset - page_size))

        return cls(
            items=items,
            offset=offset,
            page_size=page_size,
            total=total,
            next_cursor=next_cursor,
            previous_cursor=previous_cursor,
        )
