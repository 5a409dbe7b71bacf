"""
Photo catalog behind the reference gallery API.

Metadata only: the catalog knows ids, names, capture dates and tags, and
never touches image bytes.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhotoRecord:
    """One photo as listed by the API."""

    # Stable id, used in the view/thumb paths
    id: str

    # Original file name
    name: str = ""

    # ISO 8601 capture timestamp; empty when unknown
    date_taken: str = ""

    tags: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, raw: dict) -> "PhotoRecord":
        if "id" not in raw:
            raise ValueError(f"Catalog entry without 'id': {raw!r}")
        return cls(
            id=str(raw["id"]),
            name=str(raw.get("name", "")),
            date_taken=str(raw.get("dateTaken", raw.get("date_taken", ""))),
            tags=tuple(str(tag) for tag in raw.get("tags", ())),
        )

    @property
    def view_path(self) -> str:
        return f"/photos/{self.id}/view"

    @property
    def thumb_path(self) -> str:
        return f"/photos/{self.id}/thumb"


class PhotoCatalog:
    """In-memory list of photos, sortable by capture date and filterable by tag."""

    def __init__(self, records: Iterable[PhotoRecord] = ()) -> None:
        self._records: list[PhotoRecord] = []
        self._by_id: dict[str, PhotoRecord] = {}
        for record in records:
            self.add(record)

    @classmethod
    def from_json_file(cls, path: Path) -> "PhotoCatalog":
        """Load a catalog from a JSON file holding a list of photo objects."""
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, list):
            raise ValueError(f"Catalog file {path} must contain a JSON list")
        catalog = cls(PhotoRecord.from_dict(entry) for entry in raw)
        logger.info("Loaded %d photos from %s", len(catalog), path)
        return catalog

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: PhotoRecord) -> None:
        if record.id in self._by_id:
            raise ValueError(f"Duplicate photo id: {record.id}")
        self._records.append(record)
        self._by_id[record.id] = record

    def get(self, photo_id: str) -> Optional[PhotoRecord]:
        return self._by_id.get(photo_id)

    def find(self, tag: Optional[str] = None, descending: bool = False) -> list[PhotoRecord]:
        """Photos carrying ``tag`` (all when None), ordered by date then id."""
        records = [r for r in self._records if tag is None or tag in r.tags]
        return sorted(records, key=lambda r: (r.date_taken, r.id), reverse=descending)
