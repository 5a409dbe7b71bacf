"""
Central configuration for the photobrowse client and reference API.

All tunables live here. Nothing is hardcoded in module code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


def _project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: two levels up from config/settings.py
    return Path(__file__).resolve().parent.parent.parent


def _default_base_url() -> str:
    return os.environ.get("PHOTOBROWSE_BASE_URL", "http://127.0.0.1:8000")


@dataclass(frozen=True)
class ClientSettings:
    """Settings for the gallery HTTP client."""

    # Prefix for every request path and every relative link in a response
    base_url: str = field(default_factory=_default_base_url)

    # Collection endpoint used when no filter is supplied
    default_path: str = "/photos"

    # Query parameter that carries the pagination cursor
    cursor_param: str = "c"

    # Request timeout (seconds)
    request_timeout: int = 30

    # User-Agent string sent with every request
    user_agent: str = "photobrowse/0.1"


@dataclass(frozen=True)
class ApiSettings:
    """Settings for the reference gallery API."""

    # Default page size when the request does not set one
    default_page_size: int = 20

    # Maximum allowed page size
    max_page_size: int = 100

    # Catalog file name, resolved under data_dir when no explicit path is given
    catalog_file: str = "catalog.json"


@dataclass
class Settings:
    """
    Top-level settings container.

    Usage:
        settings = get_settings()
        print(settings.client.base_url)
    """

    project_root: Path = field(default_factory=_project_root)
    client: ClientSettings = field(default_factory=ClientSettings)
    api: ApiSettings = field(default_factory=ApiSettings)

    @property
    def data_dir(self) -> Path:
        """Root directory for runtime data (catalog, logs)."""
        return self.project_root / "data"

    @property
    def catalog_path(self) -> Path:
        """Catalog file; PHOTOBROWSE_CATALOG overrides the default location."""
        override = os.environ.get("PHOTOBROWSE_CATALOG")
        if override:
            return Path(override)
        return self.data_dir / self.api.catalog_file

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / "logs"

    def ensure_dirs(self) -> None:
        """Create the data directories if they don't exist."""
        self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns the singleton Settings instance.

    Call this instead of constructing Settings() directly so the entire
    application shares one config object.
    """
    settings = Settings()
    settings.ensure_dirs()
    return settings
