"""Reference gallery API serving paginated photo metadata with cursor links."""

from photobrowse.api.app import create_app
from photobrowse.api.catalog import PhotoCatalog, PhotoRecord
from photobrowse.api.pagination import Window, decode_cursor, encode_cursor

__all__ = [
    "create_app",
    "PhotoCatalog",
    "PhotoRecord",
    "Window",
    "decode_cursor",
    "encode_cursor",
]
