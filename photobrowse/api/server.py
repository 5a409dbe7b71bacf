"""Uvicorn entrypoint for running the reference gallery API."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn

from photobrowse.config.logging_config import setup_logging
from photobrowse.config.settings import get_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the photobrowse reference gallery API.")
    parser.add_argument("--catalog", type=Path, default=None, help="JSON catalog file to serve.")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address.")
    parser.add_argument("--port", type=int, default=8000, help="Bind port.")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.catalog is not None:
        if not args.catalog.is_file():
            print(f"error: catalog file not found: {args.catalog}", file=sys.stderr)
            return 2
        # Read by Settings.catalog_path inside the app factory, also under --reload
        os.environ["PHOTOBROWSE_CATALOG"] = str(args.catalog.resolve())

    settings = get_settings()
    setup_logging(log_dir=settings.logs_dir)
    logger = logging.getLogger(__name__)

    logger.info("Starting gallery API on %s:%d (catalog=%s)", args.host, args.port, settings.catalog_path)
    uvicorn.run(
        "photobrowse.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
