"""CLI entrypoint for browsing a remote gallery from the terminal."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from typing import Iterable, Optional, TextIO

from photobrowse.config.logging_config import setup_logging
from photobrowse.config.settings import get_settings
from photobrowse.gallery.models import GalleryFilter, GallerySnapshot
from photobrowse.gallery.session import GallerySession

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "commands: n|next  p|prev  s|show N  t|toggle  c|close  "
    "nav NAME  filter PATH [k=v ...]  h|help  q|quit"
)


class CommandError(ValueError):
    """A command line typed by the user could not be understood."""


def parse_params(values: Iterable[str]) -> dict[str, str]:
    """Turn ``["tag=x", "order=desc"]`` into a dict."""
    params: dict[str, str] = {}
    for value in values:
        key, sep, val = value.partition("=")
        if not sep or not key:
            raise CommandError(f"Expected key=value, got '{value}'")
        params[key] = val
    return params


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(description="Browse a paginated remote photo gallery.")
    parser.add_argument("--base-url", default=None, help="API base URL (default from settings).")
    parser.add_argument("--path", default=None, help="Collection path, e.g. /photos.")
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter for the collection; repeatable.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level.")
    return parser


def render(snapshot: GallerySnapshot, out: TextIO) -> None:
    """Print a text rendition of the grid, nav bar and viewer."""
    params = " ".join(f"{k}={v}" for k, v in sorted(snapshot.filter.params.items()))
    header = f"[{snapshot.filter.path}{' ' + params if params else ''}]"
    status = " (loading)" if snapshot.loading else ""
    if snapshot.page is None:
        print(f"{header} no page loaded{status}", file=out)
        return

    print(f"{header} {len(snapshot.images)} images{status}", file=out)
    for position, image in enumerate(snapshot.images):
        marker = ">" if snapshot.viewer.visible and position == snapshot.viewer.current_index else " "
        print(f" {marker}{position:3d}  {image.id}  {image.thumb_url or image.view_url}", file=out)
    if snapshot.links:
        print("links: " + ", ".join(sorted(snapshot.links)), file=out)
    if snapshot.viewer.visible and snapshot.image_url:
        print(f"viewer: #{snapshot.viewer.current_index} {snapshot.image_url}", file=out)
    else:
        print("viewer: closed", file=out)


async def run_command(session: GallerySession, line: str, out: TextIO) -> bool:
    """Execute one command line. Returns False when the user asked to quit."""
    parts = line.split()
    if not parts:
        return True
    command, args = parts[0].lower(), parts[1:]

    if command in ("q", "quit", "exit"):
        return False
    if command in ("h", "help", "?"):
        print(HELP_TEXT, file=out)
    elif command in ("n", "next"):
        await session.next()
    elif command in ("p", "prev", "previous"):
        await session.previous()
    elif command in ("s", "show"):
        if len(args) != 1 or not args[0].isdigit():
            raise CommandError("usage: show N")
        try:
            session.show(int(args[0]))
        except IndexError as exc:
            raise CommandError(str(exc)) from exc
    elif command in ("t", "toggle"):
        session.toggle()
    elif command in ("c", "close"):
        session.close()
    elif command == "nav":
        if len(args) != 1:
            raise CommandError("usage: nav NAME")
        await session.follow_link(args[0])
    elif command == "filter":
        if not args:
            raise CommandError("usage: filter PATH [k=v ...]")
        await session.set_filter(GalleryFilter(path=args[0], params=parse_params(args[1:])))
    else:
        raise CommandError(f"Unknown command '{command}'. {HELP_TEXT}")
    return True


async def browse(
    session: GallerySession,
    lines: Optional[Iterable[str]] = None,
    out: TextIO = sys.stdout,
) -> None:
    """Mount the session and run commands until quit or end of input."""
    session.subscribe(lambda snapshot: None if snapshot.loading else render(snapshot, out))
    await session.mount()

    source = iter(lines) if lines is not None else None
    while True:
        if source is None:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
        else:
            line = next(source, None)
            if line is None:
                break

        try:
            keep_going = await run_command(session, line, out)
        except CommandError as exc:
            print(f"error: {exc}", file=out)
            continue
        if not keep_going:
            break


def main(argv: Optional[list[str]] = None) -> int:
    """Run the interactive browser."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(log_dir=settings.logs_dir, level=logging.DEBUG if args.verbose else logging.INFO)

    client_settings = settings.client
    if args.base_url:
        client_settings = replace(client_settings, base_url=args.base_url.rstrip("/"))

    try:
        gallery_filter = GalleryFilter(
            path=args.path or client_settings.default_path,
            params=parse_params(args.param),
        )
    except CommandError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    session = GallerySession(gallery_filter, settings=client_settings)
    print(HELP_TEXT)
    try:
        asyncio.run(browse(session))
    except KeyboardInterrupt:
        pass
    except Exception as exc:
        logger.exception("Browser failed: %s", exc)
        return 1
    finally:
        session.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
