"""
Logging configuration for photobrowse.

Console logging always, rotating file logging when a directory is given.
All modules should use:
    import logging
    logger = logging.getLogger(__name__)
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

# Libraries that log every connection or loop event at DEBUG/INFO
_NOISY_LOGGERS = ("urllib3", "asyncio")


def setup_logging(
    log_dir: Path | None = None,
    level: int = logging.INFO,
    log_file: str = "photobrowse.log",
    stream=None,
) -> None:
    """
    Configure the ``photobrowse`` logger tree.

    Args:
        log_dir: Directory for log files. If None, only console logging is set up.
        level: Minimum log level.
        log_file: Name of the log file.
        stream: Console stream. Defaults to stderr so interactive CLI output
            on stdout stays readable.
    """
    package_logger = logging.getLogger("photobrowse")
    package_logger.setLevel(level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    # Prevent duplicate handlers on repeated calls
    if package_logger.handlers:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_dir is None:
        return

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
    except OSError as e:
        package_logger.warning("Could not set up file logging in %s: %s", log_dir, e)
        return

    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    package_logger.addHandler(file_handler)
