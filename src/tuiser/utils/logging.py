"""Structured logging setup.

curses owns the terminal while tuiser runs, so log records are written to a
file when one is configured and dropped otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path

import structlog


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | str | None = None,
) -> None:
    """Configure stdlib logging and structlog for the whole process.

    Args:
        level: Minimum level name, e.g. ``"DEBUG"``.
        json_output: Render records as JSON lines instead of key=value.
        log_file: Destination file. ``None`` installs a ``NullHandler``.
    """
    handler: logging.Handler
    if log_file is None:
        handler = logging.NullHandler()
    else:
        handler = logging.FileHandler(Path(log_file), encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.processors.KeyValueRenderer(key_order=["timestamp", "level", "event"])
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
