"""Logging setup for the bot process."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s %(levelname)s | %(message)s"
VERBOSE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s | %(message)s"


def configure_logging(log_path: str = "-", level: int = 0) -> None:
    """Send logs to ``log_path`` (stderr when "-" or empty).

    Level 0 logs INFO, 1 logs DEBUG, anything higher also logs DEBUG with
    millisecond timestamps and the emitting module.
    """
    if log_path and log_path != "-":
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    if level > 1:
        handler.setFormatter(logging.Formatter(VERBOSE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        threshold = logging.DEBUG
    else:
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        threshold = logging.DEBUG if level == 1 else logging.INFO

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(threshold)

    if level <= 1:
        # SQL and HTTP client chatter only at the most verbose level
        logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Log level set to %s and output to %s",
        logging.getLevelName(threshold) if level <= 1 else "TRACE",
        log_path or "-",
    )
