"""Console logging for the play queue service."""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that log every request or fetch at INFO.
NOISY_LOGGERS = ("uvicorn.access", "httpx")

_ANSI_RESET = "\033[0m"
_LEVEL_ANSI = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}


def wants_color(stream: TextIO) -> bool:
    """Whether ANSI colors should be written to ``stream``.

    ``NO_COLOR`` (any value) always wins; otherwise only interactive
    terminals get colors.
    """
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class LevelColorFormatter(logging.Formatter):
    """Formatter that wraps the level name in its ANSI color.

    The color decision is taken once, by whoever builds the handler, so a
    formatter never inspects the environment while formatting.
    """

    def __init__(self, fmt: str = CONSOLE_FORMAT, datefmt: str = CONSOLE_DATEFMT, *, color: bool = False) -> None:
        super().__init__(fmt, datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        if not self.color or record.levelname not in _LEVEL_ANSI:
            return super().format(record)
        # Format a copy; other handlers share the same record.
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{_LEVEL_ANSI[record.levelname]}{record.levelname}{_ANSI_RESET}"
        return super().format(tinted)


def console_handler(stream: TextIO | None = None) -> logging.StreamHandler:
    """Build the stderr handler used by the service process."""
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(LevelColorFormatter(color=wants_color(stream)))
    return handler


def quiet_noisy_loggers(level: int = logging.WARNING) -> None:
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)
