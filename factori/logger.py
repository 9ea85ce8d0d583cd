"""Coloured, timestamped console logging."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import IntEnum
from functools import cache
from typing import Callable


class LogLevel(IntEnum):
    """Severity of a log line."""

    ERROR = 0
    WARNING = 1
    INFO = 2

    @property
    def label(self) -> str:
        return self.name

    @property
    def color(self) -> str:
        return _COLORS[self]

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]


_COLORS = {
    LogLevel.ERROR: "\033[31m",
    LogLevel.WARNING: "\033[33m",
    LogLevel.INFO: "\033[32m",
}

_LOGGING_LEVELS = {
    LogLevel.ERROR: logging.CRITICAL,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.INFO: logging.INFO,
}


class DropLog:
    """Writes lines of the form ``<colour>hh:mm:ss | [LEVEL] | tag: info``."""

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        name: str = "factori",
    ) -> None:
        self._clock = clock
        self._logger = logging.getLogger(name)

    def format_line(self, level: LogLevel | int, tag: str, info: str) -> str:
        """Build the text of one log line."""
        level = LogLevel(level)
        stamp = self._clock().strftime("%H:%M:%S")
        return f"{level.color}{stamp} | [{level.label}] | {tag}: {info}"

    def _write(self, level: LogLevel, tag: str, info: str) -> str:
        line = self.format_line(level, tag, info)
        self._logger.log(level.logging_level, line)
        return line

    def error(self, tag: str, info: str) -> str:
        return self._write(LogLevel.ERROR, tag, info)

    def warning(self, tag: str, info: str) -> str:
        return self._write(LogLevel.WARNING, tag, info)

    def info(self, tag: str, info: str) -> str:
        return self._write(LogLevel.INFO, tag, info)


@cache
def get_logger() -> DropLog:
    """Return the shared application logger."""
    return DropLog()