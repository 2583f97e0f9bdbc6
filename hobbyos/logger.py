"""A kernel logger with a global priority threshold."""

from __future__ import annotations

import enum
from collections.abc import Callable


class LogLevel(enum.IntEnum):
    """Log priorities; lower values are more important."""

    ERROR = 3
    WARN = 4
    INFO = 6
    DEBUG = 7


class Logger:
    """Formats messages and passes those at or above the threshold to a sink."""

    def __init__(self, sink: Callable[[str], object], level: LogLevel = LogLevel.WARN) -> None:
        self._sink = sink
        self.level = LogLevel(level)

    def set_level(self, level: LogLevel) -> None:
        """Change the threshold: later messages less important than it are dropped."""
        self.level = LogLevel(level)

    def log(self, level: LogLevel, format: str, *args) -> int:
        """Record ``format % args`` if ``level`` passes; return its length or 0."""
        if level > self.level:
            return 0
        message = format % args
        self._sink(message)
        return len(message)