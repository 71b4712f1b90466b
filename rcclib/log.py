"""Levelled, colour-tagged console logging with panic and assertion helpers."""

from __future__ import annotations

import enum
import sys
from collections.abc import Callable

from rcclib.printf import sprintf

__all__ = ["LogLevel", "KernelPanic", "Logger", "DEFAULT_LEVEL"]

ANSI_RED = 31
ANSI_YELLOW = 93
ANSI_BLUE = 34
ANSI_GREEN = 32
ANSI_GREY = 90

PANIC_TAG = "PANIC"
ASSERT_MESSAGE = "[ASSERT]\n"


class LogLevel(enum.IntEnum):
    """Severity of a log message; lower values are more severe."""

    ERROR = 0
    WARN = 1
    INFO = 2
    DEBUG = 3
    TRACE = 4

    @property
    def color(self) -> int:
        """ANSI colour code used for messages of this level."""
        return _COLORS[self]

    @property
    def tag(self) -> str:
        """Tag printed in brackets before messages of this level."""
        return self.name


_COLORS = {
    LogLevel.ERROR: ANSI_RED,
    LogLevel.WARN: ANSI_YELLOW,
    LogLevel.INFO: ANSI_BLUE,
    LogLevel.DEBUG: ANSI_GREEN,
    LogLevel.TRACE: ANSI_GREY,
}

DEFAULT_LEVEL = LogLevel.INFO


class KernelPanic(RuntimeError):
    """Raised when the logger is asked to panic; the system cannot go on."""


def _stdout_write(text: str) -> None:
    sys.stdout.write(text)


class Logger:
    """Writes messages at or above a chosen severity, wrapped in ANSI colour codes."""

    def __init__(
        self,
        level: int = DEFAULT_LEVEL,
        out: Callable[[str], object] | None = None,
    ) -> None:
        self.level = LogLevel(level)
        self._out = out if out is not None else _stdout_write

    def _emit(self, level: int, color: int, tag: str, fmt: str, args: tuple) -> str:
        text = sprintf("\x1b[%dm[%s] " + fmt + "\x1b[0m", color, tag, *args)
        if LogLevel.ERROR <= level <= self.level:
            self._out(text)
        return text

    def log(self, level: int, fmt: str, *args: object) -> None:
        """Write ``fmt`` formatted with ``args`` if ``level`` is enabled.

        Levels outside the known range are ignored.
        """
        try:
            known = LogLevel(level)
        except ValueError:
            return
        if known <= self.level:
            self._emit(known, known.color, known.tag, fmt, args)

    def error(self, fmt: str, *args: object) -> None:
        """Log at ERROR level."""
        self.log(LogLevel.ERROR, fmt, *args)

    def warn(self, fmt: str, *args: object) -> None:
        """Log at WARN level."""
        self.log(LogLevel.WARN, fmt, *args)

    def info(self, fmt: str, *args: object) -> None:
        """Log at INFO level."""
        self.log(LogLevel.INFO, fmt, *args)

    def debug(self, fmt: str, *args: object) -> None:
        """Log at DEBUG level."""
        self.log(LogLevel.DEBUG, fmt, *args)

    def trace(self, fmt: str, *args: object) -> None:
        """Log at TRACE level."""
        self.log(LogLevel.TRACE, fmt, *args)

    def panic(self, fmt: str, *args: object) -> None:
        """Log a PANIC message at ERROR severity and raise :class:`KernelPanic`."""
        self._emit(LogLevel.ERROR, ANSI_RED, PANIC_TAG, fmt, args)
        raise KernelPanic(sprintf(fmt, *args))

    def check(self, cond: object) -> None:
        """Panic with an assertion message unless ``cond`` is true."""
        if not cond:
            self.panic(ASSERT_MESSAGE)