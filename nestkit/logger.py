"""Leveled logger writing formatted lines to a file log or the console."""

from __future__ import annotations

import sys
import threading
from enum import IntEnum

from .clock import iso_time
from .filelog import FileLog


class LogLevel(IntEnum):
    """Severity of a log line; higher is more severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


class Logger:
    """Writes log lines at or above ``level`` to a file log or standard output."""

    def __init__(self, file_log: FileLog | None = None, level: LogLevel = LogLevel.DEBUG) -> None:
        self.file_log = file_log
        self.level = level

    def write(self, msg: str) -> None:
        """Write an already formatted line."""
        if self.file_log is not None:
            self.file_log.write_log(msg)
        else:
            sys.stdout.write(msg)

    def enabled(self, level: LogLevel) -> bool:
        """Whether a line of ``level`` passes this logger's threshold."""
        return self.level <= level


_lock = threading.Lock()
_current: Logger | None = None


def set_logger(logger: Logger | None) -> None:
    """Install the process-wide logger (or remove it with None)."""
    global _current
    with _lock:
        _current = logger


def get_logger() -> Logger | None:
    """Return the process-wide logger, if any."""
    with _lock:
        return _current


def format_line(level: LogLevel, filename: str, line: int, func: str | None, message: str) -> str:
    """Build one log line: time, thread id, level, source location, message."""
    level = LogLevel(level)
    base = filename.rsplit("/", 1)[-1]
    parts = [iso_time(), " ", str(threading.get_native_id()), f" {level.name} ", f"[{base}:{line}]"]
    if func:
        parts.append(f"[{func}]")
    parts.append(message)
    parts.append("\n")
    return "".join(parts)


def _emit(level: LogLevel, message: str, depth: int) -> str | None:
    level = LogLevel(level)
    logger = get_logger()
    if level < LogLevel.WARN and (logger is None or not logger.enabled(level)):
        return None
    frame = sys._getframe(depth)
    text = format_line(level, frame.f_code.co_filename, frame.f_lineno, frame.f_code.co_name, message)
    if logger is not None:
        logger.write(text)
    else:
        sys.stdout.write(text + "\n")
    return text


def emit(level: LogLevel, message: str) -> str | None:
    """Log ``message`` at ``level``; returns the line written, or None if filtered.

    TRACE, DEBUG and INFO need an installed logger whose level lets them
    through; WARN and ERROR are always written, to the console when no
    logger is installed.
    """
    return _emit(level, message, 2)


def trace(message: str) -> str | None:
    return _emit(LogLevel.TRACE, message, 2)


def debug(message: str) -> str | None:
    return _emit(LogLevel.DEBUG, message, 2)


def info(message: str) -> str | None:
    return _emit(LogLevel.INFO, message, 2)


def warn(message: str) -> str | None:
    return _emit(LogLevel.WARN, message, 2)


def error(message: str) -> str | None:
    return _emit(LogLevel.ERROR, message, 2)