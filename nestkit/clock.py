"""Wall-clock helpers."""

from __future__ import annotations

import time
from typing import NamedTuple


class DateParts(NamedTuple):
    """Local calendar fields together with the Unix timestamp they describe."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    timestamp: int


def now_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def now() -> int:
    """Seconds since the Unix epoch."""
    return int(time.time())


def now_parts() -> DateParts:
    """Current local date and time broken into fields."""
    t = int(time.time())
    tm = time.localtime(t)
    return DateParts(tm.tm_year, tm.tm_mon, tm.tm_mday, tm.tm_hour, tm.tm_min, tm.tm_sec, t)


def iso_time() -> str:
    """Current local time as ``YYYY-MM-DDTHH:MM:SS``."""
    tm = time.localtime()
    return "%4d-%02d-%02dT%02d:%02d:%02d" % (
        tm.tm_year,
        tm.tm_mon,
        tm.tm_mday,
        tm.tm_hour,
        tm.tm_min,
        tm.tm_sec,
    )