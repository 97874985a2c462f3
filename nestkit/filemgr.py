"""Registry of open log files with time-based rotation."""

from __future__ import annotations

import sys
import threading
from datetime import datetime

from .filelog import FileLog, RotateType
from .strings import extension, file_name, file_path


class FileMgr:
    """Keeps one FileLog per path and rotates them when the clock rolls over."""

    def __init__(self) -> None:
        self._logs: dict[str, FileLog] = {}
        self._lock = threading.Lock()
        self._last_year = -1
        self._last_month = -1
        self._last_day = -1
        self._last_hour = -1
        self._last_minute = -1

    def on_check(self, now: datetime | None = None) -> None:
        """Rotate logs whose day, hour or minute boundary has passed since the last check."""
        now = now or datetime.now()
        if self._last_day == -1:
            self._remember(now)
        day_change = self._last_day != now.day
        hour_change = self._last_hour != now.hour
        minute_change = self._last_minute != now.minute
        if not (day_change or hour_change or minute_change):
            return
        with self._lock:
            for log in self._logs.values():
                try:
                    if minute_change and log.rotate_type == RotateType.MINUTE:
                        self.rotate_minutes(log)
                    if hour_change and log.rotate_type == RotateType.HOUR:
                        self.rotate_hours(log)
                    if day_change and log.rotate_type == RotateType.DAY:
                        self.rotate_days(log)
                except OSError as exc:
                    print(f"rotate failed for {log.file_path}: {exc}", file=sys.stderr)
        self._remember(now)

    def _remember(self, now: datetime) -> None:
        self._last_year = now.year
        self._last_month = now.month
        self._last_day = now.day
        self._last_hour = now.hour
        self._last_minute = now.minute

    def get_file_log(self, filename: str) -> FileLog:
        """Return the log for ``filename``, opening it on first use; raises OSError."""
        with self._lock:
            log = self._logs.get(filename)
            if log is not None:
                return log
            log = FileLog()
            log.open(filename)
            self._logs[filename] = log
            return log

    def remove_file_log(self, log: FileLog) -> None:
        """Forget ``log``; it is not closed."""
        with self._lock:
            self._logs.pop(log.file_path, None)

    def _rotate(self, file: FileLog, stamp: str) -> None:
        if file.file_size() <= 0:
            return
        path = file.file_path
        directory = file_path(path)
        if not directory.endswith(("/", "\\")):
            directory += "/"
        file.rotate(f"{directory}{file_name(path)}{stamp}.{extension(path)}")

    def rotate_days(self, file: FileLog) -> None:
        """Rotate ``file`` to a name stamped with the last seen day."""
        self._rotate(file, "_%4d-%02d-%02d" % (self._last_year, self._last_month, self._last_day))

    def rotate_hours(self, file: FileLog) -> None:
        """Rotate ``file`` to a name stamped with the last seen hour."""
        self._rotate(
            file,
            "_%4d-%02d-%02dT%02d"
            % (self._last_year, self._last_month, self._last_day, self._last_hour),
        )

    def rotate_minutes(self, file: FileLog) -> None:
        """Rotate ``file`` to a name stamped with the last seen minute."""
        self._rotate(
            file,
            "_%4d-%02d-%02dT%02d%02d"
            % (
                self._last_year,
                self._last_month,
                self._last_day,
                self._last_hour,
                self._last_minute,
            ),
        )