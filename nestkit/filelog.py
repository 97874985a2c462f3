"""Append-only log file that can be rotated while in use."""

from __future__ import annotations

import os
import sys
from enum import IntEnum

_OPEN_FLAGS = os.O_CREAT | os.O_APPEND | os.O_WRONLY
_FILE_MODE = 0o666


class RotateType(IntEnum):
    """How often a log file is rotated."""

    NONE = 0
    MINUTE = 1
    HOUR = 2
    DAY = 3


class FileLog:
    """A log file written through a raw descriptor.

    Rotation renames the file and swaps a fresh one in behind the same
    descriptor, so writers holding the object keep working.
    """

    def __init__(self) -> None:
        self.file_path = ""
        self.rotate_type = RotateType.NONE
        self._fd = -1

    def open(self, file_path: str) -> None:
        """Open (creating if needed) ``file_path`` for appending; raises OSError."""
        self.file_path = file_path
        self._fd = os.open(file_path, _OPEN_FLAGS, _FILE_MODE)

    def write_log(self, msg: str) -> int:
        """Write ``msg``; goes to standard output when no file is open."""
        if self._fd == -1:
            sys.stdout.write(msg)
            sys.stdout.flush()
            return len(msg.encode())
        return os.write(self._fd, msg.encode())

    def rotate(self, file: str) -> None:
        """Rename the current file to ``file`` and continue in a fresh one."""
        if not self.file_path:
            return
        os.rename(self.file_path, file)
        fresh = os.open(self.file_path, _OPEN_FLAGS, _FILE_MODE)
        try:
            os.dup2(fresh, self._fd)
        finally:
            os.close(fresh)

    def file_size(self) -> int:
        """Current size of the open file in bytes; 0 when nothing is open."""
        if self._fd == -1:
            return 0
        return os.lseek(self._fd, 0, os.SEEK_END)

    def close(self) -> None:
        """Close the file descriptor if open."""
        if self._fd != -1:
            os.close(self._fd)
            self._fd = -1

    def __enter__(self) -> FileLog:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()