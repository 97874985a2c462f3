"""Fixed-capacity data packets."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class PacketType(IntEnum):
    """Packet type bits; ``UNKNOWN`` has every low bit set."""

    VIDEO = 1
    AUDIO = 2
    META = 4
    META3 = 8
    KEY_FRAME = 16
    IDR = 32
    UNKNOWN = 255


class Packet:
    """A byte buffer that holds at most ``capacity`` bytes plus some metadata."""

    __slots__ = ("capacity", "packet_type", "index", "timestamp", "ext", "_buf")

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"negative packet capacity: {capacity}")
        self.capacity = capacity
        self.packet_type: int = PacketType.UNKNOWN
        self.index = -1
        self.timestamp = 0
        self.ext: Any = None
        self._buf = bytearray()

    @classmethod
    def new(cls, size: int) -> Packet:
        """An empty packet able to hold ``size`` bytes."""
        return cls(size)

    def is_video(self) -> bool:
        return (self.packet_type & PacketType.VIDEO) == PacketType.VIDEO

    def is_key_frame(self) -> bool:
        return self.is_video() and (
            self.packet_type & PacketType.KEY_FRAME
        ) == PacketType.KEY_FRAME

    def is_audio(self) -> bool:
        return self.packet_type == PacketType.AUDIO

    def is_meta(self) -> bool:
        return self.packet_type == PacketType.META

    def is_meta3(self) -> bool:
        return self.packet_type == PacketType.META3

    @property
    def size(self) -> int:
        """Number of bytes held."""
        return len(self._buf)

    @property
    def space(self) -> int:
        """Bytes that can still be appended."""
        return self.capacity - len(self._buf)

    @property
    def data(self) -> bytes:
        """The bytes held."""
        return bytes(self._buf)

    def append(self, data: bytes) -> int:
        """Copy as much of ``data`` as fits; returns the number of bytes taken."""
        taken = min(len(data), self.space)
        self._buf += data[:taken]
        return taken

    def __len__(self) -> int:
        return len(self._buf)