"""VersionedObject value object — the envelope every stored record is wrapped in."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from datetime import datetime, timezone

CURRENT_VERSION = 0

_UINT64 = struct.Struct(">Q")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class VersionedObject:
    data: bytes
    version: int = CURRENT_VERSION
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def from_uint64(cls, value: int) -> "VersionedObject":
        """Wrap a counter as 8 big-endian bytes."""
        return cls(data=_UINT64.pack(value))

    def as_uint64(self) -> int:
        """Decode the payload as a big-endian counter.

        Raises:
            ValueError: if the payload is not exactly 8 bytes.
        """
        if len(self.data) != _UINT64.size:
            raise ValueError(
                f"Expected {_UINT64.size} bytes for a counter, got {len(self.data)}"
            )
        return _UINT64.unpack(self.data)[0]
