"""Value types exchanged between the stores and their callers."""

from __future__ import annotations

from dataclasses import dataclass

Payload = str | bytes | bytearray | memoryview


@dataclass(frozen=True, slots=True)
class SaveInfo:
    """Metadata derived from a slot file at inspection time."""

    slot: str
    timestamp: int

    def as_dict(self) -> dict[str, int | str]:
        return {"slot": self.slot, "timestamp": self.timestamp}

    def sort_key(self) -> tuple[int, str]:
        """Newest first, then identifier ascending."""
        return (-self.timestamp, self.slot)
