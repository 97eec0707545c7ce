from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any


U64_MAX = 2**64 - 1

EVENT_REMOVED = "removed"
EVENT_METADATA_FAILED = "metadata_failed"
EVENT_SIZE_UNKNOWN = "size_unknown"
EVENT_REMOVE_FAILED = "remove_failed"


def saturating_add(total: int, amount: int) -> int:
    return min(U64_MAX, total + max(0, int(amount)))


@dataclass(frozen=True)
class DirectoryEntry:
    path: Path
    modified: datetime | None
    is_dir: bool
    size: int | None = None


@dataclass(frozen=True)
class SweepEvent:
    kind: str
    path: Path
    size: int = 0
    error: str | None = None


@dataclass(frozen=True)
class CleanupReport:
    cleaned_entries: int = 0
    reclaimed_bytes: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "cleaned_entries": int(self.cleaned_entries),
            "reclaimed_bytes": int(self.reclaimed_bytes),
        }


@dataclass(frozen=True)
class HousekeepingStatus:
    available_bytes: int
    threshold_bytes: int
    low_space: bool
    temp_dir: str
    cleanup: CleanupReport

    @classmethod
    def build(
        cls,
        *,
        available_bytes: int,
        threshold_bytes: int,
        temp_dir: Path | str,
        cleanup: CleanupReport,
    ) -> "HousekeepingStatus":
        return cls(
            available_bytes=int(available_bytes),
            threshold_bytes=int(threshold_bytes),
            low_space=int(available_bytes) <= int(threshold_bytes),
            temp_dir=str(temp_dir),
            cleanup=cleanup,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "available_bytes": int(self.available_bytes),
            "threshold_bytes": int(self.threshold_bytes),
            "low_space": bool(self.low_space),
            "temp_dir": self.temp_dir,
            "cleanup": self.cleanup.to_dict(),
        }
