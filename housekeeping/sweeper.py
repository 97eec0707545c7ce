from __future__ import annotations

import logging
import os
import shutil
import stat
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, Iterator

from .config import DEFAULT_RETENTION
from .errors import HousekeepingError, HousekeepingIOError
from .models import (
    EVENT_METADATA_FAILED,
    EVENT_REMOVE_FAILED,
    EVENT_REMOVED,
    EVENT_SIZE_UNKNOWN,
    CleanupReport,
    DirectoryEntry,
    SweepEvent,
    saturating_add,
)
from .sizing import measure


LOGGER = logging.getLogger("housekeeping")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _lstat(path: Path) -> os.stat_result:
    return path.lstat()


def _modified_time(entry_stat: os.stat_result) -> datetime | None:
    try:
        return datetime.fromtimestamp(entry_stat.st_mtime, tz=timezone.utc)
    except (OverflowError, OSError, ValueError, AttributeError):
        return None


def _remove(entry: DirectoryEntry) -> None:
    if entry.is_dir:
        shutil.rmtree(entry.path)
    else:
        entry.path.unlink()


def _list_children(root: Path) -> list[Path]:
    try:
        return sorted(root.iterdir())
    except OSError as exc:
        raise HousekeepingIOError(f"failed to list {root}: {exc}", path=str(root)) from exc


def is_expired(entry: DirectoryEntry, cutoff: datetime) -> bool:
    # An unreadable mtime counts as infinitely old.
    if entry.modified is None:
        return True
    return entry.modified <= cutoff


def iter_sweep_events(
    root: Path,
    now: datetime,
    retention: timedelta = DEFAULT_RETENTION,
) -> Iterator[SweepEvent]:
    """Yield one event per stale child of ``root`` that was handled.

    Listing ``root`` itself is the only fatal step; it raises
    ``HousekeepingIOError`` before any event is produced. Entries newer
    than the cutoff yield nothing.
    """
    root = Path(root)
    cutoff = _as_utc(now) - retention

    for child in _list_children(root):
        try:
            child_stat = _lstat(child)
        except OSError as exc:
            yield SweepEvent(kind=EVENT_METADATA_FAILED, path=child, error=str(exc))
            continue

        entry = DirectoryEntry(
            path=child,
            modified=_modified_time(child_stat),
            is_dir=stat.S_ISDIR(child_stat.st_mode),
        )
        if not is_expired(entry, cutoff):
            continue

        if entry.is_dir:
            try:
                entry = replace(entry, size=measure(child))
            except HousekeepingError as exc:
                yield SweepEvent(kind=EVENT_SIZE_UNKNOWN, path=child, error=str(exc))
                entry = replace(entry, size=0)
        else:
            entry = replace(entry, size=int(child_stat.st_size))

        try:
            _remove(entry)
        except OSError as exc:
            yield SweepEvent(kind=EVENT_REMOVE_FAILED, path=child, size=entry.size, error=str(exc))
            continue

        yield SweepEvent(kind=EVENT_REMOVED, path=child, size=entry.size)


def fold_events(events: Iterable[SweepEvent]) -> CleanupReport:
    cleaned = 0
    reclaimed = 0
    for event in events:
        if event.kind == EVENT_REMOVED:
            cleaned += 1
            reclaimed = saturating_add(reclaimed, event.size)
    return CleanupReport(cleaned_entries=cleaned, reclaimed_bytes=reclaimed)


def _logged(events: Iterable[SweepEvent]) -> Iterator[SweepEvent]:
    for event in events:
        if event.kind == EVENT_REMOVED:
            LOGGER.info("[HOUSEKEEPING]: Removed %s (%d bytes)", event.path, event.size)
        elif event.kind == EVENT_SIZE_UNKNOWN:
            LOGGER.warning("[HOUSEKEEPING]: Could not measure %s, counting 0 bytes: %s", event.path, event.error)
        elif event.kind == EVENT_METADATA_FAILED:
            LOGGER.warning("[HOUSEKEEPING]: Skipping %s, metadata unreadable: %s", event.path, event.error)
        elif event.kind == EVENT_REMOVE_FAILED:
            LOGGER.warning("[HOUSEKEEPING]: Failed to remove %s: %s", event.path, event.error)
        yield event


def sweep(root: Path, now: datetime, retention: timedelta = DEFAULT_RETENTION) -> CleanupReport:
    return fold_events(_logged(iter_sweep_events(root, now, retention)))
