from __future__ import annotations

from pathlib import Path
from typing import Iterable

import psutil

from .errors import HousekeepingIOError, VolumeNotFound


def find_mountpoint(path: Path, mountpoints: Iterable[str]) -> str | None:
    """Return the most specific mount point that contains ``path``."""
    target = Path(path)
    ancestors = {target, *target.parents}
    best: str | None = None
    best_depth = -1
    for mountpoint in mountpoints:
        if not mountpoint:
            continue
        candidate = Path(mountpoint)
        if candidate not in ancestors:
            continue
        depth = len(candidate.parts)
        if depth > best_depth:
            best = str(mountpoint)
            best_depth = depth
    return best


def available_space(path: Path) -> int:
    # Volumes come and go, so this is rebuilt on every call.
    resolved = Path(path).resolve()
    mountpoints = [str(part.mountpoint) for part in psutil.disk_partitions(all=True)]
    mountpoint = find_mountpoint(resolved, mountpoints)
    if mountpoint is None:
        raise VolumeNotFound(str(resolved))
    try:
        usage = psutil.disk_usage(mountpoint)
    except OSError as exc:
        raise HousekeepingIOError(f"failed to read free space on {mountpoint}: {exc}", path=mountpoint) from exc
    return int(usage.free)
