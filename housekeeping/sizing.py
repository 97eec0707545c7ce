from __future__ import annotations

import os
import stat
from pathlib import Path

from .errors import HousekeepingIOError
from .models import saturating_add


def measure(root: Path) -> int:
    """Total size in bytes of the regular files under ``root``.

    Walks with an explicit stack so deep trees cannot exhaust the
    interpreter's recursion limit. Symlinks are neither followed nor
    counted.
    """
    root = Path(root)
    try:
        root_stat = root.lstat()
    except OSError as exc:
        raise HousekeepingIOError(f"failed to stat {root}: {exc}", path=str(root)) from exc

    if stat.S_ISREG(root_stat.st_mode):
        return int(root_stat.st_size)
    if not stat.S_ISDIR(root_stat.st_mode):
        return 0

    total = 0
    pending: list[str] = [str(root)]
    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                children = list(entries)
        except OSError as exc:
            raise HousekeepingIOError(f"failed to list {current}: {exc}", path=current) from exc

        for entry in children:
            try:
                entry_stat = entry.stat(follow_symlinks=False)
            except OSError as exc:
                raise HousekeepingIOError(f"failed to stat {entry.path}: {exc}", path=entry.path) from exc

            if stat.S_ISDIR(entry_stat.st_mode):
                pending.append(entry.path)
            elif stat.S_ISREG(entry_stat.st_mode):
                total = saturating_add(total, entry_stat.st_size)

    return total
