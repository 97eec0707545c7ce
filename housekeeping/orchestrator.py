from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from .config import HousekeepingConfig
from .disk import available_space
from .models import HousekeepingStatus
from .sweeper import sweep
from .workspace import ensure_workspace


LOGGER = logging.getLogger("housekeeping")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Housekeeper:
    """Sweep the temp workspace and report free space on its volume.

    Locator, top-level listing and volume lookup failures propagate as
    ``HousekeepingError``; per-entry failures only shrink the report.
    """

    def __init__(
        self,
        config: HousekeepingConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        probe: Callable[[Path], int] | None = None,
    ):
        self._config = config or HousekeepingConfig.from_env()
        self._clock = clock or _utc_now
        self._probe = probe or available_space

    @property
    def config(self) -> HousekeepingConfig:
        return self._config

    def run(self) -> HousekeepingStatus:
        LOGGER.info("[HOUSEKEEPING]: Starting housekeeping run")
        workspace = ensure_workspace(self._config)
        report = sweep(workspace, self._clock(), self._config.retention)
        available = self._probe(workspace)

        status = HousekeepingStatus.build(
            available_bytes=available,
            threshold_bytes=self._config.low_space_threshold_bytes,
            temp_dir=workspace,
            cleanup=report,
        )
        if status.low_space:
            LOGGER.warning(
                "[HOUSEKEEPING]: Low disk space: %d bytes available (threshold %d)",
                status.available_bytes,
                status.threshold_bytes,
            )
        LOGGER.info(
            "[HOUSEKEEPING]: Finished: removed %d entries, reclaimed %d bytes in %s",
            report.cleaned_entries,
            report.reclaimed_bytes,
            status.temp_dir,
        )
        return status


def run_housekeeping(config: HousekeepingConfig | None = None) -> HousekeepingStatus:
    return Housekeeper(config).run()
