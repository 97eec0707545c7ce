from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path


APP_NAME = "scanner"
WORKSPACE_DIRNAME = "temp"
DEFAULT_RETENTION = timedelta(hours=24)
LOW_SPACE_THRESHOLD_BYTES = 200 * 1024 * 1024


@dataclass(frozen=True)
class HousekeepingConfig:
    app_name: str = APP_NAME
    workspace_dirname: str = WORKSPACE_DIRNAME
    data_dir: Path | None = None
    retention: timedelta = DEFAULT_RETENTION
    low_space_threshold_bytes: int = LOW_SPACE_THRESHOLD_BYTES

    @classmethod
    def from_env(cls) -> "HousekeepingConfig":
        data_dir = str(os.getenv("HK_DATA_DIR") or "").strip()
        app_name = str(os.getenv("HK_APP_NAME") or APP_NAME).strip() or APP_NAME
        return cls(
            app_name=app_name,
            data_dir=Path(data_dir).expanduser() if data_dir else None,
        )
