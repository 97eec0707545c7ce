from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from .config import HousekeepingConfig
from .errors import HousekeepingIOError, StorageUnavailable


LOGGER = logging.getLogger("housekeeping")


def _home_dir() -> Path | None:
    try:
        return Path.home()
    except (KeyError, RuntimeError):
        return None


def platform_data_dir() -> Path:
    """Resolve the OS-standard per-user data directory.

    This is the application data location, not the config location, so
    the temp workspace never shares a parent with user preferences.
    """
    if sys.platform.startswith("win"):
        for key in ("LOCALAPPDATA", "APPDATA"):
            value = str(os.getenv(key) or "").strip()
            if value:
                return Path(value)
        raise StorageUnavailable()

    xdg = str(os.getenv("XDG_DATA_HOME") or "").strip()
    if xdg and sys.platform != "darwin":
        return Path(xdg)

    home = _home_dir()
    if home is None or not str(home).strip():
        raise StorageUnavailable()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    return home / ".local" / "share"


def workspace_path(config: HousekeepingConfig) -> Path:
    base = config.data_dir if config.data_dir is not None else platform_data_dir()
    return Path(base).expanduser().absolute() / config.app_name / config.workspace_dirname


def ensure_workspace(config: HousekeepingConfig | None = None) -> Path:
    config = config or HousekeepingConfig.from_env()
    target = workspace_path(config)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except FileExistsError as exc:
        raise HousekeepingIOError(f"workspace path {target} exists and is not a directory", path=str(target)) from exc
    except OSError as exc:
        raise HousekeepingIOError(f"failed to create workspace {target}: {exc}", path=str(target)) from exc

    if not target.is_dir():
        raise HousekeepingIOError(f"workspace path {target} exists and is not a directory", path=str(target))

    LOGGER.debug("[HOUSEKEEPING]: Workspace ready at %s", target)
    return target
