from .config import DEFAULT_RETENTION, LOW_SPACE_THRESHOLD_BYTES, HousekeepingConfig
from .disk import available_space
from .errors import HousekeepingError, HousekeepingIOError, StorageUnavailable, VolumeNotFound
from .models import CleanupReport, DirectoryEntry, HousekeepingStatus, SweepEvent
from .orchestrator import Housekeeper, run_housekeeping
from .sizing import measure
from .sweeper import sweep
from .workspace import ensure_workspace


__all__ = [
    "DEFAULT_RETENTION",
    "LOW_SPACE_THRESHOLD_BYTES",
    "HousekeepingConfig",
    "available_space",
    "HousekeepingError",
    "HousekeepingIOError",
    "StorageUnavailable",
    "VolumeNotFound",
    "CleanupReport",
    "DirectoryEntry",
    "HousekeepingStatus",
    "SweepEvent",
    "Housekeeper",
    "run_housekeeping",
    "measure",
    "sweep",
    "ensure_workspace",
]
