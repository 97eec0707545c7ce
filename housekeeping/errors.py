from __future__ import annotations


class HousekeepingError(Exception):
    """Base class for failures that abort a housekeeping run."""


class StorageUnavailable(HousekeepingError):
    def __init__(self, message: str = "per-user data directory could not be resolved"):
        super().__init__(message)


class HousekeepingIOError(HousekeepingError):
    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message)
        self.path = path


class VolumeNotFound(HousekeepingError):
    def __init__(self, path: str):
        super().__init__(f"no mounted volume contains {path}")
        self.path = path
