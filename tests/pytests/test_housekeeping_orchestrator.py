from __future__ import annotations

import importlib
import logging
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

orchestrator = importlib.import_module("housekeeping.orchestrator")
config_module = importlib.import_module("housekeeping.config")
errors = importlib.import_module("housekeeping.errors")


NOW = datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)
MIB = 1024 * 1024


def _config(tmp_path: Path, **overrides) -> "config_module.HousekeepingConfig":
    return config_module.HousekeepingConfig(data_dir=tmp_path, **overrides)


def _stale_file(path: Path, size: int, age: timedelta) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    timestamp = (NOW - age).timestamp()
    os.utime(path, (timestamp, timestamp))


def test_run_reports_low_space_and_cleanup(tmp_path: Path, caplog) -> None:
    workspace = tmp_path / "scanner" / "temp"
    _stale_file(workspace / "old.png", 1000, timedelta(hours=48))
    _stale_file(workspace / "new.png", 500, timedelta(hours=1))
    probed: list[Path] = []

    def _probe(path: Path) -> int:
        probed.append(path)
        return 100 * MIB

    housekeeper = orchestrator.Housekeeper(_config(tmp_path), clock=lambda: NOW, probe=_probe)

    with caplog.at_level(logging.INFO, logger="housekeeping"):
        status = housekeeper.run()

    assert status.available_bytes == 100 * MIB
    assert status.threshold_bytes == 200 * MIB
    assert status.low_space is True
    assert status.temp_dir == str(workspace.absolute())
    assert status.cleanup.cleaned_entries == 1
    assert status.cleanup.reclaimed_bytes == 1000
    assert probed == [workspace.absolute()]
    assert "Low disk space" in caplog.text
    assert "Finished" in caplog.text


def test_run_creates_missing_workspace(tmp_path: Path) -> None:
    housekeeper = orchestrator.Housekeeper(_config(tmp_path), clock=lambda: NOW, probe=lambda path: 10**12)

    status = housekeeper.run()

    assert Path(status.temp_dir).is_dir()
    assert status.low_space is False
    assert status.cleanup.to_dict() == {"cleaned_entries": 0, "reclaimed_bytes": 0}


@pytest.mark.parametrize(
    ("available", "expected"),
    [(50, True), (100, True), (101, False)],
)
def test_low_space_flag_matches_threshold(tmp_path: Path, available: int, expected: bool) -> None:
    housekeeper = orchestrator.Housekeeper(
        _config(tmp_path, low_space_threshold_bytes=100),
        clock=lambda: NOW,
        probe=lambda path: available,
    )

    status = housekeeper.run()

    assert status.low_space is expected
    assert status.low_space == (status.available_bytes <= status.threshold_bytes)


def test_run_uses_injected_retention(tmp_path: Path) -> None:
    workspace = tmp_path / "scanner" / "temp"
    _stale_file(workspace / "recent.png", 10, timedelta(hours=2))

    housekeeper = orchestrator.Housekeeper(
        _config(tmp_path, retention=timedelta(hours=1)),
        clock=lambda: NOW,
        probe=lambda path: 10**12,
    )

    assert housekeeper.run().cleanup.cleaned_entries == 1


def test_run_propagates_volume_not_found(tmp_path: Path) -> None:
    def _probe(path: Path) -> int:
        raise errors.VolumeNotFound(str(path))

    housekeeper = orchestrator.Housekeeper(_config(tmp_path), clock=lambda: NOW, probe=_probe)

    with pytest.raises(errors.VolumeNotFound):
        housekeeper.run()


def test_run_propagates_storage_unavailable(monkeypatch) -> None:
    def _ensure(config):
        raise errors.StorageUnavailable()

    monkeypatch.setattr(orchestrator, "ensure_workspace", _ensure)
    housekeeper = orchestrator.Housekeeper(config_module.HousekeepingConfig(), probe=lambda path: 0)

    with pytest.raises(errors.StorageUnavailable):
        housekeeper.run()


def test_run_housekeeping_uses_env_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HK_DATA_DIR", str(tmp_path))
    monkeypatch.setattr(orchestrator, "available_space", lambda path: 300 * MIB)

    status = orchestrator.run_housekeeping()

    assert status.temp_dir == str((tmp_path / "scanner" / "temp").absolute())
    assert status.low_space is False
    assert status.to_dict()["cleanup"] == {"cleaned_entries": 0, "reclaimed_bytes": 0}
