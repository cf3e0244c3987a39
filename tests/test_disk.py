"""Tests for disk space and block-device activity."""

from __future__ import annotations

from collections import namedtuple
from pathlib import Path

import pytest

from procgauge.errors import SampleError
from procgauge.samplers import disk
from procgauge.samplers.disk import (
    DiskStats,
    DiskStatsSampler,
    DiskUsageSampler,
    read_disk_stats,
    read_disk_usage,
)

sdiskusage = namedtuple("sdiskusage", ["total", "used", "free", "percent"])


def test_read_disk_usage(monkeypatch: pytest.MonkeyPatch) -> None:
    # 1000 blocks, 250 available to unprivileged users, 50 reserved
    monkeypatch.setattr(disk.psutil, "disk_usage", lambda path: sdiskusage(1000, 700, 250, 73.7))
    assert read_disk_usage("/") == 75.0


def test_read_disk_usage_is_deterministic(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(disk.psutil, "disk_usage", lambda path: sdiskusage(4096, 1024, 3000, 25.0))
    assert read_disk_usage("/") == read_disk_usage("/")


def test_read_disk_usage_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(path: str) -> sdiskusage:
        raise FileNotFoundError(path)

    monkeypatch.setattr(disk.psutil, "disk_usage", boom)
    assert read_disk_usage("/missing") is None
    with pytest.raises(SampleError):
        DiskUsageSampler("/missing").sample()


def test_read_disk_usage_empty_filesystem(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(disk.psutil, "disk_usage", lambda path: sdiskusage(0, 0, 0, 0.0))
    assert read_disk_usage("/") is None


def test_disk_usage_sampler_real_filesystem(tmp_path: Path) -> None:
    values = DiskUsageSampler(str(tmp_path)).sample()
    assert 0.0 <= values["disk_usage_percentage"] <= 100.0


def test_read_disk_stats_sums_all_devices(fake_proc: Path) -> None:
    stats = read_disk_stats(fake_proc / "diskstats")
    assert stats == DiskStats(reads_completed=110, writes_completed=220, io_time_ms=330)


def test_read_disk_stats_missing(tmp_path: Path) -> None:
    assert read_disk_stats(tmp_path / "diskstats") is None


def test_read_disk_stats_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "diskstats"
    path.write_text("")
    assert read_disk_stats(path) == DiskStats(0, 0, 0)


def test_disk_stats_sampler(fake_proc: Path) -> None:
    assert DiskStatsSampler(fake_proc / "diskstats").sample() == {
        "io_time_ms": 330.0,
        "writes_completed_total": 220.0,
        "reads_completed_total": 110.0,
    }
