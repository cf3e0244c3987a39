"""Disk space (root mount) and block-device activity gauges."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import psutil

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)

# /proc/diskstats columns: major minor name, then the per-device counters.
_READS_COMPLETED = 3
_WRITES_COMPLETED = 7
_IO_TIME_MS = 12


@dataclass(frozen=True, slots=True)
class DiskStats:
    reads_completed: int
    writes_completed: int
    io_time_ms: int


def read_disk_usage(mountpoint: str = "/") -> float | None:
    """Used share of the filesystem at *mountpoint*, in percent.

    ``total`` and ``free`` from psutil are ``f_blocks * f_frsize`` and
    ``f_bavail * f_frsize``, so this is (blocks - available) / blocks.
    """
    try:
        usage = psutil.disk_usage(mountpoint)
    except OSError as e:
        log.debug("statvfs failed: %s", e, extra={"path": mountpoint})
        return None
    if usage.total <= 0:
        return None
    return (usage.total - usage.free) / usage.total * 100.0


def read_disk_stats(path: str | Path = "/proc/diskstats") -> DiskStats | None:
    """Sum completed reads, completed writes and I/O time over all devices."""
    reads = writes = io_time = 0
    try:
        with open(path) as fh:
            for line in fh:
                parts = line.split()
                if len(parts) <= _IO_TIME_MS:
                    continue
                try:
                    rc = int(parts[_READS_COMPLETED])
                    wc = int(parts[_WRITES_COMPLETED])
                    it = int(parts[_IO_TIME_MS])
                except ValueError:
                    continue
                reads += rc
                writes += wc
                io_time += it
    except OSError as e:
        log.debug("cannot open diskstats: %s", e, extra={"path": str(path)})
        return None
    return DiskStats(reads_completed=reads, writes_completed=writes, io_time_ms=io_time)


class DiskUsageSampler(BaseSampler):
    METRIC = "disk_usage_percentage"

    def __init__(self, mountpoint: str = "/") -> None:
        self.mountpoint = mountpoint

    @property
    def name(self) -> str:
        return "disk_usage"

    @property
    def metrics(self) -> tuple[str, ...]:
        return (self.METRIC,)

    def sample(self) -> dict[str, float]:
        usage = read_disk_usage(self.mountpoint)
        if usage is None:
            raise SampleError(
                code="source_unavailable",
                message=f"no filesystem statistics for {self.mountpoint}",
            )
        return {self.METRIC: usage}


class DiskStatsSampler(BaseSampler):
    METRICS = ("io_time_ms", "writes_completed_total", "reads_completed_total")

    def __init__(self, diskstats_path: str | Path = "/proc/diskstats") -> None:
        self.diskstats_path = Path(diskstats_path)

    @property
    def name(self) -> str:
        return "disk_stats"

    @property
    def metrics(self) -> tuple[str, ...]:
        return self.METRICS

    def sample(self) -> dict[str, float]:
        stats = read_disk_stats(self.diskstats_path)
        if stats is None:
            raise SampleError(code="source_unavailable", message=f"cannot read {self.diskstats_path}")
        return {
            "io_time_ms": float(stats.io_time_ms),
            "writes_completed_total": float(stats.writes_completed),
            "reads_completed_total": float(stats.reads_completed),
        }
