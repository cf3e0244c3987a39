"""Memory gauges from /proc/meminfo."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)

KB_PER_MB = 1024.0

_USAGE_KEYS = ("MemTotal", "MemAvailable")
_BREAKDOWN_KEYS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")


def read_meminfo(path: str | Path = "/proc/meminfo") -> dict[str, int] | None:
    """Parse /proc/meminfo into ``{key: value_kb}``.

    Lines that do not hold a number are skipped. Returns None if the file
    cannot be opened.
    """
    result: dict[str, int] = {}
    try:
        with open(path) as fh:
            for line in fh:
                parts = line.split(":")
                if len(parts) != 2:
                    continue
                key = parts[0].strip()
                val_parts = parts[1].strip().split()
                try:
                    result[key] = int(val_parts[0])
                except (ValueError, IndexError):
                    continue
    except OSError as e:
        log.debug("cannot open meminfo: %s", e, extra={"path": str(path)})
        return None
    return result


def memory_usage_percent(info: dict[str, int]) -> float | None:
    """(MemTotal - MemAvailable) / MemTotal * 100, or None if undefined."""
    if any(key not in info for key in _USAGE_KEYS):
        return None
    total = info["MemTotal"]
    available = info["MemAvailable"]
    if total <= 0 or available < 0 or available > total:
        return None
    return (total - available) / total * 100.0


def memory_breakdown_mb(info: dict[str, int]) -> dict[str, float] | None:
    """Total, used and available memory in MB.

    Used memory excludes free pages, buffers and page cache.
    """
    if any(key not in info for key in _BREAKDOWN_KEYS):
        return None
    total = info["MemTotal"]
    if total <= 0:
        return None
    used = total - info["MemFree"] - info["Buffers"] - info["Cached"]
    return {
        "total_memory_mb": total / KB_PER_MB,
        "used_memory_mb": used / KB_PER_MB,
        "available_memory_mb": info["MemAvailable"] / KB_PER_MB,
    }


class MemoryUsageSampler(BaseSampler):
    METRIC = "memory_usage_percentage"

    def __init__(self, meminfo_path: str | Path = "/proc/meminfo") -> None:
        self.meminfo_path = Path(meminfo_path)

    @property
    def name(self) -> str:
        return "memory_usage"

    @property
    def metrics(self) -> tuple[str, ...]:
        return (self.METRIC,)

    def sample(self) -> dict[str, float]:
        info = read_meminfo(self.meminfo_path)
        if info is None:
            raise SampleError(code="source_unavailable", message=f"cannot read {self.meminfo_path}")
        usage = memory_usage_percent(info)
        if usage is None:
            raise SampleError(
                code="parse_failed",
                message="MemTotal/MemAvailable missing or inconsistent",
            )
        return {self.METRIC: usage}


class MemorySampler(BaseSampler):
    """Total/used/available memory, one meminfo read for three gauges."""

    METRICS = ("total_memory_mb", "used_memory_mb", "available_memory_mb")

    def __init__(self, meminfo_path: str | Path = "/proc/meminfo") -> None:
        self.meminfo_path = Path(meminfo_path)

    @property
    def name(self) -> str:
        return "memory"

    @property
    def metrics(self) -> tuple[str, ...]:
        return self.METRICS

    def sample(self) -> dict[str, float]:
        info = read_meminfo(self.meminfo_path)
        if info is None:
            raise SampleError(code="source_unavailable", message=f"cannot read {self.meminfo_path}")
        breakdown = memory_breakdown_mb(info)
        if breakdown is None:
            raise SampleError(code="parse_failed", message="required meminfo keys missing")
        return breakdown
