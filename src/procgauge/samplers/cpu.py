"""CPU utilization from cumulative /proc/stat tick counters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CpuTimes:
    """Aggregate cumulative tick counters from the ``cpu`` line."""

    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int
    steal: int

    @property
    def idle_total(self) -> int:
        return self.idle + self.iowait

    @property
    def non_idle(self) -> int:
        return self.user + self.nice + self.system + self.irq + self.softirq + self.steal

    @property
    def total(self) -> int:
        return self.idle_total + self.non_idle


def parse_cpu_line(line: str) -> CpuTimes | None:
    """Parse ``cpu  user nice system idle iowait irq softirq steal ...``.

    Per-core lines (``cpu0``) and lines with fewer than eight counters
    are rejected.
    """
    parts = line.split()
    if not parts or parts[0] != "cpu" or len(parts) < 9:
        return None
    try:
        values = [int(p) for p in parts[1:9]]
    except ValueError:
        return None
    return CpuTimes(*values)


def read_cpu_times(stat_path: str | Path = "/proc/stat") -> CpuTimes | None:
    """Read the aggregate CPU counters, or None on failure."""
    try:
        with open(stat_path) as fh:
            first = fh.readline()
    except OSError as e:
        log.debug("cannot open stat file: %s", e, extra={"path": str(stat_path)})
        return None
    times = parse_cpu_line(first)
    if times is None:
        log.debug("malformed cpu line: %r", first, extra={"path": str(stat_path)})
    return times


def compute_cpu_usage(previous: CpuTimes, current: CpuTimes) -> float | None:
    """Busy share of the ticks elapsed between two snapshots, in percent.

    Returns None when no ticks elapsed, when the counters went backwards, or
    when the idle delta falls outside the elapsed ticks (iowait can decrease).
    """
    total_delta = current.total - previous.total
    if total_delta <= 0:
        return None
    idle_delta = current.idle_total - previous.idle_total
    if not 0 <= idle_delta <= total_delta:
        return None
    return (total_delta - idle_delta) / total_delta * 100.0


class CpuUsageSampler(BaseSampler):
    """Stateful CPU usage gauge.

    Carries the previous counter snapshot between calls. The first call
    only seeds that snapshot and fails with ``no_baseline``: a percentage
    computed against an all-zero baseline would be the average since boot,
    not the current usage.
    """

    METRIC = "cpu_usage_percentage"

    def __init__(self, stat_path: str | Path = "/proc/stat") -> None:
        self.stat_path = Path(stat_path)
        self._previous: CpuTimes | None = None

    @property
    def name(self) -> str:
        return "cpu_usage"

    @property
    def metrics(self) -> tuple[str, ...]:
        return (self.METRIC,)

    @property
    def previous(self) -> CpuTimes | None:
        return self._previous

    def sample(self) -> dict[str, float]:
        current = read_cpu_times(self.stat_path)
        if current is None:
            raise SampleError(code="source_unavailable", message=f"cannot read {self.stat_path}")

        previous = self._previous
        if previous is None:
            self._previous = current
            raise SampleError(code="no_baseline", message="first CPU sample seeds the baseline")

        if current.total < previous.total:
            # Hot-unplug or counter reset: measure from the new counters next time.
            self._previous = current
            raise SampleError(code="counter_reset", message="CPU counters went backwards")

        usage = compute_cpu_usage(previous, current)
        if usage is None:
            if current.total == previous.total:
                raise SampleError(code="no_elapsed_ticks", message="no CPU ticks elapsed since last sample")
            self._previous = current
            raise SampleError(code="inconsistent_ticks", message="idle ticks outside elapsed ticks")

        self._previous = current
        return {self.METRIC: usage}
