"""Single-value sysfs sensors (hwmon, cpufreq)."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)

# Raw sysfs values are milli-units (m°C, mV, mA) or kHz.
MILLI = 1000.0


def read_scalar(path: str | Path, divisor: float = MILLI) -> float | None:
    """Read one integer from *path* and divide it by *divisor*.

    Returns None if the file cannot be opened or does not hold an integer.
    """
    try:
        text = Path(path).read_text().strip()
    except OSError as e:
        log.debug("cannot open sensor: %s", e, extra={"path": str(path)})
        return None
    try:
        raw = int(text)
    except ValueError:
        log.debug("sensor value is not an integer: %r", text, extra={"path": str(path)})
        return None
    return raw / divisor


class ScalarSensorSampler(BaseSampler):
    """Publish one sysfs sensor file as one gauge."""

    def __init__(self, metric: str, path: str | Path, divisor: float = MILLI) -> None:
        self.metric = metric
        self.path = Path(path)
        self.divisor = divisor

    @property
    def name(self) -> str:
        return f"sensor:{self.metric}"

    @property
    def metrics(self) -> tuple[str, ...]:
        return (self.metric,)

    def sample(self) -> dict[str, float]:
        value = read_scalar(self.path, self.divisor)
        if value is None:
            raise SampleError(code="sensor_unavailable", message=f"cannot read {self.path}")
        return {self.metric: value}
