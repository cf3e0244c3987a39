from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, eq=False)
class MonitorError(Exception):
    """A controlled error raised by the sampling core.

    Use the subclasses: they tell callers whether the run can continue.
    """

    code: str
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


class ConfigurationError(MonitorError):
    """Invalid activation request or settings. Fatal to startup."""


class SampleError(MonitorError):
    """A source could not be read or parsed for one sampling cycle.

    Local to the cycle: the affected gauges keep their last value.
    """
