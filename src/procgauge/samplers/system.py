"""Scalar keys of /proc/stat (context switches, runnable processes)."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)


def read_stat_key(key: str, stat_path: str | Path = "/proc/stat") -> int | None:
    """Return the integer that follows *key* on its own /proc/stat line."""
    try:
        with open(stat_path) as fh:
            for line in fh:
                parts = line.split()
                if len(parts) >= 2 and parts[0] == key:
                    try:
                        return int(parts[1])
                    except ValueError:
                        log.debug("malformed %s line: %r", key, line, extra={"path": str(stat_path)})
                        return None
    except OSError as e:
        log.debug("cannot open stat file: %s", e, extra={"path": str(stat_path)})
        return None
    return None


class StatKeySampler(BaseSampler):
    """Publish one /proc/stat key as one gauge."""

    def __init__(self, metric: str, key: str, stat_path: str | Path = "/proc/stat") -> None:
        self.metric = metric
        self.key = key
        self.stat_path = Path(stat_path)

    @property
    def name(self) -> str:
        return f"stat:{self.key}"

    @property
    def metrics(self) -> tuple[str, ...]:
        return (self.metric,)

    def sample(self) -> dict[str, float]:
        value = read_stat_key(self.key, self.stat_path)
        if value is None:
            raise SampleError(
                code="source_unavailable",
                message=f"no {self.key!r} entry in {self.stat_path}",
            )
        return {self.metric: float(value)}
