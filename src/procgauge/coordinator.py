"""Fan sampler results out to the active storage cells."""

from __future__ import annotations

import logging

from .errors import SampleError
from .registry import GaugeCell, MetricRegistry
from .samplers.base import BaseSampler

log = logging.getLogger(__name__)

# Routine failures, logged at INFO.
_EXPECTED_CODES = frozenset({"no_baseline"})


class UpdateCoordinator:
    """Runs samplers and writes their values under the registry lock."""

    def __init__(self, registry: MetricRegistry) -> None:
        self.registry = registry

    def update_gauge(self, cell: GaugeCell, value: float) -> None:
        with self.registry.lock:
            cell.value = float(value)

    def plan(self) -> list[BaseSampler]:
        """Samplers feeding the active cells, each once, in registration order."""
        samplers: list[BaseSampler] = []
        seen: set[int] = set()
        for cell in self.registry.cells:
            sampler = cell.descriptor.sampler
            if id(sampler) in seen:
                continue
            seen.add(id(sampler))
            samplers.append(sampler)
        return samplers

    def run_sampler(self, sampler: BaseSampler) -> bool:
        """Sample once and publish every active gauge of the group.

        Cells of the group are written one by one, not as a transaction.
        Returns False if the sample failed; the cells keep their values.
        """
        try:
            values = sampler.sample()
        except SampleError as e:
            level = logging.INFO if e.code in _EXPECTED_CODES else logging.WARNING
            log.log(
                level,
                "sample failed: %s",
                e.message,
                extra={"sampler": sampler.name, "code": e.code},
            )
            return False

        for metric, value in values.items():
            cell = self.registry.cell(metric)
            if cell is None:
                continue
            self.update_gauge(cell, value)
        return True

    def run_cycle(self) -> int:
        """Run every planned sampler once; return how many succeeded."""
        ok = 0
        for sampler in self.plan():
            try:
                if self.run_sampler(sampler):
                    ok += 1
            except Exception:
                log.exception("sampler crashed", extra={"sampler": sampler.name})
        return ok
