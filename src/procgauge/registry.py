"""Activation of catalog metrics and their storage cells."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .catalog import MetricDescriptor
from .errors import ConfigurationError

log = logging.getLogger(__name__)


@dataclass(slots=True)
class GaugeCell:
    """Last published value of one active metric.

    Only touched while holding the registry lock.
    """

    descriptor: MetricDescriptor
    value: float = 0.0

    @property
    def name(self) -> str:
        return self.descriptor.name


class MetricRegistry:
    """The active subset of a catalog, with one cell per active metric.

    All cells share one lock. Writers (the update coordinator) and readers
    (the exposition sink) take it once per cell, so a scrape never sees a
    torn value but may see a composite group half updated.
    """

    def __init__(self, catalog: Mapping[str, MetricDescriptor]) -> None:
        self.catalog = catalog
        self.lock = threading.Lock()
        self._cells: dict[str, GaugeCell] = {}
        self._registered = False

    @property
    def registered(self) -> bool:
        return self._registered

    @property
    def cells(self) -> tuple[GaugeCell, ...]:
        """Active cells in registration order."""
        return tuple(self._cells.values())

    @property
    def active_names(self) -> tuple[str, ...]:
        return tuple(self._cells)

    def register(self, names: Sequence[str]) -> tuple[GaugeCell, ...]:
        """Activate *names*, allocating one cell each.

        The whole request is validated before anything is allocated.

        Raises:
            ConfigurationError: on an unknown or repeated name, or when this
                registry has already been activated.
        """
        if self._registered:
            raise ConfigurationError(
                code="already_registered",
                message="metrics can only be registered once per run",
            )

        seen: set[str] = set()
        for name in names:
            if name not in self.catalog:
                raise ConfigurationError(
                    code="unknown_metric",
                    message=f"No update function found for metric '{name}'",
                )
            if name in seen:
                raise ConfigurationError(
                    code="duplicate_metric",
                    message=f"Metric '{name}' requested more than once",
                )
            seen.add(name)

        for name in names:
            self._cells[name] = GaugeCell(self.catalog[name])
            log.debug("metric registered", extra={"metric": name})

        self._registered = True
        return self.cells

    def cell(self, name: str) -> GaugeCell | None:
        """The active cell for *name*, or None if it is not active."""
        return self._cells.get(name)

    def read(self, name: str) -> float:
        cell = self._cells[name]
        with self.lock:
            return cell.value

    def collect(self) -> dict[str, float]:
        """Current value of every active cell, keyed by metric name."""
        values: dict[str, float] = {}
        for name, cell in self._cells.items():
            with self.lock:
                values[name] = cell.value
        return values
