"""Wiring of catalog, registry, coordinator and loop."""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from .catalog import build_catalog
from .config import Settings
from .coordinator import UpdateCoordinator
from .loop import SamplingLoop
from .registry import MetricRegistry


@dataclass(slots=True)
class Monitor:
    registry: MetricRegistry
    coordinator: UpdateCoordinator
    loop: SamplingLoop


def activate(
    names: Sequence[str],
    settings: Settings,
    *,
    stop_event: threading.Event | None = None,
) -> Monitor:
    """Build a fresh catalog and activate *names* on it.

    Raises:
        ConfigurationError: if any name is unknown or repeated.
    """
    registry = MetricRegistry(build_catalog(settings))
    registry.register(names)
    coordinator = UpdateCoordinator(registry)
    loop = SamplingLoop(coordinator, settings.sample_interval_seconds, stop_event=stop_event)
    return Monitor(registry=registry, coordinator=coordinator, loop=loop)


def collect_snapshot(
    names: Sequence[str] | None,
    settings: Settings,
    *,
    samples: int = 2,
    interval: float = 0.5,
) -> dict[str, Any]:
    """Sample *names* (default: the whole catalog) a few times and return the gauges.

    More than one sample lets rate-based gauges such as CPU usage get a
    baseline.
    """
    if names is None:
        names = list(build_catalog(settings))
    monitor = activate(names, settings)

    for i in range(max(1, samples)):
        if i:
            time.sleep(interval)
        monitor.loop.run_once()

    values = monitor.registry.collect()
    return {
        "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
        "gauges": {
            cell.name: {"value": values[cell.name], "description": cell.descriptor.description}
            for cell in monitor.registry.cells
        },
    }
