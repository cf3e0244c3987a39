"""Fixed-period sampling loop."""

from __future__ import annotations

import logging
import threading

from .coordinator import UpdateCoordinator

log = logging.getLogger(__name__)


class SamplingLoop:
    """Sample every active metric, sleep, repeat until stopped.

    The stop flag is checked once per period; a cycle in progress always
    completes.
    """

    def __init__(
        self,
        coordinator: UpdateCoordinator,
        interval: float,
        *,
        stop_event: threading.Event | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self.coordinator = coordinator
        self.interval = float(interval)
        self.stop_event = stop_event or threading.Event()
        self.cycles = 0

    def run_once(self) -> int:
        ok = self.coordinator.run_cycle()
        self.cycles += 1
        return ok

    def run(self, max_cycles: int | None = None) -> None:
        """Block until :meth:`stop` is called or *max_cycles* have run."""
        log.info("sampling loop started")
        while not self.stop_event.is_set():
            self.run_once()
            if max_cycles is not None and self.cycles >= max_cycles:
                break
            self.stop_event.wait(self.interval)
        log.info("sampling loop stopped")

    def stop(self) -> None:
        self.stop_event.set()
