"""
procgauge

Samples kernel counters (CPU, memory, disk, network, process states,
hwmon sensors) and publishes them as Prometheus gauges.
"""

from __future__ import annotations

from .core import activate, collect_snapshot

__all__ = ["__version__", "activate", "collect_snapshot"]

__version__ = "0.1.0"
