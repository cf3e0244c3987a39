"""Prometheus text exposition formatter."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily

from .base import BaseFormatter


class _SnapshotCollector:
    def __init__(self, gauges: dict[str, Any]) -> None:
        self.gauges = gauges

    def collect(self) -> Iterator[GaugeMetricFamily]:
        for name, gauge in self.gauges.items():
            yield GaugeMetricFamily(name, gauge.get("description", name), value=gauge["value"])


class PrometheusFormatter(BaseFormatter):
    """Same text a scrape of the running exporter returns."""

    def format(self, snapshot: dict[str, Any]) -> str:
        registry = CollectorRegistry()
        registry.register(_SnapshotCollector(snapshot.get("gauges", {})))
        return generate_latest(registry).decode("utf-8").rstrip("\n")
