"""Serve the active gauges to Prometheus scrapers."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from prometheus_client import CollectorRegistry, start_http_server
from prometheus_client.core import GaugeMetricFamily

from .errors import ConfigurationError
from .registry import MetricRegistry

log = logging.getLogger(__name__)


class GaugeSetCollector:
    """prometheus_client collector that pulls the current cell values per scrape."""

    def __init__(self, registry: MetricRegistry) -> None:
        self.registry = registry

    def collect(self) -> Iterator[GaugeMetricFamily]:
        values = self.registry.collect()
        for cell in self.registry.cells:
            yield GaugeMetricFamily(cell.name, cell.descriptor.description, value=values[cell.name])


class Exposition:
    """Handle on a running exposition HTTP server."""

    def __init__(self, server: Any, thread: Any, port: int) -> None:
        self.server = server
        self.thread = thread
        self.port = port

    def stop(self) -> None:
        self.server.shutdown()
        self.server.server_close()
        log.info("exposition stopped")


def build_prometheus_registry(registry: MetricRegistry) -> CollectorRegistry:
    prom_registry = CollectorRegistry()
    prom_registry.register(GaugeSetCollector(registry))
    return prom_registry


def start_exposition(registry: MetricRegistry, port: int, addr: str = "0.0.0.0") -> Exposition:
    """Start serving ``/metrics`` in a daemon thread.

    Raises:
        ConfigurationError: if the address cannot be bound.
    """
    prom_registry = build_prometheus_registry(registry)
    try:
        server, thread = start_http_server(port, addr=addr, registry=prom_registry)
    except OSError as e:
        raise ConfigurationError(
            code="exposition_failed",
            message=f"cannot serve metrics on {addr}:{port}: {e}",
        ) from e
    bound_port = server.server_address[1]
    log.info("exposition listening on %s:%s", addr, bound_port)
    return Exposition(server, thread, bound_port)
