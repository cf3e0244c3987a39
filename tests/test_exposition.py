"""Tests for the Prometheus exposition of active gauges."""

from __future__ import annotations

import urllib.request

import pytest
from prometheus_client import generate_latest

from procgauge.config import Settings
from procgauge.core import activate
from procgauge.errors import ConfigurationError
from procgauge.exposition import build_prometheus_registry, start_exposition


def test_only_active_gauges_are_exposed(fake_settings: Settings) -> None:
    monitor = activate(["rx_bytes_total", "context_switches"], fake_settings)
    monitor.loop.run_once()

    text = generate_latest(build_prometheus_registry(monitor.registry)).decode()

    assert "# HELP rx_bytes_total Total received bytes" in text
    assert "# TYPE rx_bytes_total gauge" in text
    assert "rx_bytes_total 123456.0" in text
    assert "context_switches 123456.0" in text
    assert "tx_bytes_total" not in text


def test_unsampled_gauges_are_zero(fake_settings: Settings) -> None:
    monitor = activate(["cpu_usage_percentage"], fake_settings)
    monitor.loop.run_once()

    text = generate_latest(build_prometheus_registry(monitor.registry)).decode()
    assert "cpu_usage_percentage 0.0" in text


def test_http_scrape(fake_settings: Settings) -> None:
    monitor = activate(["total_processes"], fake_settings)
    monitor.loop.run_once()

    exposition = start_exposition(monitor.registry, 0, addr="127.0.0.1")
    try:
        with urllib.request.urlopen(f"http://127.0.0.1:{exposition.port}/metrics", timeout=5) as resp:
            body = resp.read().decode()
    finally:
        exposition.stop()

    assert "total_processes 4.0" in body


def test_bind_failure(fake_settings: Settings) -> None:
    monitor = activate([], fake_settings)
    first = start_exposition(monitor.registry, 0, addr="127.0.0.1")
    try:
        with pytest.raises(ConfigurationError) as exc:
            start_exposition(monitor.registry, first.port, addr="127.0.0.1")
    finally:
        first.stop()
    assert exc.value.code == "exposition_failed"
