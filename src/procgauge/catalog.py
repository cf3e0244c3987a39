"""The fixed catalog of every metric the monitor can publish."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .config import Settings
from .samplers import (
    BaseSampler,
    CpuUsageSampler,
    DiskStatsSampler,
    DiskUsageSampler,
    MemorySampler,
    MemoryUsageSampler,
    NetworkSampler,
    ProcessStatesSampler,
    ScalarSensorSampler,
    StatKeySampler,
)
from .samplers.sensors import MILLI

# Catalog order; also the order of a catalog dump.
DESCRIPTIONS: tuple[tuple[str, str], ...] = (
    ("rx_bytes_total", "Total received bytes"),
    ("tx_bytes_total", "Total transmitted bytes"),
    ("rx_errors_total", "Total receive errors"),
    ("tx_errors_total", "Total transmit errors"),
    ("dropped_packets_total", "Total dropped packets"),
    ("io_time_ms", "Time spent on I/O in milliseconds"),
    ("writes_completed_total", "Total writes completed"),
    ("reads_completed_total", "Total reads completed"),
    ("total_memory_mb", "Total memory in MB"),
    ("used_memory_mb", "Used memory in MB"),
    ("available_memory_mb", "Available memory in MB"),
    ("context_switches", "Context switches"),
    ("cpu_usage_percentage", "CPU usage in percentage"),
    ("memory_usage_percentage", "Memory usage in percentage"),
    ("disk_usage_percentage", "Disk usage in percentage"),
    ("running_processes_total", "Total running processes"),
    ("cpu_temperature_celsius", "CPU temperature in Celsius"),
    ("battery_voltage_volts", "Battery voltage in volts"),
    ("battery_current_amperes", "Battery current in amperes"),
    ("cpu_frequency_megahertz", "CPU frequency in MHz"),
    ("cpu_fan_speed_rpm", "CPU fan speed in RPM"),
    ("gpu_fan_speed_rpm", "GPU fan speed in RPM"),
    ("total_processes", "Total number of processes"),
    ("suspended_processes", "Suspended processes"),
    ("ready_processes", "Ready processes"),
    ("blocked_processes", "Blocked processes"),
)


@dataclass(frozen=True, slots=True)
class MetricDescriptor:
    """One catalog entry.

    Descriptors of a composite group share the same sampler instance.
    """

    name: str
    description: str
    sampler: BaseSampler


def build_samplers(settings: Settings) -> list[BaseSampler]:
    """Instantiate one sampler per source group."""
    proc = settings.proc_root
    stat_path = os.path.join(proc, "stat")
    meminfo_path = os.path.join(proc, "meminfo")
    return [
        NetworkSampler(settings.network_interface, os.path.join(proc, "net", "dev")),
        DiskStatsSampler(os.path.join(proc, "diskstats")),
        MemorySampler(meminfo_path),
        StatKeySampler("context_switches", "ctxt", stat_path),
        CpuUsageSampler(stat_path),
        MemoryUsageSampler(meminfo_path),
        DiskUsageSampler(settings.disk_root),
        StatKeySampler("running_processes_total", "procs_running", stat_path),
        ScalarSensorSampler("cpu_temperature_celsius", settings.cpu_temp_path, MILLI),
        ScalarSensorSampler("battery_voltage_volts", settings.battery_voltage_path, MILLI),
        ScalarSensorSampler("battery_current_amperes", settings.battery_current_path, MILLI),
        ScalarSensorSampler("cpu_frequency_megahertz", settings.cpu_freq_path, MILLI),
        # Fan inputs are already in RPM.
        ScalarSensorSampler("cpu_fan_speed_rpm", settings.cpu_fan_path, 1.0),
        ScalarSensorSampler("gpu_fan_speed_rpm", settings.gpu_fan_path, 1.0),
        ProcessStatesSampler(proc),
    ]


def build_catalog(settings: Settings) -> Mapping[str, MetricDescriptor]:
    """Build the read-only name -> descriptor mapping.

    Each call returns fresh samplers, so two catalogs never share CPU state.
    """
    by_metric: dict[str, BaseSampler] = {}
    for sampler in build_samplers(settings):
        for metric in sampler.metrics:
            if metric in by_metric:
                raise ValueError(f"metric {metric!r} produced by two samplers")
            by_metric[metric] = sampler

    catalog: dict[str, MetricDescriptor] = {}
    for name, description in DESCRIPTIONS:
        catalog[name] = MetricDescriptor(name=name, description=description, sampler=by_metric[name])

    if set(by_metric) != set(catalog):
        missing = sorted(set(by_metric) - set(catalog))
        raise ValueError(f"samplers produce undocumented metrics: {', '.join(missing)}")

    return MappingProxyType(catalog)
