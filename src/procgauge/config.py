from __future__ import annotations

import os
from dataclasses import dataclass, field, replace


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    service_name: str = field(default_factory=lambda: _get_str("SERVICE_NAME", "procgauge"))
    sample_interval_seconds: float = field(
        default_factory=lambda: _get_float("SAMPLE_INTERVAL_SECONDS", 1.0)
    )
    network_interface: str = field(default_factory=lambda: _get_str("NETWORK_INTERFACE", "eth0"))

    # Exposition endpoint
    exporter_addr: str = field(default_factory=lambda: _get_str("EXPORTER_ADDR", "0.0.0.0"))
    exporter_port: int = field(default_factory=lambda: _get_int("EXPORTER_PORT", 8000))

    # Control channel artifacts
    control_fifo: str = field(default_factory=lambda: _get_str("CONTROL_FIFO", "/tmp/monitor_fifo"))
    status_file: str = field(default_factory=lambda: _get_str("STATUS_FILE", "/tmp/monitor_status"))
    metrics_file: str = field(
        default_factory=lambda: _get_str("METRICS_FILE", "/tmp/monitor_metrics")
    )

    # Source locations
    proc_root: str = field(default_factory=lambda: _get_str("PROC_ROOT", "/proc"))
    disk_root: str = field(default_factory=lambda: _get_str("DISK_ROOT", "/"))
    cpu_temp_path: str = field(
        default_factory=lambda: _get_str("CPU_TEMP_PATH", "/sys/class/hwmon/hwmon4/temp1_input")
    )
    battery_voltage_path: str = field(
        default_factory=lambda: _get_str(
            "BATTERY_VOLTAGE_PATH", "/sys/class/hwmon/hwmon2/in0_input"
        )
    )
    battery_current_path: str = field(
        default_factory=lambda: _get_str(
            "BATTERY_CURRENT_PATH", "/sys/class/hwmon/hwmon2/curr1_input"
        )
    )
    cpu_freq_path: str = field(
        default_factory=lambda: _get_str(
            "CPU_FREQ_PATH", "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"
        )
    )
    cpu_fan_path: str = field(
        default_factory=lambda: _get_str("CPU_FAN_PATH", "/sys/class/hwmon/hwmon5/fan1_input")
    )
    gpu_fan_path: str = field(
        default_factory=lambda: _get_str("GPU_FAN_PATH", "/sys/class/hwmon/hwmon5/fan2_input")
    )


settings = Settings()


def with_overrides(base: Settings, **overrides: object) -> Settings:
    """Copy of *base* with every non-None override applied."""
    changes = {k: v for k, v in overrides.items() if v is not None}
    return replace(base, **changes) if changes else base
