from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from procgauge.config import Settings

STAT = (
    "cpu  100 0 50 800 50 0 0 0 0 0\n"
    "cpu0 50 0 25 400 25 0 0 0 0 0\n"
    "intr 12345 0 0\n"
    "ctxt 123456\n"
    "btime 1700000000\n"
    "processes 4242\n"
    "procs_running 3\n"
    "procs_blocked 1\n"
)

MEMINFO = (
    "MemTotal:       16000000 kB\n"
    "MemFree:         4000000 kB\n"
    "MemAvailable:    8000000 kB\n"
    "Buffers:         1000000 kB\n"
    "Cached:          3000000 kB\n"
    "SwapCached:            0 kB\n"
    "HugePages_Total:       0\n"
)

DISKSTATS = (
    "   8       0 sda 100 1 2 3 200 4 5 6 0 300 7 0 0 0 0\n"
    "   8       1 sda1 10 1 2 3 20 4 5 6 0 30 7 0 0 0 0\n"
    "   7       0 loop0 1 2\n"
)

NET_DEV = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|"
    "bytes    packets errs drop fifo colls carrier compressed\n"
    "    lo:    5000      50    0    0    0     0          0         0"
    "     5000      50    0    0    0     0       0          0\n"
    "  veth0:   1111      11    1    1    0     0          0         0"
    "     2222      22    2    0    0     0       0          0\n"
    "  eth0: 123456     100    7    3    0     0          0         0"
    "   654321     200    9    0    0     0       0          0\n"
)


def _write_cpu_line(proc: Path, values: tuple[int, ...]) -> None:
    rest = (proc / "stat").read_text().splitlines(keepends=True)[1:]
    line = "cpu  " + " ".join(str(v) for v in values) + " 0 0\n"
    (proc / "stat").write_text(line + "".join(rest))


@pytest.fixture()
def set_cpu_line(fake_proc: Path) -> Callable[[tuple[int, ...]], None]:
    """Replace the aggregate cpu line of the fake /proc/stat."""
    return lambda values: _write_cpu_line(fake_proc, values)


@pytest.fixture()
def fake_proc(tmp_path: Path) -> Path:
    """A minimal /proc tree with four processes."""
    proc = tmp_path / "proc"
    (proc / "net").mkdir(parents=True)
    (proc / "stat").write_text(STAT)
    (proc / "meminfo").write_text(MEMINFO)
    (proc / "diskstats").write_text(DISKSTATS)
    (proc / "net" / "dev").write_text(NET_DEV)

    for pid, comm, state in [
        (1, "init", "S"),
        (2, "kthreadd", "R"),
        (3, "Web Content", "D"),
        (4, "bash", "S"),
    ]:
        (proc / str(pid)).mkdir()
        (proc / str(pid) / "stat").write_text(f"{pid} ({comm}) {state} 0 1 1 0 -1 4194560\n")

    # Vanished process: directory listed, stat gone.
    (proc / "5").mkdir()
    # Non-numeric entries are never counted.
    (proc / "self").mkdir()
    (proc / "self" / "stat").write_text("9 (python) R 1 9 9 0\n")
    return proc


@pytest.fixture()
def sensors(tmp_path: Path) -> Path:
    hwmon = tmp_path / "hwmon"
    hwmon.mkdir()
    (hwmon / "temp1_input").write_text("45500\n")
    (hwmon / "in0_input").write_text("12600\n")
    (hwmon / "curr1_input").write_text("1500\n")
    (hwmon / "scaling_cur_freq").write_text("2400000\n")
    (hwmon / "fan1_input").write_text("1200\n")
    (hwmon / "fan2_input").write_text("900\n")
    return hwmon


@pytest.fixture()
def fake_settings(fake_proc: Path, sensors: Path, tmp_path: Path) -> Settings:
    return Settings(
        network_interface="eth0",
        proc_root=str(fake_proc),
        disk_root=str(tmp_path),
        cpu_temp_path=str(sensors / "temp1_input"),
        battery_voltage_path=str(sensors / "in0_input"),
        battery_current_path=str(sensors / "curr1_input"),
        cpu_freq_path=str(sensors / "scaling_cur_freq"),
        cpu_fan_path=str(sensors / "fan1_input"),
        gpu_fan_path=str(sensors / "fan2_input"),
        control_fifo=str(tmp_path / "monitor_fifo"),
        status_file=str(tmp_path / "monitor_status"),
        metrics_file=str(tmp_path / "monitor_metrics"),
        sample_interval_seconds=0.01,
    )
