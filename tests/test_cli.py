"""Tests for the command-line entry points."""

from __future__ import annotations

import json
import threading
import time
from pathlib import Path

import pytest

from procgauge import cli
from procgauge.commands import serve


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


def run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    return int(exc.value.code or 0)


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["version"]) == 0
    assert capsys.readouterr().out.startswith("procgauge version ")


def test_health(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["health"]) == 0
    assert json.loads(capsys.readouterr().out)["ok"] is True


def test_list(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 26
    assert lines[0].split()[0] == "rx_bytes_total"


def test_list_to_file(tmp_path: Path) -> None:
    out = tmp_path / "metrics"
    assert run(["list", "--output", str(out)]) == 0
    assert out.read_text().startswith("Metric: rx_bytes_total\nMetric: tx_bytes_total\n")


def test_snapshot_json(fake_proc: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = run(
        [
            "snapshot",
            "--metrics",
            "memory_usage_percentage,total_processes,rx_bytes_total",
            "--proc-root",
            str(fake_proc),
            "--interface",
            "eth0",
            "-n",
            "1",
        ]
    )
    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["gauges"] == {
        "memory_usage_percentage": 50.0,
        "total_processes": 4.0,
        "rx_bytes_total": 123456.0,
    }


def test_snapshot_unknown_metric(capsys: pytest.CaptureFixture[str]) -> None:
    assert run(["snapshot", "--metrics", "bogus_metric", "-n", "1"]) == 2
    assert "bogus_metric" in capsys.readouterr().err


def test_snapshot_rejects_bad_interval() -> None:
    assert run(["snapshot", "--interval", "0"]) == 2


def _serve_args(tmp_path: Path) -> list[str]:
    return [
        "--status-file",
        str(tmp_path / "status"),
        "--metrics-file",
        str(tmp_path / "metrics"),
        "--fifo",
        str(tmp_path / "fifo"),
    ]


def test_serve_unknown_metric(tmp_path: Path) -> None:
    rc = run(["serve", "--metrics", "rx_bytes_total,bogus_metric", *_serve_args(tmp_path)])
    assert rc == 2
    assert (tmp_path / "status").read_text() == (
        "Error: No update function found for metric 'bogus_metric'\n"
    )


def test_serve_dump_request(tmp_path: Path) -> None:
    assert run(["serve", "--metrics", "1", *_serve_args(tmp_path)]) == 0
    assert len((tmp_path / "metrics").read_text().splitlines()) == 26
    assert (tmp_path / "status").read_text() == f"Catalog written to {tmp_path / 'metrics'}\n"


def test_serve_empty_request(tmp_path: Path) -> None:
    assert run(["serve", "--metrics", " , ", *_serve_args(tmp_path)]) == 0
    assert (tmp_path / "status").read_text() == "No metrics requested\n"


def test_serve_until_stopped(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(serve.signal, "signal", lambda *args: None)
    status = tmp_path / "status"

    def stopper() -> None:
        deadline = time.monotonic() + 10
        while time.monotonic() < deadline:
            if status.exists() and status.read_text() == "Metrics monitoring started\n":
                break
            time.sleep(0.01)
        serve._shutdown.set()

    thread = threading.Thread(target=stopper)
    thread.start()
    rc = run(
        [
            "serve",
            "--metrics",
            "context_switches",
            "--port",
            "0",
            "--addr",
            "127.0.0.1",
            "--interval",
            "0.05",
            *_serve_args(tmp_path),
        ]
    )
    thread.join(timeout=10)

    assert rc == 0
    assert status.read_text() == "Metrics monitoring stopped\n"
