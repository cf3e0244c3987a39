"""Tests for process state classification."""

from __future__ import annotations

from pathlib import Path

import pytest

from procgauge.errors import SampleError
from procgauge.samplers.process import (
    ProcessStates,
    ProcessStatesSampler,
    parse_state,
    read_process_states,
)


def test_classifies_states(fake_proc: Path) -> None:
    states = read_process_states(fake_proc)
    # pid 5 has no stat file and "self" is not numeric: neither is counted
    assert states == ProcessStates(total=4, suspended=2, ready=1, blocked=1)


def test_other_states_count_towards_total_only(tmp_path: Path) -> None:
    for pid, state in [(10, "Z"), (11, "I"), (12, "R")]:
        (tmp_path / str(pid)).mkdir()
        (tmp_path / str(pid) / "stat").write_text(f"{pid} (x) {state} 1\n")
    assert read_process_states(tmp_path) == ProcessStates(total=3, ready=1)


def test_empty_stat_file_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "7").mkdir()
    (tmp_path / "7" / "stat").write_text("")
    assert read_process_states(tmp_path) == ProcessStates()


def test_missing_proc_dir(tmp_path: Path) -> None:
    assert read_process_states(tmp_path / "nope") is None


@pytest.mark.parametrize(
    ("text", "state"),
    [
        ("1 (init) S 0 1 1", "S"),
        ("42 (Web Content) R 1 42", "R"),
        ("43 (a) b) D 1", "D"),
        ("44 bash S 1", "S"),
        ("45", None),
        ("46 (x)", None),
    ],
)
def test_parse_state(text: str, state: str | None) -> None:
    assert parse_state(text) == state


def test_sampler(fake_proc: Path) -> None:
    assert ProcessStatesSampler(fake_proc).sample() == {
        "total_processes": 4.0,
        "suspended_processes": 2.0,
        "ready_processes": 1.0,
        "blocked_processes": 1.0,
    }


def test_sampler_failure(tmp_path: Path) -> None:
    with pytest.raises(SampleError):
        ProcessStatesSampler(tmp_path / "nope").sample()
