"""Process state counts from /proc/<pid>/stat."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ProcessStates:
    total: int = 0
    suspended: int = 0
    ready: int = 0
    blocked: int = 0


def parse_state(stat_text: str) -> str | None:
    """Return the one-letter state code from a /proc/<pid>/stat line.

    The state is the third field. The command name in field two is wrapped
    in parentheses and may itself contain spaces, so split after its
    closing parenthesis when there is one.
    """
    _, paren, rest = stat_text.rpartition(")")
    if paren:
        fields = rest.split()
        return fields[0][:1] if fields else None
    fields = stat_text.split()
    if len(fields) < 3:
        return None
    return fields[2][:1]


def read_process_states(proc_root: str | Path = "/proc") -> ProcessStates | None:
    """Classify every process under *proc_root* by scheduler state.

    Entries that vanish between listing and reading are skipped.
    """
    try:
        entries = os.listdir(proc_root)
    except OSError as e:
        log.debug("cannot list process directory: %s", e, extra={"path": str(proc_root)})
        return None

    states = ProcessStates()
    for entry in entries:
        if not entry.isdigit():
            continue
        try:
            with open(os.path.join(proc_root, entry, "stat")) as fh:
                text = fh.read()
        except OSError:
            continue

        state = parse_state(text)
        if state is None:
            continue

        states.total += 1
        if state == "S":
            states.suspended += 1
        elif state == "R":
            states.ready += 1
        elif state == "D":
            states.blocked += 1

    return states


class ProcessStatesSampler(BaseSampler):
    METRICS = ("total_processes", "suspended_processes", "ready_processes", "blocked_processes")

    def __init__(self, proc_root: str | Path = "/proc") -> None:
        self.proc_root = Path(proc_root)

    @property
    def name(self) -> str:
        return "process_states"

    @property
    def metrics(self) -> tuple[str, ...]:
        return self.METRICS

    def sample(self) -> dict[str, float]:
        states = read_process_states(self.proc_root)
        if states is None:
            raise SampleError(code="source_unavailable", message=f"cannot list {self.proc_root}")
        return {
            "total_processes": float(states.total),
            "suspended_processes": float(states.suspended),
            "ready_processes": float(states.ready),
            "blocked_processes": float(states.blocked),
        }
