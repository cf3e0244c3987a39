"""Network interface counters from /proc/net/dev."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import SampleError
from .base import BaseSampler

log = logging.getLogger(__name__)

# Field positions after the "iface:" prefix.
_RX_BYTES = 0
_RX_ERRORS = 2
_RX_DROPPED = 3
_TX_BYTES = 8
_TX_ERRORS = 10


@dataclass(frozen=True, slots=True)
class NetworkStats:
    rx_bytes: int = 0
    tx_bytes: int = 0
    rx_errors: int = 0
    tx_errors: int = 0
    dropped_packets: int = 0


def parse_net_dev_line(line: str) -> tuple[str, NetworkStats] | None:
    """Split one interface line into its name and counters."""
    iface, sep, rest = line.partition(":")
    if not sep:
        return None
    fields = rest.split()
    if len(fields) <= _TX_ERRORS:
        return None
    try:
        stats = NetworkStats(
            rx_bytes=int(fields[_RX_BYTES]),
            tx_bytes=int(fields[_TX_BYTES]),
            rx_errors=int(fields[_RX_ERRORS]),
            tx_errors=int(fields[_TX_ERRORS]),
            dropped_packets=int(fields[_RX_DROPPED]),
        )
    except ValueError:
        return None
    return iface.strip(), stats


def read_network_stats(interface: str, path: str | Path = "/proc/net/dev") -> NetworkStats | None:
    """Counters for *interface*.

    An interface that is not listed yields all-zero counters; an unreadable
    file or a malformed line for the interface yields None.
    """
    try:
        with open(path) as fh:
            lines = fh.readlines()
    except OSError as e:
        log.debug("cannot open net/dev: %s", e, extra={"path": str(path)})
        return None

    # Two header lines precede the interfaces.
    for line in lines[2:]:
        if line.partition(":")[0].strip() != interface:
            continue
        parsed = parse_net_dev_line(line)
        if parsed is None:
            log.debug("malformed net/dev line: %r", line, extra={"path": str(path)})
            return None
        return parsed[1]

    return NetworkStats()


class NetworkSampler(BaseSampler):
    """Five gauges for one interface from a single /proc/net/dev read."""

    METRICS = (
        "rx_bytes_total",
        "tx_bytes_total",
        "rx_errors_total",
        "tx_errors_total",
        "dropped_packets_total",
    )

    def __init__(self, interface: str, net_dev_path: str | Path = "/proc/net/dev") -> None:
        self.interface = interface
        self.net_dev_path = Path(net_dev_path)

    @property
    def name(self) -> str:
        return "network"

    @property
    def metrics(self) -> tuple[str, ...]:
        return self.METRICS

    def sample(self) -> dict[str, float]:
        stats = read_network_stats(self.interface, self.net_dev_path)
        if stats is None:
            raise SampleError(
                code="source_unavailable",
                message=f"cannot read counters for {self.interface} from {self.net_dev_path}",
            )
        return {
            "rx_bytes_total": float(stats.rx_bytes),
            "tx_bytes_total": float(stats.tx_bytes),
            "rx_errors_total": float(stats.rx_errors),
            "tx_errors_total": float(stats.tx_errors),
            "dropped_packets_total": float(stats.dropped_packets),
        }
