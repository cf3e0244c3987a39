"""Snapshot command handler."""

from __future__ import annotations

import argparse
import logging
import sys

from ..config import settings, with_overrides
from ..control import parse_metric_list
from ..core import collect_snapshot
from ..errors import ConfigurationError
from ..formatters import get_formatter
from ..utils import output_text

log = logging.getLogger(__name__)


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Sample the selected metrics a few times and print the gauges."""
    interval = float(args.interval)
    if interval <= 0:
        sys.stderr.write("Error: --interval must be > 0\n")
        return 2

    cfg = with_overrides(settings, network_interface=args.interface, proc_root=args.proc_root)
    names = parse_metric_list(args.metrics) if args.metrics else None

    try:
        snapshot = collect_snapshot(names, cfg, samples=args.samples, interval=interval)
    except ConfigurationError as e:
        log.error("invalid activation: %s", e.message, extra={"code": e.code})
        sys.stderr.write(f"Error: {e.message}\n")
        return 2

    formatter = get_formatter(args.format)
    output_text(formatter.format(snapshot), args.output)
    return 0
