"""Serve command: activate metrics, expose them and sample until stopped."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from typing import Any

from ..catalog import build_catalog
from ..companions import Companion, default_companions
from ..config import Settings, settings, with_overrides
from ..control import parse_activation, read_control_message, write_catalog_dump, write_status
from ..core import activate
from ..errors import ConfigurationError
from ..exposition import start_exposition

log = logging.getLogger(__name__)

# Graceful shutdown flag
_shutdown = threading.Event()


def _signal_handler(signum: int, frame: Any) -> None:
    _shutdown.set()
    sys.stderr.write("\n[procgauge] Shutdown requested, exiting gracefully...\n")


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return with_overrides(
        settings,
        sample_interval_seconds=args.interval,
        exporter_port=args.port,
        exporter_addr=args.addr,
        network_interface=args.interface,
        control_fifo=args.fifo,
        status_file=args.status_file,
        metrics_file=args.metrics_file,
    )


def _start_companions(names: str | None) -> list[Companion]:
    if not names:
        return []
    available = default_companions()
    started: list[Companion] = []
    for name in (n.strip() for n in names.split(",") if n.strip()):
        companion = available.get(name)
        if companion is None:
            log.warning("unknown companion %r, skipping", name)
            continue
        if companion.start():
            started.append(companion)
    return started


def cmd_serve(args: argparse.Namespace) -> int:
    cfg = _settings_from_args(args)
    if cfg.sample_interval_seconds <= 0:
        sys.stderr.write("Error: --interval must be > 0\n")
        return 2

    write_status(cfg.status_file, "Starting monitoring from FIFO")

    if args.metrics is not None:
        message = args.metrics
    else:
        try:
            message = read_control_message(cfg.control_fifo)
        except ConfigurationError as e:
            log.error("control channel failed: %s", e.message, extra={"code": e.code})
            write_status(cfg.status_file, f"Error: {e.message}")
            return 1

    request = parse_activation(message)
    if request.dump_catalog:
        write_catalog_dump(build_catalog(cfg), cfg.metrics_file)
        write_status(cfg.status_file, f"Catalog written to {cfg.metrics_file}")
        return 0

    if not request.names:
        log.warning("activation request names no metrics")
        write_status(cfg.status_file, "No metrics requested")
        return 0

    _shutdown.clear()
    try:
        monitor = activate(request.names, cfg, stop_event=_shutdown)
    except ConfigurationError as e:
        log.error("invalid activation: %s", e.message, extra={"code": e.code})
        write_status(cfg.status_file, f"Error: {e.message}")
        return 2

    try:
        exposition = start_exposition(monitor.registry, cfg.exporter_port, cfg.exporter_addr)
    except ConfigurationError as e:
        log.error("exposition failed: %s", e.message, extra={"code": e.code})
        write_status(cfg.status_file, f"Error: {e.message}")
        return 1

    companions = _start_companions(args.companions)

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    write_status(cfg.status_file, "Metrics monitoring started")
    log.info("monitoring %d metrics", len(request.names))
    try:
        monitor.loop.run()
    finally:
        exposition.stop()
        for companion in companions:
            companion.stop()

    write_status(cfg.status_file, "Metrics monitoring stopped")
    return 0
