"""CLI interface for the procgauge exporter."""

from __future__ import annotations

import argparse
import sys

from .commands.catalog import cmd_list
from .commands.health import cmd_health, cmd_version
from .commands.serve import cmd_serve
from .commands.snapshot import cmd_snapshot
from .config import settings
from .formatters import FORMATS
from .logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="procgauge",
        description="Publish kernel counters as Prometheus gauges",
    )

    # Global options
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: $LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # serve command
    p_serve = subparsers.add_parser(
        "serve",
        help="Activate metrics and serve them until interrupted",
    )
    p_serve.add_argument(
        "--metrics",
        "-m",
        default=None,
        help="Comma-separated metric names; '1' dumps the catalog (default: read the control FIFO)",
    )
    p_serve.add_argument(
        "--interval",
        "-i",
        type=float,
        default=None,
        help=f"Sampling period in seconds (default: {settings.sample_interval_seconds})",
    )
    p_serve.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help=f"Exposition port (default: {settings.exporter_port})",
    )
    p_serve.add_argument("--addr", default=None, help=f"Bind address (default: {settings.exporter_addr})")
    p_serve.add_argument(
        "--interface",
        default=None,
        help=f"Network interface to report (default: {settings.network_interface})",
    )
    p_serve.add_argument("--fifo", default=None, help=f"Control FIFO (default: {settings.control_fifo})")
    p_serve.add_argument(
        "--status-file",
        default=None,
        help=f"Status file (default: {settings.status_file})",
    )
    p_serve.add_argument(
        "--metrics-file",
        default=None,
        help=f"Catalog dump file (default: {settings.metrics_file})",
    )
    p_serve.add_argument(
        "--companions",
        default=None,
        help="Comma-separated companion daemons to start: grafana, prometheus",
    )
    p_serve.set_defaults(func=cmd_serve)

    # list command
    p_list = subparsers.add_parser(
        "list",
        help="List every metric in the catalog",
    )
    p_list.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Write the catalog dump to this file instead of stdout",
    )
    p_list.set_defaults(func=cmd_list)

    # snapshot command
    p_snapshot = subparsers.add_parser(
        "snapshot",
        help="Sample metrics once and print the gauges",
    )
    p_snapshot.add_argument(
        "--metrics",
        "-m",
        default=None,
        help="Comma-separated metric names (default: whole catalog)",
    )
    p_snapshot.add_argument(
        "--format",
        "-f",
        choices=list(FORMATS),
        default="json",
        help="Output format (default: json)",
    )
    p_snapshot.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    p_snapshot.add_argument(
        "--samples",
        "-n",
        type=int,
        default=2,
        help="Sampling cycles before printing (default: 2)",
    )
    p_snapshot.add_argument(
        "--interval",
        "-i",
        type=float,
        default=0.5,
        help="Seconds between cycles (default: 0.5)",
    )
    p_snapshot.add_argument("--interface", default=None, help="Network interface to report")
    p_snapshot.add_argument("--proc-root", default=None, help="procfs mount point (default: /proc)")
    p_snapshot.set_defaults(func=cmd_snapshot)

    # health command
    p_health = subparsers.add_parser(
        "health",
        help="Health check",
    )
    p_health.set_defaults(func=cmd_health)

    # version command
    p_version = subparsers.add_parser(
        "version",
        help="Show version",
    )
    p_version.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    if args.version:
        from . import __version__

        sys.stdout.write(f"procgauge version {__version__}\n")
        raise SystemExit(0)

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    rc = int(args.func(args))
    raise SystemExit(rc)
