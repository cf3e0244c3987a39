"""Table formatter for human-readable output."""

from __future__ import annotations

from typing import Any

from .base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Format snapshot as human-readable table."""

    def format(self, snapshot: dict[str, Any]) -> str:
        gauges: dict[str, Any] = snapshot.get("gauges", {})
        width = max((len(name) for name in gauges), default=10)

        lines: list[str] = []
        ts = snapshot.get("timestamp", "")
        lines.append(f"{'=' * 60}")
        lines.append(f"  Gauges - {ts}")
        lines.append(f"{'=' * 60}")

        for name, gauge in gauges.items():
            lines.append(f"  {name:<{width}}  {gauge['value']:>16.2f}  {gauge.get('description', '')}")

        if not gauges:
            lines.append("  (no active metrics)")

        lines.append(f"{'=' * 60}")
        return "\n".join(lines)
