"""JSON formatter."""

from __future__ import annotations

import json
from typing import Any

from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Flat ``{"timestamp": ..., "gauges": {name: value}}`` document."""

    def format(self, snapshot: dict[str, Any]) -> str:
        payload = {
            "timestamp": snapshot.get("timestamp"),
            "gauges": {name: g["value"] for name, g in snapshot.get("gauges", {}).items()},
        }
        return json.dumps(payload, ensure_ascii=False, indent=2)
