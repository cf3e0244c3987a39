"""Base formatter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseFormatter(ABC):
    """Render a gauge snapshot (see ``core.collect_snapshot``) as text."""

    @abstractmethod
    def format(self, snapshot: dict[str, Any]) -> str:
        ...
