"""Source readers and the samplers built on them."""

from __future__ import annotations

from .base import BaseSampler
from .cpu import CpuUsageSampler
from .disk import DiskStatsSampler, DiskUsageSampler
from .memory import MemorySampler, MemoryUsageSampler
from .network import NetworkSampler
from .process import ProcessStatesSampler
from .sensors import ScalarSensorSampler
from .system import StatKeySampler

__all__ = [
    "BaseSampler",
    "CpuUsageSampler",
    "DiskStatsSampler",
    "DiskUsageSampler",
    "MemorySampler",
    "MemoryUsageSampler",
    "NetworkSampler",
    "ProcessStatesSampler",
    "ScalarSensorSampler",
    "StatKeySampler",
]
