"""Base sampler interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseSampler(ABC):
    """Abstract base class for all samplers.

    A sampler performs one source read per call and returns the value of
    every gauge it feeds, keyed by metric name.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Sampler name used in logs."""
        ...

    @property
    @abstractmethod
    def metrics(self) -> tuple[str, ...]:
        """Names of the gauges produced by :meth:`sample`."""
        ...

    @abstractmethod
    def sample(self) -> dict[str, float]:
        """Read the source once and return gauge values.

        Raises:
            SampleError: if the source is unavailable or cannot be parsed.
        """
        ...
