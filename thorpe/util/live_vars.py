"""Named timing metrics for generation stages.

Generation code wraps each stage in ``record_time_live_variable`` so that
scripts (and anyone embedding the generator) can report how long
designation, farm growth, town placement and building placement took.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from contextlib import contextmanager, nullcontext, suppress
from dataclasses import dataclass
from time import perf_counter
from typing import NamedTuple

import numpy as np


class MostRecentNVar:
    """Statistics over the most recent ``num_samples`` recorded values."""

    def __init__(self, num_samples: int = 100) -> None:
        if num_samples <= 0:
            raise ValueError("num_samples must be a positive integer.")
        self.samples: deque[float] = deque(maxlen=num_samples)

    def record(self, value: float) -> None:
        self.samples.append(value)

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    @property
    def mean(self) -> float:
        return float(np.mean(self.samples)) if self.samples else 0.0

    def get_percentiles(self) -> tuple[float, float, float]:
        """Return (p50, p95, p99); zeros when nothing has been recorded."""
        if not self.samples:
            return (0.0, 0.0, 0.0)
        p50, p95, p99 = np.percentile(np.fromiter(self.samples, float), [50, 95, 99])
        return (float(p50), float(p95), float(p99))

    def get_percentiles_string(self) -> str:
        p50, p95, p99 = self.get_percentiles()
        return f"p50={p50:.2f} p95={p95:.2f} p99={p99:.2f}"


class MetricSpec(NamedTuple):
    """Definition for a metric to register in batch."""

    name: str
    description: str
    num_samples: int = 100


@dataclass
class LiveVariable:
    """A metric exposed for inspection."""

    name: str
    description: str
    stats_var: MostRecentNVar

    def record_value(self, value: float) -> None:
        self.stats_var.record(value)

    def get_stats_summary(self) -> str:
        if self.stats_var.sample_count == 0:
            return "No samples"
        return self.stats_var.get_percentiles_string()


class LiveVariableRegistry:
    """Registry for all ``LiveVariable`` instances.

    When ``strict`` is ``True`` (the default), recording a metric that has
    not been registered raises immediately. With ``strict = False`` timing
    wrappers skip names that were never registered.
    """

    def __init__(self) -> None:
        self._variables: dict[str, LiveVariable] = {}
        self.strict: bool = True

    def register_metric(
        self, name: str, description: str = "", num_samples: int = 100
    ) -> LiveVariable:
        """Register a metric that tracks the most recent ``num_samples`` values."""
        if name in self._variables:
            raise ValueError(f"Live variable '{name}' already registered")
        live_var = LiveVariable(
            name=name,
            description=description,
            stats_var=MostRecentNVar(num_samples),
        )
        self._variables[name] = live_var
        return live_var

    def register_metrics(self, specs: Sequence[MetricSpec]) -> None:
        """Register every spec not registered yet."""
        for spec in specs:
            if spec.name in self._variables:
                continue
            self.register_metric(
                spec.name, description=spec.description, num_samples=spec.num_samples
            )

    def get_variable(self, name: str) -> LiveVariable | None:
        return self._variables.get(name)

    def get_all_variables(self) -> list[LiveVariable]:
        return sorted(self._variables.values(), key=lambda v: v.name)

    def record_metric(self, name: str, value: float) -> None:
        """Record a value to a metric variable.

        Raises:
            KeyError: If the metric name is not registered.
        """
        var = self.get_variable(name)
        if var is None:
            raise KeyError(f"Metric '{name}' is not registered")
        var.record_value(value)


# Global registry instance
live_variable_registry = LiveVariableRegistry()


@contextmanager
def record_time_live_variable(metric_name: str):
    """Record elapsed wall-clock time (ms) to the named metric.

    Works as both a context manager and a decorator. In strict mode an
    unregistered metric raises ``KeyError``; otherwise it is skipped.
    """
    start = perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (perf_counter() - start) * 1000
        ctx = nullcontext() if live_variable_registry.strict else suppress(KeyError)
        with ctx:
            live_variable_registry.record_metric(metric_name, elapsed_ms)
