"""
File: histogram.py
Purpose: Fixed-bucket request-duration histogram and its single-use request timer.

Backed by prometheus_client.Histogram, which keeps one locked counter per bucket
plus a locked sum for every label combination. This module adds what the client
library leaves to the caller:
  - strict label validation (exact declared label set, LabelMismatchError)
  - value validation (finite, non-negative)
  - timers whose labels are only known when the request completes
  - read-only snapshots of a single label combination
"""

import math
import numbers
from dataclasses import dataclass, field
from timeit import default_timer
from typing import List, Mapping, Optional, Sequence, Tuple

from prometheus_client import Histogram

from .errors import InvalidObservationError, LabelMismatchError, TimerAlreadyStoppedError

DEFAULT_BUCKETS = (0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5)


@dataclass(frozen=True)
class HistogramSnapshot:
    """Cumulative bucket counts, sum and count for one label combination."""
    buckets: List[Tuple[float, float]] = field(default_factory=list)
    sum: float = 0.0
    count: float = 0.0


class HistogramInstrument:
    """Cumulative histogram keyed by label combination."""

    type = "histogram"

    def __init__(
        self,
        name: str,
        documentation: str,
        labelnames: Sequence[str] = (),
        buckets: Sequence[float] = DEFAULT_BUCKETS,
    ):
        self.name = name
        self.documentation = documentation
        self.labelnames = tuple(labelnames)
        self.buckets = _validate_buckets(buckets)
        # registry=None: registration is owned by MetricRegistry, never the global default
        self.collector = Histogram(
            name,
            documentation,
            labelnames=self.labelnames,
            buckets=self.buckets,
            registry=None,
        )

    def observe(self, value: float, labels: Optional[Mapping[str, object]] = None) -> None:
        """Record one sample into every bucket whose upper bound is >= value."""
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidObservationError(f"{self.name}: expected a number, got {value!r}")
        if not math.isfinite(value) or value < 0:
            raise InvalidObservationError(f"{self.name}: value must be finite and >= 0, got {value!r}")
        self._child(labels).observe(value)

    def start_timer(self) -> "RequestTimer":
        """Start timing a request; labels are supplied when the timer is stopped."""
        return RequestTimer(self)

    def snapshot(self, labels: Optional[Mapping[str, object]] = None) -> HistogramSnapshot:
        """Return the current state of one label combination without creating it."""
        wanted = self._label_values(labels)
        buckets: List[Tuple[float, float]] = []
        total = count = 0.0
        for family in self.collector.collect():
            for sample in family.samples:
                sample_labels = dict(sample.labels)
                le = sample_labels.pop("le", None)
                if sample_labels != wanted:
                    continue
                if sample.name.endswith("_bucket"):
                    buckets.append((float(le), sample.value))
                elif sample.name.endswith("_sum"):
                    total = sample.value
                elif sample.name.endswith("_count"):
                    count = sample.value
        if not buckets:
            buckets = [(bound, 0.0) for bound in self.buckets] + [(math.inf, 0.0)]
        return HistogramSnapshot(buckets=buckets, sum=total, count=count)

    def _child(self, labels):
        if not self.labelnames:
            self._label_values(labels)
            return self.collector
        return self.collector.labels(**self._label_values(labels))

    def _label_values(self, labels) -> dict:
        given = dict(labels or {})
        declared = set(self.labelnames)
        missing = declared - set(given)
        extra = set(given) - declared
        if missing or extra:
            raise LabelMismatchError(self.name, missing=missing, extra=extra)
        return {key: str(value) for key, value in given.items()}

    def __repr__(self) -> str:
        return f"HistogramInstrument(name={self.name!r}, labelnames={self.labelnames!r})"


class RequestTimer:
    """Single-use timer; stop() observes the elapsed seconds exactly once."""

    def __init__(self, histogram: HistogramInstrument):
        self.histogram = histogram
        self.start = default_timer()
        self.duration: Optional[float] = None

    @property
    def stopped(self) -> bool:
        return self.duration is not None

    def stop(self, labels: Optional[Mapping[str, object]] = None) -> float:
        """Observe elapsed time with the given labels and return it in seconds."""
        if self.duration is not None:
            raise TimerAlreadyStoppedError(f"Timer for '{self.histogram.name}' was already stopped")
        # default_timer is monotonic; clamp guards against sub-resolution negatives
        duration = max(default_timer() - self.start, 0.0)
        self.histogram.observe(duration, labels)
        self.duration = duration
        return duration

    __call__ = stop


def _validate_buckets(buckets: Sequence[float]) -> Tuple[float, ...]:
    bounds = tuple(float(b) for b in buckets)
    if not bounds:
        raise ValueError("Histogram needs at least one bucket")
    if not all(math.isfinite(b) for b in bounds):
        raise ValueError("Bucket bounds must be finite; +Inf is added implicitly")
    if any(lo >= hi for lo, hi in zip(bounds, bounds[1:])):
        raise ValueError(f"Bucket bounds must be strictly ascending: {bounds}")
    return bounds
