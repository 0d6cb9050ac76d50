"""
File: errors.py
Purpose: Error taxonomy for the metrics core and the fault-injection endpoint.
"""

from typing import Iterable


class MetricsError(Exception):
    """Base class for metrics instrumentation errors."""


class DuplicateNameError(MetricsError, ValueError):
    """A metric with the same name (or an overlapping series) is already registered."""

    def __init__(self, name: str, detail: str = ""):
        self.name = name
        message = f"Metric '{name}' is already registered"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class LabelMismatchError(MetricsError, ValueError):
    """Observation labels do not match the label names declared on the instrument."""

    def __init__(self, name: str, missing: Iterable[str] = (), extra: Iterable[str] = ()):
        self.name = name
        self.missing = tuple(sorted(missing))
        self.extra = tuple(sorted(extra))
        parts = []
        if self.missing:
            parts.append(f"missing {list(self.missing)}")
        if self.extra:
            parts.append(f"unexpected {list(self.extra)}")
        super().__init__(f"Label mismatch for '{name}': " + ", ".join(parts))


class InvalidObservationError(MetricsError, ValueError):
    """Observed value is negative, NaN or infinite."""


class TimerAlreadyStoppedError(MetricsError, RuntimeError):
    """A RequestTimer was completed more than once."""


class InjectedFault(Exception):
    """Deliberate, operator-triggered failure used to exercise error-path metrics."""

    status_code = 500
    detail = "Injected fault"

    def __init__(self, detail: str = ""):
        if detail:
            self.detail = detail
        super().__init__(self.detail)
