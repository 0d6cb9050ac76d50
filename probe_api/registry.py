"""
File: registry.py
Purpose: Explicit metric registry that owns instruments and renders the scrape document.

Wraps a private prometheus_client.CollectorRegistry so that each application
instance (and each test) gets its own state instead of the library's global
default registry.
"""

import logging
import threading
from typing import Dict, List, Mapping, Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

from .errors import DuplicateNameError

log = logging.getLogger(__name__)


class MetricRegistry:
    """Name -> instrument mapping backed by a CollectorRegistry."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self):
        self._registry = CollectorRegistry(auto_describe=True)
        self._instruments: Dict[str, object] = {}
        self._defaults_collected = False
        self._lock = threading.Lock()

    def register(self, instrument):
        """Add an instrument; raises DuplicateNameError if its name or series are taken."""
        with self._lock:
            if instrument.name in self._instruments:
                raise DuplicateNameError(instrument.name)
            try:
                self._registry.register(instrument.collector)
            except ValueError as exc:
                # prometheus_client reports overlapping series names as ValueError
                raise DuplicateNameError(instrument.name, str(exc)) from exc
            self._instruments[instrument.name] = instrument
        log.debug("Registered metric %s", instrument.name)
        return instrument

    def unregister(self, name: str) -> None:
        """Remove a registered instrument by name."""
        with self._lock:
            instrument = self._instruments.pop(name)
            self._registry.unregister(instrument.collector)

    def get(self, name: str):
        return self._instruments.get(name)

    def names(self) -> List[str]:
        return sorted(self._instruments)

    def collect_default(self) -> None:
        """Register process, platform and GC collectors with this registry."""
        with self._lock:
            if self._defaults_collected:
                raise DuplicateNameError("process", "default collectors already registered")
            added = []
            try:
                # each collector registers itself with the registry it is given
                for factory in (ProcessCollector, PlatformCollector, GCCollector):
                    added.append(factory(registry=self._registry))
            except ValueError as exc:
                # all or nothing: drop the collectors registered before the failure
                for collector in added:
                    self._registry.unregister(collector)
                raise DuplicateNameError("process", str(exc)) from exc
            self._defaults_collected = True

    def render(self) -> bytes:
        """Serialize every registered collector to text exposition format."""
        return generate_latest(self._registry)

    def sample(self, name: str, labels: Optional[Mapping[str, str]] = None) -> Optional[float]:
        """Return the current value of one exposed sample, or None if absent."""
        return self._registry.get_sample_value(name, dict(labels or {}))
