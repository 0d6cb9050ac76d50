"""probe-api: health, version, fault-injection and Prometheus metrics endpoints."""

__version__ = "1.0.0"
