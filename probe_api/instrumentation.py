"""
File: instrumentation.py
Purpose: Build the metric registry and HTTP instruments shared by the middleware and /metrics.

Exports:
  - HTTP_DURATION_NAME: name of the request-duration histogram
  - build_instrumentation(): fresh (registry, histogram) pair with default collectors
  - setup_metrics(app, registry): attach the registry to app.state
  - render_metrics(registry): (content_type, payload) for a FastAPI Response
"""

from typing import Tuple

from fastapi import FastAPI

from .histogram import DEFAULT_BUCKETS, HistogramInstrument
from .registry import MetricRegistry

HTTP_DURATION_NAME = "http_request_duration_seconds"
HTTP_LABELS = ("method", "route", "code")


def build_instrumentation(collect_default: bool = True) -> Tuple[MetricRegistry, HistogramInstrument]:
    """Create a registry holding the request-duration histogram (and process metrics)."""
    registry = MetricRegistry()
    if collect_default:
        registry.collect_default()
    latency = registry.register(
        HistogramInstrument(
            HTTP_DURATION_NAME,
            "Duration of HTTP requests in seconds",
            labelnames=HTTP_LABELS,
            buckets=DEFAULT_BUCKETS,
        )
    )
    return registry, latency


def setup_metrics(app: FastAPI, registry: MetricRegistry) -> None:
    """Attach registry to app.state for /metrics endpoint to read."""
    app.state.prom_registry = registry


def render_metrics(registry: MetricRegistry):
    """Return (content_type, payload) for a Starlette/FastAPI Response."""
    return registry.content_type, registry.render()
