"""
File: routers/metrics.py
Purpose: Prometheus metrics endpoint.
"""

from fastapi import APIRouter, Request, Response

from ..instrumentation import render_metrics

router = APIRouter()

@router.get("/metrics")
def metrics(request: Request) -> Response:
    """Expose Prometheus metrics in text format."""
    content_type, payload = render_metrics(request.app.state.prom_registry)
    return Response(payload, media_type=content_type)
