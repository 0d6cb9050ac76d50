"""
File: routers/health.py
Purpose: Liveness probe.
"""

from fastapi import APIRouter

router = APIRouter()

@router.get("/healthz")
def healthz() -> dict:
    """Return service health status for liveness probes."""
    return {"ok": True}
