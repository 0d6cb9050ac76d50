"""
File: routers/fault.py
Purpose: Fault-injection endpoint for exercising failure-path metrics and alerts.
"""

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings
from ..errors import InjectedFault

router = APIRouter(prefix="/api")

@router.get("/fault")
def fault(settings: Settings = Depends(get_settings)) -> dict:
    """Fail with 500 when FAULT=1, otherwise answer ok."""
    if settings.fault_enabled:
        raise InjectedFault()
    return {"ok": True}
