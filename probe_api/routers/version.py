"""
File: routers/version.py
Purpose: Report the deployed application version.
"""

from fastapi import APIRouter, Depends

from ..config import Settings, get_settings

router = APIRouter(prefix="/api")

@router.get("/version")
def version(settings: Settings = Depends(get_settings)) -> dict:
    """Return APP_VERSION (default 1.0.0)."""
    return {"version": settings.version}
