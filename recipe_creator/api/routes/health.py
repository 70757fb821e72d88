"""Health check endpoint."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from recipe_creator.api.dependencies import get_settings
from recipe_creator.config import Settings

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(app_settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """Readiness check: reports whether a Gemini API key is configured."""
    return {
        "status": "ready",
        "gemini_configured": bool((app_settings.gemini_api_key or "").strip()),
        "model": app_settings.gemini_model,
    }
