"""Health check routes."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from core.config import get_settings
from core.utils import utcnow

router = APIRouter()


@router.get("/")
async def health_check() -> Dict[str, Any]:
    """Basic health check - always returns OK."""
    settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": utcnow().isoformat(),
        "environment": settings.environment,
    }


@router.get("/config")
async def config_check() -> Dict[str, Any]:
    """Effective deduplication settings."""
    return {
        "status": "healthy",
        "timestamp": utcnow().isoformat(),
        "settings": get_settings().as_public_dict(),
    }
