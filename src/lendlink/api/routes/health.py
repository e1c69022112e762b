"""Health check endpoints."""

from fastapi import APIRouter, Depends

from lendlink import __version__
from lendlink.api.dependencies import get_app_settings
from lendlink.config import Settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "lendlink"}


@router.get("/health/detailed")
async def detailed_health(settings: Settings = Depends(get_app_settings)):
    """Detailed health check with configuration info."""
    return {
        "status": "healthy",
        "service": "lendlink",
        "version": __version__,
        "config": settings.get_safe_dict(),
    }
