"""Health check endpoints."""

from fastapi import APIRouter

from treatment_assistant import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check."""
    return {"status": "healthy", "service": "treatment-plan-assistant"}


@router.get("/")
async def root():
    """API root."""
    return {
        "name": "Treatment Plan Assistant API",
        "version": __version__,
        "docs": "/docs",
    }
