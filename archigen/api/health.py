"""Health check endpoint."""

from fastapi import APIRouter, Request
from datetime import datetime

from .. import __version__

router = APIRouter()


@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat() + "Z",
        "service": "archigen-transform",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness check: the service is only useful with a Gemini key."""
    config = request.app.state.config
    return {
        "ready": config.has_credential,
        "credential_configured": config.has_credential,
        "live_sessions": len(request.app.state.sessions),
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }
