"""
Health and status endpoints.
"""

from fastapi import APIRouter
from erd_compose_core.api.models import HealthResponse
from datetime import datetime

router = APIRouter()

@router.get("/health", response_model=HealthResponse)
def health():
    """Get API health status"""
    from erd_compose_core import __version__
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now().isoformat(),
        version=__version__
    )
