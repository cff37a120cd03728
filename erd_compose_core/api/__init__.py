"""
API module for erd-compose.
"""

from .models import CompareRequest, HealthResponse
from .api import app

__all__ = [
    "CompareRequest",
    "HealthResponse",
    "app"
]
