"""
Custom error handlers for the API.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from erd_compose_core.lib.errors import (
    InputReadFailure,
    CatalogQueryFailure,
    ReferentialIntegrityViolation,
)

ERROR_STATUS = {
    InputReadFailure: 400,
    ReferentialIntegrityViolation: 422,
    CatalogQueryFailure: 502,
}

async def not_found_handler(request: Request, exc):
    """Handle 404 errors"""
    return JSONResponse(
        status_code=404,
        content={"error": "Endpoint not found", "path": str(request.url.path)}
    )

async def internal_error_handler(request: Request, exc):
    """Handle 500 errors"""
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )

async def reconcile_error_handler(request: Request, exc):
    """Map reconciliation failures to a status code; no partial script is returned"""
    status_code = next((code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)), 500)
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)}
    )
