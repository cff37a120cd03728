"""
Main FastAPI application for erd-compose.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from erd_compose_core.lib.errors import ErdComposeError
from .home import router as home_router
from .health import router as health_router
from .compare import router as compare_router
from .errors import not_found_handler, internal_error_handler, reconcile_error_handler

app = FastAPI(
    title="erd-compose API",
    description="Reconcile ERD design documents with a live DB2 catalog",
    version="0.1.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(home_router, tags=["system"])
app.include_router(health_router, tags=["system"])
app.include_router(compare_router, tags=["schema"])

# Add error handlers
app.add_exception_handler(404, not_found_handler)
app.add_exception_handler(500, internal_error_handler)
app.add_exception_handler(ErdComposeError, reconcile_error_handler)

# To run: uvicorn erd_compose_core.api:app --reload --host 0.0.0.0 --port 8000
