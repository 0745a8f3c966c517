"""
Gremio FastAPI Application
Main entry point for the Gremio API.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Common library imports
from common.database import SupabaseBackend
from common.utils import error_response, success_response

# App-specific imports
from gremio.config import settings

# Import routers
from gremio.routers import (
    account_router,
    applications_router,
    auth_router,
    profile_router,
    verification_router,
)

# Import service initialization
from gremio.dependencies import init_all_services

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Backend Instance
# =============================================================================

backend = SupabaseBackend()


# =============================================================================
# Application Lifespan
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown tasks like the Supabase client and
    service initialization.
    """
    # Startup
    logger.info("Starting Gremio API...")
    settings.validate_required()

    await backend.connect(
        url=settings.SUPABASE_URL,
        key=settings.SERVICE_ROLE_KEY,
    )

    init_all_services(client=backend.client, settings=settings)
    logger.info("Gremio API started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down Gremio API...")
    await backend.disconnect()
    logger.info("Gremio API shut down complete.")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title="Gremio API",
    description="Job marketplace backend: accounts, applications and profiles",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.is_development() else None,
    redoc_url="/redoc" if settings.is_development() else None,
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# =============================================================================
# Error Handling
# =============================================================================

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler; API exceptions never get here."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=error_response("Error interno del servidor", code="INTERNAL_ERROR"),
    )


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(verification_router, tags=["Verification"])
app.include_router(auth_router, tags=["Authentication"])
app.include_router(account_router, tags=["Account"])
app.include_router(applications_router, tags=["Applications"])
app.include_router(profile_router, tags=["Profile"])


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    return success_response()


@app.get("/health", tags=["Health"])
async def health():
    """
    Health check endpoint.

    Returns the status of the API and the backend client.
    """
    return success_response({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": backend.is_connected,
    })


# =============================================================================
# Run with Uvicorn
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
