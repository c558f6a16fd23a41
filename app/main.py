# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Artpreneur API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    ArtpreneurException,
    artpreneur_exception_handler,
    validation_exception_handler,
)
from app.routers import health, health_score

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown."""
    logger.info(f"Starting Artpreneur API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Artpreneur API")


# Create FastAPI application
app = FastAPI(
    title="Artpreneur API",
    description="""
## Creative Health Score API

Computes a point-in-time wellness snapshot for a creative professional from
the last 30 days of activity:

| Sub-score | Signal | Weight |
|-----------|--------|--------|
| **Productivity** | Artwork valuations (20 points each) | 30% |
| **Financial health** | Average recommended price left after expenses | 30% |
| **Learning engagement** | Fixed at 50 | 20% |
| **Community participation** | Forum posts (15) and comments (5) | 20% |

Authenticate with the Supabase access token: `Authorization: Bearer <token>`.
""",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Health Score",
            "description": "Calculate and read the Creative Health Score",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - the dashboard calls the API from the browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=settings.is_production,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ArtpreneurException)
async def handle_artpreneur_exception(request: Request, exc: ArtpreneurException):
    """Handle custom Artpreneur exceptions."""
    return await artpreneur_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Creative Health Score endpoints
app.include_router(
    health_score.router,
    prefix="/api/v1/health-score",
    tags=["Health Score"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """Root endpoint - returns API info."""
    return {
        "name": "Artpreneur API",
        "version": __version__,
        "docs": "/docs",
        "health": "/api/v1/health",
    }
