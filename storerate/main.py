"""
Store Rating Backend - Application Factory
Store ratings with per-store aggregates and role-based access control
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import text

from storerate.api import auth, ratings, stats, stores, users
from storerate.config import (
    APP_DESCRIPTION,
    APP_NAME,
    APP_VERSION,
    LOG_LEVEL,
    get_allowed_origins,
)
from storerate.core.exceptions import AppError
from storerate.db import engine, init_db
from storerate.schemas.common import field_errors
from storerate.utils.session_manager import SessionStore

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# ============================================================================
# Pydantic Response Models for Auto-Generated OpenAPI Documentation
# ============================================================================


class RootResponse(BaseModel):
    """Root endpoint response model"""

    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    status: str = Field(..., description="Service status")
    description: str = Field(..., description="Service description")
    endpoints: Dict[str, str] = Field(..., description="Available endpoints")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "service": "Store Rating Backend",
                "version": "1.0.0",
                "status": "running",
                "description": "Store ratings with per-store aggregates and role-based access control",
                "endpoints": {"docs": "/docs", "auth": "/api/auth", "stores": "/api/stores"},
            }
        }
    )


class HealthCheckResponse(BaseModel):
    """Health check response model"""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    database: str = Field(..., description="'connected' or 'disconnected'")


# ============================================================================
# Application Lifecycle Management
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle (startup and shutdown events)

    Startup:
    - Create database tables
    - Log configuration

    Shutdown:
    - Drop expired sessions and report the rest
    """
    # Startup
    logger.info("=" * 70)
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")
    logger.info("=" * 70)

    logger.info("Initializing database...")
    init_db()
    logger.info("✓ Database initialized successfully")

    logger.info(f"✓ CORS: Allowing origins: {get_allowed_origins()}")
    logger.info("✓ Application started successfully")

    yield  # Application is running

    # Shutdown
    sessions: SessionStore = app.state.session_store
    purged = sessions.purge_expired()
    logger.info(f"Shutting down: {purged} expired and {sessions.count()} active session(s) discarded")
    logger.info("✓ Application shutdown complete")


# ============================================================================
# Error Handlers
# ============================================================================


async def app_error_handler(request: Request, exc: AppError):
    """Map domain errors to their status code and a client-safe body"""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Request validation failures become 400 with per-field messages
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Validation Error",
            "message": "Invalid request",
            "details": field_errors(exc.errors()),
        },
    )


async def internal_error_handler(request: Request, exc: Exception):
    """
    Unexpected errors: log the traceback, return a generic body
    """
    logger.error(f"Internal server error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
        },
    )


# ============================================================================
# FastAPI Application
# ============================================================================


def create_app(session_store: Optional[SessionStore] = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        session_store: Session store to use; a fresh in-memory store by default

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title=APP_NAME,
        version=APP_VERSION,
        description=APP_DESCRIPTION,
        lifespan=lifespan,
        docs_url="/docs",  # Swagger UI at /docs
        redoc_url="/redoc",  # ReDoc at /redoc
    )
    app.state.session_store = session_store or SessionStore()

    # Cookies need explicit origins plus credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(stores.router)
    app.include_router(ratings.router)
    app.include_router(stats.router)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    @app.get("/", response_model=RootResponse, tags=["Root"], summary="API Root")
    def root() -> RootResponse:
        return RootResponse(
            service=APP_NAME,
            version=APP_VERSION,
            status="running",
            description=APP_DESCRIPTION,
            endpoints={
                "docs": "/docs",
                "auth": "/api/auth",
                "users": "/api/users",
                "stores": "/api/stores",
                "ratings": "/api/ratings",
                "stats": "/api/stats",
                "health": "/health",
            },
        )

    @app.get("/health", response_model=HealthCheckResponse, tags=["Health"], summary="Health Check")
    def health_check() -> HealthCheckResponse:
        """Database connectivity check for load balancers"""
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return HealthCheckResponse(status="unhealthy", database="disconnected")
        return HealthCheckResponse(status="healthy", database="connected")

    return app
