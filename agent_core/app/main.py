"""
Agent Execution Core - FastAPI Application
==========================================
Main entry point for the API server.
Handles middleware setup, router registration, and application lifecycle.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from agent_core.agents.factory import UnsupportedAgentTypeError
from agent_core.app.api.v1 import api_router
from agent_core.app.core.config import get_settings
from agent_core.app.core.dependencies import WorkSourceManager
from agent_core.app.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    version: str
    environment: str


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    detail: str | None = None
    path: str | None = None
    timestamp: str


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    detail: str | None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            detail=detail,
            path=str(request.url.path),
            timestamp=datetime.now(timezone.utc).isoformat(),
        ).model_dump(),
    )


# =============================================================================
# LIFESPAN MANAGER
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    settings = get_settings()
    configure_logging(settings)

    # === STARTUP ===
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment} (debug={settings.debug})")
    logger.info(
        f"Work source: {settings.work_source} "
        f"(seed={settings.work_source_seed}, delay_scale={settings.simulated_delay_scale})"
    )

    yield

    # === SHUTDOWN ===
    logger.info("Shutting down application")
    WorkSourceManager.reset()


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_application() -> FastAPI:
    """
    Application factory function.
    Creates and configures the FastAPI application.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description=(
            "Executes marketing agents one at a time, as sequential pipelines "
            "that hand each agent's sharedData to the next, or in parallel."
        ),
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    # =========================================================================
    # CORS MIDDLEWARE
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Process-Time"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(UnsupportedAgentTypeError)
    async def unsupported_agent_type_handler(
        request: Request,
        exc: UnsupportedAgentTypeError
    ) -> JSONResponse:
        """Unknown agent types are a client error."""
        logger.warning(f"Rejected agent type: {exc.agent_type}")
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Unsupported Agent Type",
            str(exc),
        )

    @app.exception_handler(ValidationError)
    async def configuration_exception_handler(
        request: Request,
        exc: ValidationError
    ) -> JSONResponse:
        """Handle invalid agent configurations."""
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Invalid Agent Configuration",
            str(exc.errors(include_url=False)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Handle request body validation errors."""
        return _error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Validation Error",
            str(exc.errors()),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle all unhandled exceptions."""
        logger.exception(f"Unhandled exception on {request.url.path}: {exc}")

        # Don't expose internal errors in production
        detail = str(exc) if settings.debug else "Internal server error"

        return _error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            detail,
        )

    # =========================================================================
    # MIDDLEWARE - Request Timing
    # =========================================================================

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        """Add processing time to response headers."""
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get(
        "/",
        tags=["Root"],
        summary="API Root",
        response_model=dict[str, Any]
    )
    async def root() -> dict[str, Any]:
        """
        API root endpoint.
        Returns basic API information and available endpoints.
        """
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "description": "Agent Execution Core API",
            "docs": "/docs" if settings.debug else None,
            "health": "/health",
            "api": f"{settings.api_v1_prefix}",
        }

    @app.get(
        "/health",
        tags=["Health"],
        summary="Health Check",
        response_model=HealthResponse
    )
    async def health_check() -> HealthResponse:
        """
        Health check endpoint.
        Used by load balancers and container orchestrators.
        """
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.app_version,
            environment=settings.environment,
        )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(
        api_router,
        prefix=settings.api_v1_prefix,
    )

    return app


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = create_application()


# =============================================================================
# DEVELOPMENT SERVER
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "agent_core.app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
