"""PropertyHub Portal Backend - Main Application Entry Point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import CallError, PropertyHubException
from .core.logging import (
    RequestIdMiddleware,
    get_logger,
    get_transaction_id,
    setup_logging,
    shutdown_logging,
)
from .database import init_db

# Import routers
from .modules.maintenance import router as maintenance_router
from .modules.validation import router as validation_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging()
    logger.info("Starting PropertyHub application...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Debug mode: {settings.app_debug}")
    if settings.database_auto_create:
        await init_db()
    yield
    # Shutdown
    logger.info("Shutting down PropertyHub application...")
    shutdown_logging()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description="Property management portal: server-side record validation",
    version=settings.api_version,
    docs_url="/api/docs" if settings.app_debug else None,
    redoc_url="/api/redoc" if settings.app_debug else None,
    openapi_url="/api/openapi.json" if settings.app_debug else None,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request ID middleware for request tracing
app.add_middleware(RequestIdMiddleware)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "code": code,
            "message": message,
            "transaction_id": get_transaction_id(),
        },
    )


# Global exception handlers
@app.exception_handler(CallError)
async def call_error_handler(request: Request, exc: CallError):
    """Render a call that could not be completed as ``{code, message}``."""
    if exc.status_code >= 500:
        logger.error(f"Call failed: {exc.message}", extra={"code": exc.code})
    return _error_response(exc.status_code, exc.code, exc.message)


@app.exception_handler(PropertyHubException)
async def propertyhub_exception_handler(
    request: Request, exc: PropertyHubException
):
    """Handle PropertyHub-specific exceptions."""
    status_code = getattr(exc, "status_code", 400)
    code = "invalid-argument" if status_code < 500 else "internal"
    return _error_response(status_code, code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are invalid arguments."""
    logger.info("Rejected malformed request", extra={"path": request.url.path})
    return _error_response(400, "invalid-argument", "Invalid request body")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    message = str(exc) if settings.app_debug else "Internal server error"
    return _error_response(500, "internal", message)


# Health check endpoint
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.api_version,
        "env": settings.app_env,
    }


# Register routers with /api prefix
app.include_router(validation_router, prefix=settings.api_prefix)
app.include_router(maintenance_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "propertyhub_backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.app_debug,
    )
