"""
Remotable tenant service.

FastAPI application serving local tenant records mirrored from a remote
tenant directory.
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from remotable.config import settings, validate_remote_settings
from remotable.database import init_db
from remotable.errors import RemoteError
from remotable.logging import get_logger, setup_logging
from remotable.middleware.rate_limit import limiter
from remotable.routers.tenants import router as tenants_router

# Import models to register them with Base.metadata
from remotable.models import BespokeTenant, NullTestTenant, Tenant  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Application lifespan handler for startup/shutdown."""
    setup_logging(settings.log_level)
    validate_remote_settings()
    await init_db()
    logger.info("Remotable started against %s", settings.remote_base_url)
    yield


app = FastAPI(
    title="Remotable",
    description="Local tenant records mirrored from a remote tenant directory",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter state
app.state.limiter = limiter

# Rate limit exceeded handler
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.include_router(tenants_router)


# --- Middleware ---


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add a unique request ID to each request."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


# --- Exception Handlers ---


def _sanitize_error_detail(error: dict[str, Any]) -> dict[str, Any]:
    """Sanitize Pydantic error detail to be JSON-serializable."""
    sanitized = {}
    for key, value in error.items():
        if key == "ctx":
            # Context may hold exception instances
            sanitized[key] = {k: str(v) for k, v in value.items()} if isinstance(value, dict) else str(value)
        elif key == "loc":
            sanitized[key] = [str(loc) for loc in value]
        else:
            sanitized[key] = value
    return sanitized


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with consistent error format."""
    request_id = getattr(request.state, "request_id", None)

    errors = [_sanitize_error_detail(e) for e in exc.errors()]
    if errors:
        first_error = errors[0]
        field = ".".join(str(loc) for loc in first_error.get("loc", []))
        msg = first_error.get("msg", "Validation error")
        message = f"{field}: {msg}" if field else msg
    else:
        message = "Validation error"

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "code": "VALIDATION_ERROR",
                "message": message,
                "request_id": request_id,
                "details": errors,
            }
        },
    )


@app.exception_handler(RemoteError)
async def remote_exception_handler(request: Request, exc: RemoteError) -> JSONResponse:
    """Report remote directory failures by category."""
    request_id = getattr(request.state, "request_id", None)
    logger.warning("Request %s failed upstream: %s", request_id, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.error_code,
                "message": str(exc) or "Remote directory error",
                "request_id": request_id,
            }
        },
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent error format."""
    request_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled error in request %s", request_id, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "request_id": request_id,
            }
        },
    )


# --- Health Check ---


@app.get("/api/v1/health", tags=["System"])
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns 200 OK if the API is running.
    """
    return {"status": "healthy"}
