"""
D.E.F.E.N.D Site FastAPI Application
Backend for the D.E.F.E.N.D marketing site: page content and contact inquiries.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.api import contact, health, site
from backend.core.config import settings
from backend.core.rate_limit import (
    RateLimitMiddleware,
    close_rate_limiter,
    rate_limit_exception_handler,
)
from backend.core.sentry import capture_exception, init_sentry

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Route structlog events (mailer, contact client) through stdlib logging
structlog.configure(
    processors=[
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = logging.getLogger(__name__)

VALUE_ERROR_PREFIX = "Value error, "


# =============================================================================
# Lifespan Events
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle application startup and shutdown events.

    Startup:
    - Initialize Sentry error tracking
    - Mark startup complete for the startup probe

    Shutdown:
    - Close the Redis rate limiter connection
    """
    logger.info(f"Starting {settings.app_name} site API...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Version: {settings.app_version}")

    if init_sentry():
        logger.info("Sentry error tracking enabled")

    if settings.environment.lower() in ("production", "prod") and settings.debug:
        logger.warning("SECURITY WARNING: DEBUG mode is enabled in production")

    health.mark_startup_complete()
    logger.info("Application startup complete")

    yield

    logger.info(f"Shutting down {settings.app_name} site API...")
    await close_rate_limiter()
    logger.info("Rate limiter closed")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=f"{settings.app_name} Site API",
    description="""
    Backend for the D.E.F.E.N.D (Drone Engineering For Enhanced National Defence)
    marketing site.

    ## Features

    - **Site Content**: Navigation, capabilities, stats and program timeline
    - **Contact Inquiries**: Validated inquiry submission, forwarded to the program team
    """,
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
    lifespan=lifespan,
)

# =============================================================================
# CORS Middleware
# =============================================================================

allowed_origins = [settings.frontend_url]
if settings.debug:
    allowed_origins.extend(
        [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# =============================================================================
# Rate Limiting Middleware
# =============================================================================

if settings.rate_limit_enabled:
    app.add_middleware(RateLimitMiddleware)
    logger.info("Rate limiting middleware enabled")
else:
    logger.info("Rate limiting middleware disabled")

# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(status.HTTP_429_TOO_MANY_REQUESTS, rate_limit_exception_handler)


def field_errors_from(exc: RequestValidationError) -> dict[str, str]:
    """First message per field, keyed the way the client names its fields."""
    errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc", ())
        field = str(loc[-1]) if len(loc) > 1 else "body"
        message = error.get("msg", "Invalid value")
        if message.startswith(VALUE_ERROR_PREFIX):
            message = message[len(VALUE_ERROR_PREFIX):]
        errors.setdefault(field, message)
    return errors


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every failing field at once."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "message": "Validation failed",
            "status_code": 422,
            "errors": field_errors_from(exc),
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "message": exc.detail,
            "status_code": exc.status_code,
        },
        headers=exc.headers,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")

    event_id = capture_exception(
        exc,
        extra={
            "request_method": request.method,
            "request_path": request.url.path,
        },
    )

    # Don't expose internal errors in production
    if settings.debug:
        detail = str(exc)
    else:
        detail = f"Internal server error (ref: {event_id})" if event_id else "Internal server error"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "message": detail,
            "status_code": 500,
            "error_id": event_id,
        },
    )


# =============================================================================
# API Routers
# =============================================================================

app.include_router(health.router)
app.include_router(site.router)
app.include_router(contact.router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """API root."""
    return {"name": f"{settings.app_name} Site API", "version": settings.app_version}
