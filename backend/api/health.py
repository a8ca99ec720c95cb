"""
D.E.F.E.N.D Health Check Endpoints
Liveness, startup and readiness probes for the site backend.
"""

import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from backend.core.rate_limit import get_rate_limiter
from backend.services.inquiry_mailer import get_inquiry_mailer

logger = logging.getLogger(__name__)

REDIS_PING_TIMEOUT = 2.0


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


# Least to most severe
SEVERITY = (HealthStatus.HEALTHY, HealthStatus.DEGRADED, HealthStatus.UNHEALTHY)


class ComponentHealth(BaseModel):
    status: HealthStatus
    message: Optional[str] = None


class ReadinessResponse(BaseModel):
    status: HealthStatus
    components: dict[str, ComponentHealth]


class ProbeResponse(BaseModel):
    status: str
    started_at: Optional[str] = None


_startup_time: Optional[datetime] = None


def mark_startup_complete() -> None:
    """Called from the app lifespan once startup has finished."""
    global _startup_time
    _startup_time = datetime.now(timezone.utc)


def get_startup_time() -> Optional[datetime]:
    return _startup_time


async def check_redis() -> ComponentHealth:
    """
    Ping Redis over the rate limiter's own connection.

    Rate limiting falls back to memory without Redis, so an outage only
    degrades the service.
    """
    try:
        redis = await get_rate_limiter().get_redis()
        await asyncio.wait_for(redis.ping(), timeout=REDIS_PING_TIMEOUT)
    except Exception as e:
        logger.warning(f"Redis health check failed: {e}")
        return ComponentHealth(status=HealthStatus.DEGRADED, message=f"Rate limiting on in-memory fallback: {e}")
    return ComponentHealth(status=HealthStatus.HEALTHY)


async def check_email() -> ComponentHealth:
    """Inquiries are still accepted without SendGrid, but nobody is notified."""
    if get_inquiry_mailer().is_configured():
        return ComponentHealth(status=HealthStatus.HEALTHY)
    return ComponentHealth(status=HealthStatus.DEGRADED, message="SendGrid API key not configured")


def determine_overall_status(components: dict[str, ComponentHealth]) -> HealthStatus:
    """Worst component status wins."""
    return max((component.status for component in components.values()), key=SEVERITY.index)


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/live", response_model=ProbeResponse, response_model_exclude_none=True)
async def liveness_probe() -> ProbeResponse:
    return ProbeResponse(status="ok")


@router.get("/startup", response_model=ProbeResponse, response_model_exclude_none=True)
async def startup_probe(response: Response) -> ProbeResponse:
    """503 until the lifespan has marked startup complete."""
    startup_time = get_startup_time()
    if startup_time is None:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ProbeResponse(status="starting")
    return ProbeResponse(status="started", started_at=startup_time.isoformat())


@router.get("", response_model=ReadinessResponse)
async def readiness_check(response: Response) -> ReadinessResponse:
    """Degraded still answers 200: the page and the contact form keep working."""
    redis_check, email_check = await asyncio.gather(check_redis(), check_email())
    components = {"redis": redis_check, "email": email_check}

    overall_status = determine_overall_status(components)
    if overall_status == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(status=overall_status, components=components)
