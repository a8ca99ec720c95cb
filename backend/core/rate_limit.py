"""
Rate Limiting Module
Redis-based sliding window rate limiting for the public endpoints,
with an in-memory fallback when Redis is unreachable.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Optional, Protocol

import redis.asyncio as aioredis
from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from backend.core.config import settings

logger = logging.getLogger(__name__)


# =============================================================================
# Rate Limit Configuration
# =============================================================================


class RateLimitTier(str, Enum):
    """Rate limit tiers for the site's endpoint types."""

    CONTACT = "contact"  # Inquiry submissions - strict limits
    STANDARD = "standard"  # Read-only content endpoints


@dataclass
class RateLimitConfig:
    """Rate limit configuration for a tier."""

    requests: int  # Number of requests allowed
    window: int  # Time window in seconds


def get_tier_config(tier: RateLimitTier) -> RateLimitConfig:
    """Resolve a tier against the current settings."""
    if tier == RateLimitTier.CONTACT:
        return RateLimitConfig(
            requests=settings.rate_limit_contact_requests,
            window=settings.rate_limit_contact_window,
        )
    return RateLimitConfig(
        requests=settings.rate_limit_standard_requests,
        window=settings.rate_limit_standard_window,
    )


class Limiter(Protocol):
    async def is_rate_limited(self, key: str, limit: int, window: int) -> tuple[bool, int, int]: ...


# =============================================================================
# Redis Rate Limiter
# =============================================================================


class RedisRateLimiter:
    """
    Redis-based sliding window rate limiter.

    Uses a sorted set of request timestamps per key so limits hold across
    several API workers.
    """

    def __init__(self, redis_url: str):
        self.redis_url = redis_url
        self._redis: Optional[aioredis.Redis] = None

    async def get_redis(self) -> aioredis.Redis:
        """Get or create Redis connection."""
        if self._redis is None:
            self._redis = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    async def close(self) -> None:
        """Close Redis connection."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    async def is_rate_limited(
        self,
        key: str,
        limit: int,
        window: int,
    ) -> tuple[bool, int, int]:
        """
        Check if a key is rate limited using sliding window.

        Args:
            key: Unique identifier (e.g., "rate_limit:contact:ip_1.2.3.4")
            limit: Maximum number of requests allowed
            window: Time window in seconds

        Returns:
            Tuple of (is_limited, remaining_requests, retry_after_seconds)
        """
        redis = await self.get_redis()
        now = time.time()

        pipe = redis.pipeline()
        pipe.zremrangebyscore(key, "-inf", now - window)
        pipe.zcard(key)
        pipe.zadd(key, {str(now): now})
        pipe.expire(key, window + 1)
        pipe.zrange(key, 0, 0, withscores=True)
        results = await pipe.execute()

        current_count = results[1]
        oldest_entries = results[4]

        remaining = max(0, limit - current_count - 1)
        is_limited = current_count >= limit

        retry_after = 0
        if is_limited and oldest_entries:
            oldest_timestamp = oldest_entries[0][1]
            retry_after = int(window - (now - oldest_timestamp)) + 1

        return is_limited, remaining, retry_after


# =============================================================================
# In-Memory Fallback Rate Limiter
# =============================================================================


class InMemoryRateLimiter:
    """
    In-memory sliding window limiter used while Redis is unavailable.

    Only accurate for single-instance deployments.
    """

    def __init__(self, cleanup_interval: int = 60, max_keys: int = 10_000):
        self._requests: dict[str, list[float]] = {}
        self._max_window = 0
        self._last_cleanup = time.time()
        self._cleanup_interval = cleanup_interval
        self._max_keys = max_keys

    def _cleanup_if_needed(self, now: float) -> None:
        """Drop keys whose requests have all left the widest window seen."""
        due = now - self._last_cleanup >= self._cleanup_interval
        if not due and len(self._requests) < self._max_keys:
            return

        self._last_cleanup = now
        cutoff = now - self._max_window
        for key in list(self._requests):
            timestamps = [ts for ts in self._requests[key] if ts > cutoff]
            if timestamps:
                self._requests[key] = timestamps
            else:
                del self._requests[key]

    async def is_rate_limited(
        self,
        key: str,
        limit: int,
        window: int,
    ) -> tuple[bool, int, int]:
        """
        Check if a key is rate limited.

        Returns:
            Tuple of (is_limited, remaining_requests, retry_after_seconds)
        """
        now = time.time()
        self._max_window = max(self._max_window, window)
        self._cleanup_if_needed(now)
        timestamps = [ts for ts in self._requests.get(key, []) if ts > now - window]
        self._requests[key] = timestamps

        if len(timestamps) >= limit:
            retry_after = int(window - (now - min(timestamps))) + 1
            return True, 0, retry_after

        timestamps.append(now)
        return False, max(0, limit - len(timestamps)), 0


# Global rate limiter instances
_rate_limiter: Optional[RedisRateLimiter] = None
_fallback_limiter: Optional[InMemoryRateLimiter] = None
_redis_available: bool = True  # Track Redis availability


def get_rate_limiter() -> RedisRateLimiter:
    """Get the global Redis rate limiter instance."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = RedisRateLimiter(settings.redis_url)
    return _rate_limiter


def get_fallback_limiter() -> InMemoryRateLimiter:
    """Get the global in-memory fallback rate limiter."""
    global _fallback_limiter
    if _fallback_limiter is None:
        _fallback_limiter = InMemoryRateLimiter()
    return _fallback_limiter


async def close_rate_limiter() -> None:
    """Close the global rate limiter."""
    global _rate_limiter, _fallback_limiter
    if _rate_limiter:
        await _rate_limiter.close()
        _rate_limiter = None
    _fallback_limiter = None


# =============================================================================
# Helper Functions
# =============================================================================


def get_client_ip(request: Request) -> str:
    """Client IP address, honouring the first X-Forwarded-For hop."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def build_rate_limit_key(tier: RateLimitTier, ip_address: str) -> str:
    """Build Redis key for rate limiting."""
    return f"rate_limit:{tier.value}:ip_{ip_address}"


# =============================================================================
# Rate Limit Dependency
# =============================================================================


class RateLimitDependency:
    """
    FastAPI dependency for rate limiting.

    Usage:
        @router.post("")
        async def submit(
            _: Annotated[None, Depends(RateLimitDependency(RateLimitTier.CONTACT))]
        ):
            ...
    """

    def __init__(self, tier: RateLimitTier = RateLimitTier.STANDARD):
        self.tier = tier

    async def _check(self, limiter: Limiter, key: str, limit: int, window: int, request: Request) -> None:
        is_limited, remaining, retry_after = await limiter.is_rate_limited(key, limit, window)

        # Stored for the response headers added by RateLimitMiddleware
        request.state.rate_limit_limit = limit
        request.state.rate_limit_remaining = remaining
        request.state.rate_limit_reset = int(time.time()) + window

        if is_limited:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail={
                    "error": "rate_limit_exceeded",
                    "message": f"Too many requests. Please retry after {retry_after} seconds.",
                    "retry_after": retry_after,
                },
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": str(limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(request.state.rate_limit_reset),
                },
            )

    async def __call__(self, request: Request) -> None:
        """Check rate limit for the request."""
        if settings.rate_limit_enabled is False:
            return

        config = get_tier_config(self.tier)
        key = build_rate_limit_key(self.tier, get_client_ip(request))

        global _redis_available

        try:
            await self._check(get_rate_limiter(), key, config.requests, config.window, request)
            _redis_available = True
        except HTTPException:
            raise
        except Exception as e:
            if _redis_available:
                logger.warning(f"Redis rate limiting unavailable, using in-memory fallback: {e}")
                _redis_available = False

            # SECURITY: Always enforce rate limiting, even when Redis is down
            await self._check(get_fallback_limiter(), key, config.requests, config.window, request)


# Convenience type aliases
RateLimitContact = Annotated[None, Depends(RateLimitDependency(RateLimitTier.CONTACT))]
RateLimitStandard = Annotated[None, Depends(RateLimitDependency(RateLimitTier.STANDARD))]


# =============================================================================
# Rate Limit Middleware
# =============================================================================


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Adds X-RateLimit-* headers when the request went through a limit check."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        response = await call_next(request)

        if hasattr(request.state, "rate_limit_limit"):
            response.headers["X-RateLimit-Limit"] = str(request.state.rate_limit_limit)
            response.headers["X-RateLimit-Remaining"] = str(getattr(request.state, "rate_limit_remaining", 0))
            response.headers["X-RateLimit-Reset"] = str(getattr(request.state, "rate_limit_reset", 0))

        return response


# =============================================================================
# Exception Handler
# =============================================================================


async def rate_limit_exception_handler(
    request: Request,
    exc: HTTPException,
) -> JSONResponse:
    """Render 429 responses with a Retry-After header."""
    headers = dict(exc.headers) if exc.headers else {}

    if "Retry-After" not in headers:
        retry_after = 60
        if isinstance(exc.detail, dict):
            retry_after = exc.detail.get("retry_after", 60)
        headers["Retry-After"] = str(retry_after)

    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": True,
            "message": exc.detail if isinstance(exc.detail, str) else exc.detail.get("message", "Rate limit exceeded"),
            "status_code": 429,
            "retry_after": int(headers["Retry-After"]),
        },
        headers=headers,
    )
