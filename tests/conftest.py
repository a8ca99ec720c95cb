"""
D.E.F.E.N.D Test Configuration and Fixtures
Shared pytest fixtures for all test modules.
"""
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from backend.core import rate_limit
from backend.core.config import settings
from backend.services.inquiry_mailer import DeliveryStatus, get_inquiry_mailer
from frontend.contact import (
    Inquiry,
    InquiryForm,
    RecordingNotifier,
    SubmissionController,
    TransportError,
)
from tests.fixtures.contact import FakeTransport


# =============================================================================
# Inquiry Fixtures
# =============================================================================


@pytest.fixture
def valid_inquiry() -> Inquiry:
    """A complete inquiry that passes validation."""
    return Inquiry(
        name="Priya Sharma",
        email="priya.sharma@drdo.example.in",
        organization="Aeronautical Development Establishment",
        clearance_level="confidential",
        message="Requesting a briefing on the surveillance platform roadmap.",
    )


@pytest.fixture
def minimal_inquiry() -> Inquiry:
    """Smallest valid inquiry: name and message exactly at their minimum lengths."""
    return Inquiry(name="Al", email="a@b.co", message="1234567890")


@pytest.fixture
def valid_payload() -> dict[str, str]:
    """Request body accepted by POST /api/contact."""
    return {
        "name": "Priya Sharma",
        "email": "priya.sharma@drdo.example.in",
        "organization": "Aeronautical Development Establishment",
        "clearanceLevel": "confidential",
        "message": "Requesting a briefing on the surveillance platform roadmap.",
    }


# =============================================================================
# Transport / Controller Fixtures
# =============================================================================


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def failing_transport() -> FakeTransport:
    return FakeTransport(error=TransportError("503: Service Unavailable", status_code=503))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def form() -> InquiryForm:
    return InquiryForm()


@pytest.fixture
def controller(fake_transport, notifier, form) -> SubmissionController:
    return SubmissionController(transport=fake_transport, notifier=notifier, form=form)


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_rate_limiters():
    """Every test starts with empty rate limit windows and no Redis client."""
    rate_limit._rate_limiter = None
    rate_limit._fallback_limiter = None
    rate_limit._redis_available = True
    yield
    rate_limit._rate_limiter = None
    rate_limit._fallback_limiter = None


@pytest.fixture
def rate_limit_disabled():
    with patch.object(settings, "rate_limit_enabled", False):
        yield


@pytest.fixture
def mock_mailer() -> MagicMock:
    """Inquiry mailer that records forwards instead of calling SendGrid."""
    mailer = MagicMock()
    mailer.is_configured.return_value = True
    mailer.forward_inquiry = AsyncMock(return_value=DeliveryStatus(reference="DEF-TEST", status="sent"))
    return mailer


@pytest_asyncio.fixture
async def client(mock_mailer, rate_limit_disabled) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the FastAPI app, rate limiting off."""
    from backend.main import app

    app.dependency_overrides[get_inquiry_mailer] = lambda: mock_mailer
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def limited_client(mock_mailer) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with rate limiting on and Redis unreachable (in-memory fallback)."""
    from backend.main import app

    app.dependency_overrides[get_inquiry_mailer] = lambda: mock_mailer
    unreachable = MagicMock()
    unreachable.is_rate_limited = AsyncMock(side_effect=ConnectionError("Redis unavailable"))
    with patch.object(settings, "rate_limit_enabled", True), \
         patch("backend.core.rate_limit.get_rate_limiter", return_value=unreachable):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    app.dependency_overrides.clear()
