"""
D.E.F.E.N.D Site Configuration
Central configuration management using Pydantic Settings
"""
from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ===== Application =====
    app_name: str = "D.E.F.E.N.D"
    app_version: str = "1.0.0"
    environment: str = "development"
    # SECURITY: Debug mode disabled by default - enable explicitly in .env for development
    debug: bool = False
    backend_url: str = "http://localhost:8000"
    frontend_url: str = "http://localhost:5173"

    # ===== CORS Configuration =====
    cors_allow_credentials: bool = True

    # ===== Redis =====
    redis_url: str = "redis://localhost:6379/0"

    # ===== Email =====
    sendgrid_api_key: Optional[str] = None
    from_email: str = "noreply@defend-program.in"
    from_name: str = "D.E.F.E.N.D"
    # Inquiries are forwarded to this mailbox
    contact_recipient_email: str = "contact@defend-program.in"

    # ===== Contact Form Client =====
    # Path of the inquiry-submission resource on the backend
    contact_resource: str = "/api/contact"
    # httpx timeout for the outbound submission request (seconds)
    contact_http_timeout: float = 30.0
    # Controller-level bound on a pending submission; None waits for the transport
    contact_submit_timeout: Optional[float] = None

    # ===== Sentry Error Tracking =====
    sentry_dsn: Optional[str] = None
    sentry_environment: Optional[str] = None  # Falls back to environment if not set
    sentry_traces_sample_rate: float = 0.1

    # ===== Rate Limiting =====
    rate_limit_enabled: bool = True  # Set to False to disable rate limiting

    # Contact form - strict limits, it is the only write endpoint
    rate_limit_contact_requests: int = 5
    rate_limit_contact_window: int = 300  # 5 submissions per 5 minutes

    # Read-only endpoints - default limits
    rate_limit_standard_requests: int = 120
    rate_limit_standard_window: int = 60  # 120 requests per minute


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
