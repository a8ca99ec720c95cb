"""
Submission transports.

A transport performs the single outbound "create" call for an inquiry and
raises TransportError for anything that is not an acknowledged success.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
import structlog

from backend.core.config import settings


class TransportError(Exception):
    """Raised when the submission endpoint could not accept an inquiry."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BaseTransport(ABC):
    """Abstract base class for submission transports."""

    @abstractmethod
    async def create(self, resource: str, payload: dict[str, Any]) -> Any:
        """Create `payload` at `resource`, returning the acknowledgement body."""
        pass


class HttpTransport(BaseTransport):
    """
    JSON-over-HTTP transport backed by httpx.

    Network failures, non-2xx statuses and 2xx responses that declare JSON
    but carry an unparsable body all raise TransportError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or settings.backend_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.contact_http_timeout
        self._client = client
        self._owns_client = client is None
        self.logger = structlog.get_logger().bind(transport="http", base_url=self.base_url)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-loaded HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def create(self, resource: str, payload: dict[str, Any]) -> Any:
        try:
            response = await self.client.post(resource, json=payload)
        except httpx.HTTPError as e:
            self.logger.warning("submission_request_failed", resource=resource, error=str(e))
            raise TransportError(f"Request to {resource} failed: {e}") from e

        if not response.is_success:
            self.logger.warning(
                "submission_rejected",
                resource=resource,
                status_code=response.status_code,
            )
            raise TransportError(
                f"{response.status_code}: {response.text or response.reason_phrase}",
                status_code=response.status_code,
            )

        return self._parse_body(response)

    def _parse_body(self, response: httpx.Response) -> Any:
        if not response.content:
            return None

        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response.text

        try:
            return response.json()
        except ValueError as e:
            self.logger.warning(
                "submission_response_malformed",
                status_code=response.status_code,
                error=str(e),
            )
            raise TransportError("Malformed response from submission endpoint", response.status_code) from e
