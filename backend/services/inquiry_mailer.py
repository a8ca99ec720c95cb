"""
D.E.F.E.N.D Inquiry Mailer
Forwards accepted contact inquiries to the program mailbox via SendGrid.
"""
import asyncio
import urllib.error
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, Field
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Category, Content, CustomArg, Email, Mail, To
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from backend.core.config import settings
from backend.core.contact_rules import CLEARANCE_LABELS
from backend.schemas.contact import ContactFormRequest

# Template directory path
TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

TEMPLATE_NAME = "inquiry_received"

# HTTP statuses from SendGrid that are worth another attempt
RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class EmailContent(BaseModel):
    """Generated email content."""

    subject: str = Field(..., max_length=150)
    body_html: str
    body_text: str
    from_email: str
    from_name: str
    to_email: str
    reply_to: Optional[str] = None
    tracking_id: Optional[str] = None


class DeliveryStatus(BaseModel):
    """Outcome of forwarding one inquiry."""

    reference: str
    status: str = "pending"  # pending, sent, skipped, failed
    provider_message_id: Optional[str] = None
    sent_at: Optional[datetime] = None
    error_message: Optional[str] = None


def is_retryable_error(exception: BaseException) -> bool:
    """
    Determine if a SendGrid error is transient.

    Args:
        exception: The exception raised by the send call

    Returns:
        True for timeouts, connection failures and throttling/5xx responses
    """
    if isinstance(exception, (TimeoutError, ConnectionError, urllib.error.URLError)):
        return True
    status_code = getattr(exception, "status_code", None)
    return status_code in RETRYABLE_STATUS_CODES


def clearance_label(clearance_level: Optional[str]) -> str:
    if not clearance_level:
        return "Not specified"
    return CLEARANCE_LABELS.get(clearance_level, clearance_level)


class InquiryMailer:
    """
    Renders inquiry notification emails and sends them through SendGrid.

    Sending happens in a worker thread so the event loop is never blocked,
    and transient failures are retried with exponential backoff.
    """

    def __init__(self):
        self._client: Optional[SendGridAPIClient] = None
        self._env: Optional[Environment] = None
        self.logger = structlog.get_logger().bind(channel="sendgrid", component="inquiry_mailer")

    @property
    def client(self) -> SendGridAPIClient:
        """Lazy-loaded SendGrid client."""
        if self._client is None:
            if not settings.sendgrid_api_key:
                raise ValueError("SendGrid API key not configured")
            self._client = SendGridAPIClient(api_key=settings.sendgrid_api_key)
        return self._client

    @property
    def env(self) -> Environment:
        """Lazy-loaded Jinja2 environment."""
        if self._env is None:
            self._env = Environment(
                loader=FileSystemLoader(str(TEMPLATES_DIR)),
                autoescape=select_autoescape(enabled_extensions=("html",)),
                trim_blocks=True,
                lstrip_blocks=True,
            )
        return self._env

    def is_configured(self) -> bool:
        """Check if SendGrid is configured."""
        return bool(settings.sendgrid_api_key)

    def build_email(
        self,
        inquiry: ContactFormRequest,
        reference: str,
        submitted_at: Optional[datetime] = None,
    ) -> EmailContent:
        """Render the notification email for one inquiry."""
        submitted_at = submitted_at or datetime.now(timezone.utc)
        label = clearance_label(inquiry.clearance_level)
        context: dict[str, Any] = {
            "app_name": settings.app_name,
            "reference": reference,
            "name": inquiry.name,
            "email": inquiry.email,
            "organization": inquiry.organization,
            "clearance_label": label,
            "message": inquiry.message,
            "submitted_at": submitted_at.strftime("%Y-%m-%d %H:%M UTC"),
        }

        return EmailContent(
            subject=f"[{settings.app_name} Contact] {label}: {inquiry.name}"[:150],
            body_html=self.env.get_template(f"{TEMPLATE_NAME}.html").render(**context),
            body_text=self.env.get_template(f"{TEMPLATE_NAME}.txt").render(**context),
            from_email=settings.from_email,
            from_name=settings.from_name,
            to_email=settings.contact_recipient_email,
            reply_to=inquiry.email,
            tracking_id=reference,
        )

    def _build_message(self, content: EmailContent) -> Mail:
        """Build a SendGrid Mail object from EmailContent."""
        message = Mail()
        message.from_email = Email(content.from_email, content.from_name)
        message.subject = content.subject
        message.add_to(To(content.to_email))

        # Plain text should come first for proper fallback
        message.add_content(Content("text/plain", content.body_text))
        message.add_content(Content("text/html", content.body_html))

        message.category = Category("contact_inquiry")

        if content.reply_to:
            message.reply_to = Email(content.reply_to)
        if content.tracking_id:
            message.add_custom_arg(CustomArg(key="inquiry_reference", value=content.tracking_id))

        return message

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception(is_retryable_error),
        reraise=True,
        before_sleep=lambda retry_state: structlog.get_logger().warning(
            "inquiry_email_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()),
        ),
    )
    async def _deliver(self, message: Mail) -> Any:
        return await asyncio.to_thread(self.client.send, message)

    async def send(self, content: EmailContent) -> DeliveryStatus:
        """
        Send an inquiry email.

        Never raises: the outcome is returned as a DeliveryStatus so the
        background task cannot fail the request that scheduled it.
        """
        status = DeliveryStatus(reference=content.tracking_id or "")

        if not self.is_configured():
            status.status = "skipped"
            self.logger.warning("inquiry_email_skipped", reason="sendgrid_not_configured", reference=status.reference)
            return status

        try:
            message = self._build_message(content)
            response = await self._deliver(message)
        except Exception as e:
            status.status = "failed"
            status.error_message = str(e)
            self.logger.error("inquiry_email_failed", reference=status.reference, error=str(e))
            return status

        status.status = "sent"
        status.sent_at = datetime.now(timezone.utc)
        status.provider_message_id = response.headers.get("X-Message-Id")
        self.logger.info(
            "inquiry_email_sent",
            reference=status.reference,
            to=content.to_email,
            status_code=response.status_code,
        )
        return status

    async def forward_inquiry(self, inquiry: ContactFormRequest, reference: str) -> DeliveryStatus:
        """Render and send the notification for an inquiry."""
        return await self.send(self.build_email(inquiry, reference))


_inquiry_mailer: Optional[InquiryMailer] = None


def get_inquiry_mailer() -> InquiryMailer:
    """Get or create the inquiry mailer instance."""
    global _inquiry_mailer
    if _inquiry_mailer is None:
        _inquiry_mailer = InquiryMailer()
    return _inquiry_mailer
