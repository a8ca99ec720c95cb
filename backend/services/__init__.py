"""
Backend services for page content and inquiry delivery.
"""

from backend.services.inquiry_mailer import (
    DeliveryStatus,
    EmailContent,
    InquiryMailer,
    get_inquiry_mailer,
)
from backend.services.site_content import SECTIONS, get_site_content

__all__ = [
    # Inquiry mailer
    "DeliveryStatus",
    "EmailContent",
    "InquiryMailer",
    "get_inquiry_mailer",
    # Site content
    "SECTIONS",
    "get_site_content",
]
