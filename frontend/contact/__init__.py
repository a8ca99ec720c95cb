"""
D.E.F.E.N.D Contact Form
Client-side inquiry validation, submission lifecycle and user feedback.
"""
from backend.core.contact_rules import ClearanceLevel
from frontend.contact.controller import (
    InvalidTransitionError,
    SubmissionController,
)
from frontend.contact.form import InquiryForm
from frontend.contact.models import (
    FieldError,
    FieldErrorCode,
    Inquiry,
    Notification,
    NotificationKind,
    SubmissionState,
    SubmitResult,
    SubmitStatus,
    ValidationResult,
)
from frontend.contact.notifications import (
    BaseNotifier,
    LoggingNotifier,
    RecordingNotifier,
)
from frontend.contact.transport import BaseTransport, HttpTransport, TransportError
from frontend.contact.validation import validate_inquiry

__all__ = [
    # Controller
    "SubmissionController",
    "InvalidTransitionError",
    # Form
    "InquiryForm",
    # Models
    "ClearanceLevel",
    "FieldError",
    "FieldErrorCode",
    "Inquiry",
    "Notification",
    "NotificationKind",
    "SubmissionState",
    "SubmitResult",
    "SubmitStatus",
    "ValidationResult",
    # Channels
    "BaseNotifier",
    "LoggingNotifier",
    "RecordingNotifier",
    "BaseTransport",
    "HttpTransport",
    "TransportError",
    # Validation
    "validate_inquiry",
]
