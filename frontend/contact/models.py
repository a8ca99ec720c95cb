"""
D.E.F.E.N.D Contact Form Models
Pydantic models for inquiries, validation results and submission feedback.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Inquiry(BaseModel):
    """
    Contact inquiry as entered in the form.

    All fields are raw strings; an empty string means the field was left blank.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = ""
    email: str = ""
    organization: str = ""
    clearance_level: str = Field(default="", alias="clearanceLevel")
    message: str = ""

    def to_payload(self) -> dict[str, str]:
        """Request body for the submission endpoint, blank optional fields omitted."""
        payload = {"name": self.name, "email": self.email}
        if self.organization:
            payload["organization"] = self.organization
        if self.clearance_level:
            payload["clearanceLevel"] = self.clearance_level
        payload["message"] = self.message
        return payload


class FieldErrorCode(str, Enum):
    """Kinds of per-field validation failure."""

    TOO_SHORT = "too_short"
    INVALID_FORMAT = "invalid_format"


class FieldError(BaseModel):
    """A single failing field."""

    field: str
    code: FieldErrorCode
    message: str


class ValidationResult(BaseModel):
    """Outcome of validating an inquiry: valid, or invalid with every failing field."""

    errors: list[FieldError] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def field_errors(self) -> dict[str, str]:
        """Mapping of field name to message, one entry per failing field."""
        return {error.field: error.message for error in self.errors}

    @property
    def codes(self) -> dict[str, FieldErrorCode]:
        return {error.field: error.code for error in self.errors}


class SubmissionState(str, Enum):
    """Lifecycle of one submission attempt."""

    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class NotificationKind(str, Enum):
    """Notification variants shown to the user."""

    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """One-shot, dismissible feedback message."""

    kind: NotificationKind
    title: str
    description: str


class SubmitStatus(str, Enum):
    """What a call to submit() did."""

    IGNORED = "ignored"  # another submission was already pending
    INVALID = "invalid"  # validation failed, nothing was sent
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SubmitResult(BaseModel):
    """Result returned to the caller of submit()."""

    status: SubmitStatus
    field_errors: dict[str, str] = Field(default_factory=dict)
    notification: Optional[Notification] = None
    response: Optional[Any] = None
    error_message: Optional[str] = None
