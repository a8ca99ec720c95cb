"""
Inquiry validation rules.

Pure functions: no I/O, no logging, same input always gives the same result.
"""
from backend.core.contact_rules import (
    EMAIL_INVALID,
    MESSAGE_MIN_LENGTH,
    MESSAGE_TOO_SHORT,
    NAME_MIN_LENGTH,
    NAME_TOO_SHORT,
    is_valid_email,
)
from frontend.contact.models import FieldError, FieldErrorCode, Inquiry, ValidationResult


def validate_inquiry(inquiry: Inquiry) -> ValidationResult:
    """
    Check an inquiry against the contact form rules.

    Every failing field is reported, in form order. Organization and
    clearance level are free text and never fail.
    """
    errors: list[FieldError] = []

    if len(inquiry.name) < NAME_MIN_LENGTH:
        errors.append(FieldError(field="name", code=FieldErrorCode.TOO_SHORT, message=NAME_TOO_SHORT))

    if not is_valid_email(inquiry.email):
        errors.append(FieldError(field="email", code=FieldErrorCode.INVALID_FORMAT, message=EMAIL_INVALID))

    if len(inquiry.message) < MESSAGE_MIN_LENGTH:
        errors.append(
            FieldError(field="message", code=FieldErrorCode.TOO_SHORT, message=MESSAGE_TOO_SHORT)
        )

    return ValidationResult(errors=errors)
