"""
Contact inquiry rules shared by the API schema and the form client.

Field minimums, the user-facing validation messages and the clearance
levels offered by the form.
"""
from enum import Enum

from email_validator import EmailNotValidError, validate_email

NAME_MIN_LENGTH = 2
MESSAGE_MIN_LENGTH = 10

NAME_TOO_SHORT = f"Name must be at least {NAME_MIN_LENGTH} characters"
EMAIL_INVALID = "Please enter a valid email address"
MESSAGE_TOO_SHORT = f"Message must be at least {MESSAGE_MIN_LENGTH} characters"


class ClearanceLevel(str, Enum):
    """Clearance levels offered by the inquiry form."""

    GENERAL = "general"
    RESTRICTED = "restricted"
    CONFIDENTIAL = "confidential"
    SECRET = "secret"
    TOP_SECRET = "top-secret"


CLEARANCE_LABELS: dict[str, str] = {
    ClearanceLevel.GENERAL.value: "General Inquiry",
    ClearanceLevel.RESTRICTED.value: "Restricted",
    ClearanceLevel.CONFIDENTIAL.value: "Confidential",
    ClearanceLevel.SECRET.value: "Secret",
    ClearanceLevel.TOP_SECRET.value: "Top Secret",
}


def is_valid_email(value: str) -> bool:
    """Syntax check only; no DNS lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
