"""
Contact form view state.

Holds the field values the user is editing and the inline errors from the
latest validation attempt.
"""
from typing import Optional

from frontend.contact.models import Inquiry

FIELDS: tuple[str, ...] = ("name", "email", "organization", "clearance_level", "message")


class InquiryForm:
    """Mutable field values for one mounted contact form."""

    def __init__(self, initial: Optional[Inquiry] = None):
        self._values: dict[str, str] = dict.fromkeys(FIELDS, "")
        if initial is not None:
            self.load(initial)
        self.errors: dict[str, str] = {}

    def set_field(self, field: str, value: str) -> None:
        if field not in self._values:
            raise KeyError(f"Unknown form field: {field}")
        self._values[field] = value

    def get_field(self, field: str) -> str:
        return self._values[field]

    def load(self, inquiry: Inquiry) -> None:
        for field in FIELDS:
            self._values[field] = getattr(inquiry, field)

    def snapshot(self) -> Inquiry:
        """The current values, by value."""
        return Inquiry(**self._values)

    def set_errors(self, field_errors: dict[str, str]) -> None:
        """Replace the inline errors with those of the latest attempt."""
        self.errors = dict(field_errors)

    def reset(self) -> None:
        self._values = dict.fromkeys(FIELDS, "")
        self.errors = {}

    @property
    def is_empty(self) -> bool:
        return not any(self._values.values())
