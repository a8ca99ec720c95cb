"""Contact form schemas."""
from typing import Any, Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from backend.core.contact_rules import (
    EMAIL_INVALID,
    MESSAGE_MIN_LENGTH,
    MESSAGE_TOO_SHORT,
    NAME_MIN_LENGTH,
    NAME_TOO_SHORT,
)

ClearanceLevelValue = Literal["general", "restricted", "confidential", "secret", "top-secret"]


class ContactFormRequest(BaseModel):
    """Contact form submission request."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., max_length=200)
    email: EmailStr
    organization: Optional[str] = Field(None, max_length=200)
    clearance_level: Optional[ClearanceLevelValue] = Field(None, alias="clearanceLevel")
    message: str = Field(..., max_length=5000)

    @field_validator("name")
    @classmethod
    def name_min_length(cls, v: str) -> str:
        if len(v) < NAME_MIN_LENGTH:
            raise ValueError(NAME_TOO_SHORT)
        return v

    @field_validator("email", mode="wrap")
    @classmethod
    def email_format(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        """Report every EmailStr failure with the form's message."""
        try:
            return handler(v)
        except ValidationError:
            raise ValueError(EMAIL_INVALID)

    @field_validator("message")
    @classmethod
    def message_min_length(cls, v: str) -> str:
        if len(v) < MESSAGE_MIN_LENGTH:
            raise ValueError(MESSAGE_TOO_SHORT)
        return v

    @field_validator("organization", "clearance_level", mode="before")
    @classmethod
    def blank_as_none(cls, v):
        """The form posts empty strings for untouched optional fields."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ContactFormResponse(BaseModel):
    """Contact form submission response."""

    success: bool
    message: str
    reference: str
