"""
Inquiry Validation Tests
Tests for field rules, error reporting and purity of validate_inquiry.
"""
import pytest

from frontend.contact.models import FieldErrorCode, Inquiry
from frontend.contact.validation import (
    EMAIL_INVALID,
    MESSAGE_TOO_SHORT,
    NAME_TOO_SHORT,
    is_valid_email,
    validate_inquiry,
)


class TestValidInquiries:
    """Inquiries that must pass."""

    def test_minimum_lengths_are_inclusive(self, minimal_inquiry):
        """Name of exactly 2 and message of exactly 10 characters are valid."""
        result = validate_inquiry(minimal_inquiry)

        assert result.is_valid
        assert result.field_errors == {}

    def test_complete_inquiry(self, valid_inquiry):
        assert validate_inquiry(valid_inquiry).is_valid

    @pytest.mark.parametrize("organization", ["", "ADE", "x" * 1000])
    def test_organization_never_invalidates(self, minimal_inquiry, organization):
        inquiry = minimal_inquiry.model_copy(update={"organization": organization})
        assert validate_inquiry(inquiry).is_valid

    @pytest.mark.parametrize("clearance", ["", "general", "top-secret", "cosmic", "  "])
    def test_clearance_level_never_invalidates(self, minimal_inquiry, clearance):
        """Clearance level is free text on the client; the server enforces the enum."""
        inquiry = minimal_inquiry.model_copy(update={"clearance_level": clearance})
        assert validate_inquiry(inquiry).is_valid


class TestInvalidInquiries:
    """Inquiries that must fail, with every failing field reported."""

    def test_all_required_fields_failing(self):
        inquiry = Inquiry(name="A", email="bad-email", message="short")

        result = validate_inquiry(inquiry)

        assert not result.is_valid
        assert result.field_errors == {
            "name": NAME_TOO_SHORT,
            "email": EMAIL_INVALID,
            "message": MESSAGE_TOO_SHORT,
        }
        assert result.codes == {
            "name": FieldErrorCode.TOO_SHORT,
            "email": FieldErrorCode.INVALID_FORMAT,
            "message": FieldErrorCode.TOO_SHORT,
        }

    def test_empty_inquiry_reports_required_fields_only(self):
        result = validate_inquiry(Inquiry())

        assert set(result.field_errors) == {"name", "email", "message"}

    def test_only_failing_field_is_reported(self, minimal_inquiry):
        inquiry = minimal_inquiry.model_copy(update={"message": "123456789"})

        result = validate_inquiry(inquiry)

        assert result.field_errors == {"message": MESSAGE_TOO_SHORT}

    def test_name_one_character(self, minimal_inquiry):
        inquiry = minimal_inquiry.model_copy(update={"name": "A"})
        assert validate_inquiry(inquiry).field_errors == {"name": NAME_TOO_SHORT}

    def test_messages_are_human_readable(self):
        assert NAME_TOO_SHORT == "Name must be at least 2 characters"
        assert EMAIL_INVALID == "Please enter a valid email address"
        assert MESSAGE_TOO_SHORT == "Message must be at least 10 characters"


class TestEmailFormat:
    """Tests for the email syntax check."""

    @pytest.mark.parametrize(
        "email",
        [
            "a@b.co",
            "priya.sharma@drdo.gov.in",
            "ops+contact@defend-program.in",
            "first_last@sub.domain.org",
        ],
    )
    def test_valid_addresses(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "bad-email",
            "missing-domain@",
            "@missing-local.com",
            "no-dot@localhost",
            "two@@signs.com",
            "a@b@c.com",
            ".leading@dot.com",
            "double..dot@example.com",
            "trailing.@example.com",
            "spaces in@example.com",
        ],
    )
    def test_invalid_addresses(self, email):
        assert not is_valid_email(email)


class TestPurity:
    """validate_inquiry has no side effects and is deterministic."""

    def test_idempotent(self):
        inquiry = Inquiry(name="A", email="bad-email", message="short")

        first = validate_inquiry(inquiry)
        second = validate_inquiry(inquiry)

        assert first == second

    def test_inquiry_unchanged(self, valid_inquiry):
        before = valid_inquiry.model_dump()
        validate_inquiry(valid_inquiry)
        assert valid_inquiry.model_dump() == before
