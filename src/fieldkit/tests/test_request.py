"""Tests for request-body extraction and whole-submission validation."""

from types import SimpleNamespace

import pytest
from django.http import HttpRequest, QueryDict

from fieldkit import Field, FieldError, ViolationKind, extract_values, get_body, make_field, validate_submission


@pytest.fixture
def signup_fields() -> list[Field]:
    """A small sign-up form with cross-field constraints."""
    return [
        make_field("email", id="email", required=True),
        make_field("password", id="password", required=True, minlength=8),
        make_field("password", id="confirm", match="password"),
        make_field("checkbox", id="newsletter"),
        make_field("text", id="topics", required=True, validateif="newsletter"),
    ]


def _post(data: str) -> HttpRequest:
    request = HttpRequest()
    request.method = "POST"
    request.POST = QueryDict(data)
    return request


class TestGetBody:
    """Tests for get_body."""

    def test_should_return_mappings_unchanged(self):
        body = {"a": "1"}

        assert get_body(body) is body

    def test_should_read_django_post_data(self):
        request = _post("a=1")

        assert get_body(request) is request.POST

    def test_should_read_body_attribute(self):
        request = SimpleNamespace(body={"a": "1"})

        assert get_body(request) == {"a": "1"}

    def test_should_reject_unreadable_requests(self):
        with pytest.raises(TypeError, match="Cannot read a parsed body"):
            get_body(SimpleNamespace(body=b"a=1"))


class TestExtractValues:
    """Tests for extract_values."""

    def test_should_extract_each_field(self, signup_fields):
        # Arrange
        request = _post("email=a%40b.co&password=secret123&confirm=secret123&newsletter=true")

        # Act
        values = extract_values(signup_fields, request)

        # Assert
        assert values == {
            "email": "a@b.co",
            "password": "secret123",
            "confirm": "secret123",
            "newsletter": True,
            "topics": None,
        }


class TestValidateSubmission:
    """Tests for validate_submission."""

    def test_should_accept_valid_submission(self, signup_fields):
        # Arrange
        body = {"email": "a@b.co", "password": "secret123", "confirm": "secret123"}

        # Act
        errors = validate_submission(signup_fields, body)

        # Assert
        assert errors == {}

    def test_should_report_one_error_per_field(self, signup_fields):
        # Arrange
        request = _post("email=nope&password=short&confirm=other&newsletter=true")

        # Act
        errors = validate_submission(signup_fields, request)

        # Assert
        assert errors == {
            "email": FieldError(ViolationKind.TYPE_MISMATCH, "Please enter a valid email"),
            "password": FieldError(ViolationKind.TOO_SHORT, "Please use 8 characters or more"),
            "confirm": FieldError(ViolationKind.NO_MATCH, "confirm must match password"),
            "topics": FieldError(ViolationKind.VALUE_MISSING, "This field is required"),
        }

    def test_unchecked_gate_exempts_dependent_field(self, signup_fields):
        """topics is only required when the newsletter box is ticked."""
        # Arrange
        body = {"email": "a@b.co", "password": "secret123", "confirm": "secret123", "newsletter": "false"}

        # Act
        errors = validate_submission(signup_fields, body)

        # Assert
        assert "topics" not in errors
