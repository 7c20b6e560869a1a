"""Pytest configuration for fieldkit tests."""

import pytest

from fieldkit import ChoiceField, Field, make_field


def pytest_configure() -> None:
    """Configure minimal Django settings so HttpRequest and QueryDict work."""
    import django
    from django.conf import settings

    if not settings.configured:
        settings.configure(
            DEBUG=True,
            DATABASES={},
            INSTALLED_APPS=[],
            USE_TZ=True,
        )
        django.setup()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def email_field() -> Field:
    """Email field constrained like a sign-up form's address box."""
    return make_field(
        "email",
        id="email",
        label="Email",
        minlength=0,
        maxlength=10,
        required=True,
        pattern=r"^a@a.a$",
        message={
            "valueMissing": "valueMissing",
            "tooLong": "tooLong",
            "patternMismatch": "patternMismatch",
            "typeMismatch": "typeMismatch",
        },
    )


@pytest.fixture
def select_field() -> ChoiceField:
    """Title select box with mixed choice shapes."""
    return make_field(
        "select",
        id="select",
        label="label",
        choices=["Mr", {"Mrs": "Mrs"}, "Miss"],
        required=True,
    )


@pytest.fixture
def checkbox_field() -> Field:
    """Boolean-valued checkbox."""
    return make_field("checkbox", id="checkbox", label="label")


@pytest.fixture
def radio_field() -> Field:
    """One radio button of the 'radio' group."""
    return make_field("radio", id="radio-foo", label="label", name="radio", value="foo")
