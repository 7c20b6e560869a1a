"""Tests for the field-type presets."""

import pytest

from fieldkit import FIELD_TYPES, get_field_type, make_field
from fieldkit.presets import (
    CHECKABLE_ATTRIBUTES,
    FILE_ATTRIBUTES,
    is_email,
    is_tel,
    is_url,
)


class TestRegistry:
    """Tests for FIELD_TYPES and get_field_type."""

    def test_should_contain_all_presets(self):
        assert set(FIELD_TYPES) == {
            "text", "string", "number", "color", "date", "datetime", "datetime-local",
            "month", "week", "search", "time", "tel", "url", "email", "hidden", "password",
            "file", "checkbox", "radio", "select",
        }

    @pytest.mark.parametrize("name", sorted(set(FIELD_TYPES) - {"select"}))
    def test_input_type_should_match_name(self, name):
        """Every input preset uses its own name as input type, except string."""
        expected = "text" if name == "string" else name

        assert FIELD_TYPES[name].input_type == expected
        assert make_field(name).widget_attributes()["type"] == expected

    def test_select_has_no_input_type(self):
        assert FIELD_TYPES["select"].input_type is None
        assert FIELD_TYPES["select"].tag_name == "select"

    def test_should_raise_for_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown field type 'nope'"):
            get_field_type("nope")

    def test_file_whitelist(self):
        assert FIELD_TYPES["file"].available_attributes == FILE_ATTRIBUTES
        assert "accept" in FILE_ATTRIBUTES
        assert "multiple" in FILE_ATTRIBUTES

    @pytest.mark.parametrize("name", ["checkbox", "radio"])
    def test_checkable_whitelist(self, name):
        assert FIELD_TYPES[name].available_attributes == CHECKABLE_ATTRIBUTES
        assert "checked" in CHECKABLE_ATTRIBUTES

    def test_whitelists_are_shared_and_immutable(self):
        """Fields read the preset whitelist without copying or changing it."""
        # Arrange
        first = make_field("text", id="a")
        second = make_field("text", id="b", attributes={"placeholder": "x"})

        # Act
        first.widget_attributes()
        second.widget_attributes()

        # Assert
        assert first.config.whitelist is second.config.whitelist
        assert isinstance(first.config.whitelist, tuple)

    def test_only_format_types_have_type_checks(self):
        checked = {name for name, preset in FIELD_TYPES.items() if preset.type_check is not None}

        assert checked == {"email", "url", "tel"}


class TestTypeChecks:
    """Tests for the type-check predicates."""

    @pytest.mark.parametrize("value", ["a@a.a", "first.last+tag@example.co.uk", "x@localhost"])
    def test_valid_emails(self, value):
        assert is_email(value)

    @pytest.mark.parametrize("value", ["b", "aaaa", "a@", "@a.a", "a b@c.d"])
    def test_invalid_emails(self, value):
        assert not is_email(value)

    def test_urls(self):
        assert is_url("https://example.com")
        assert is_url("http://localhost:8000/path?q=1")
        assert not is_url("string")
        assert not is_url("example.com")

    def test_phone_numbers(self):
        assert is_tel("+1 (555) 123-4567")
        assert is_tel("020 7946 0958")
        assert not is_tel("call me")
