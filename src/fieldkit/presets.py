"""
Field-type presets.

Each preset names an HTML input type, the attributes a field of that type may
render, and an optional type check used for ``typeMismatch``. Presets are
immutable and shared by every field of the type.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator


# Attribute whitelists

BASE_ATTRIBUTES: tuple[str, ...] = (
    "autofocus", "disabled", "form", "formaction", "formenctype", "formmethod",
    "formnovalidate", "formtarget", "value", "required", "selectiondirection", "autocomplete",
    "inputmode", "list", "minlength", "maxlength", "spellcheck", "readonly",
    "placeholder", "pattern", "step", "match", "validateif", "name",
)

# Number and date-like inputs also accept a range
RANGED_ATTRIBUTES: tuple[str, ...] = BASE_ATTRIBUTES + ("min", "max")

FILE_ATTRIBUTES: tuple[str, ...] = (
    "type", "autofocus", "disabled", "form", "formaction",
    "formenctype", "formmethod", "formnovalidate", "formtarget", "value",
    "required", "selectiondirection", "accept", "multiple", "placeholder",
)

CHECKABLE_ATTRIBUTES: tuple[str, ...] = (
    "autofocus", "disabled", "form", "formaction", "formenctype", "formmethod",
    "formnovalidate", "formtarget", "required", "selectiondirection", "value",
    "autocomplete", "inputmode", "list", "readonly", "validateif", "name", "checked",
)

SELECT_ATTRIBUTES: tuple[str, ...] = (
    "autofocus", "disabled", "form", "multiple", "size", "required",
    "autocomplete", "validateif", "name",
)


# Type checks

# The HTML living standard's "valid email address" production
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)

# Flexible pattern supporting international formats
PHONE_PATTERN = re.compile(
    r"[\+]?[(]?[0-9]{1,3}[)]?[-\s\.]?[(]?[0-9]{1,4}[)]?[-\s\.]?[0-9]{1,4}[-\s\.]?[0-9]{1,9}"
)

_url_validator = URLValidator()


def is_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_url(value: str) -> bool:
    try:
        _url_validator(value)
    except ValidationError:
        return False
    return True


def is_tel(value: str) -> bool:
    return PHONE_PATTERN.fullmatch(value) is not None


@dataclass(frozen=True)
class FieldType:
    """
    A named field preset.

    Attributes:
        name: Registry key, also rendered as the wrapper's data-type
        input_type: The ``type`` attribute of the widget, or None for non-input widgets
        available_attributes: Attribute names the widget may render
        type_check: Predicate for typeMismatch; None when the type has no format
        tag_name: Widget element name
        default_value: Value assumed when a field does not configure one
        widget_first: Render the widget before the label
    """

    name: str
    input_type: str | None = "text"
    available_attributes: tuple[str, ...] = BASE_ATTRIBUTES
    type_check: Callable[[str], bool] | None = None
    tag_name: str = "input"
    default_value: Any = None
    widget_first: bool = False


FIELD_TYPES: dict[str, FieldType] = {
    preset.name: preset
    for preset in (
        FieldType("text"),
        FieldType("string", input_type="text"),
        FieldType("number", input_type="number", available_attributes=RANGED_ATTRIBUTES),
        FieldType("color", input_type="color"),
        FieldType("date", input_type="date", available_attributes=RANGED_ATTRIBUTES),
        FieldType("datetime", input_type="datetime", available_attributes=RANGED_ATTRIBUTES),
        FieldType("datetime-local", input_type="datetime-local", available_attributes=RANGED_ATTRIBUTES),
        FieldType("month", input_type="month", available_attributes=RANGED_ATTRIBUTES),
        FieldType("week", input_type="week", available_attributes=RANGED_ATTRIBUTES),
        FieldType("search", input_type="search"),
        FieldType("time", input_type="time", available_attributes=RANGED_ATTRIBUTES),
        FieldType("tel", input_type="tel", type_check=is_tel),
        FieldType("url", input_type="url", type_check=is_url),
        FieldType("email", input_type="email", type_check=is_email),
        FieldType("hidden", input_type="hidden"),
        FieldType("password", input_type="password"),
        FieldType("file", input_type="file", available_attributes=FILE_ATTRIBUTES),
        FieldType(
            "checkbox",
            input_type="checkbox",
            available_attributes=CHECKABLE_ATTRIBUTES,
            default_value=True,
            widget_first=True,
        ),
        FieldType(
            "radio",
            input_type="radio",
            available_attributes=CHECKABLE_ATTRIBUTES,
            widget_first=True,
        ),
        FieldType("select", input_type=None, available_attributes=SELECT_ATTRIBUTES, tag_name="select"),
    )
}


def get_field_type(name: str) -> FieldType:
    """Look up a preset by name."""
    try:
        return FIELD_TYPES[name]
    except KeyError:
        raise ValueError(
            f"Unknown field type {name!r}; expected one of: {', '.join(FIELD_TYPES)}"
        ) from None
