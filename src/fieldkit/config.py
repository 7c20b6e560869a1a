"""
Field configuration.

A FieldConfig is validated and normalized once, when the field is defined,
and is frozen afterwards. Fields reuse it for every render and validation.
"""

import re
from collections.abc import Callable, Mapping
from typing import Annotated, Any

from annotated_types import Ge
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .presets import FIELD_TYPES, FieldType, get_field_type
from .types import (
    BlanketMessage,
    ComputedMessage,
    MessageOverride,
    PerKindMessages,
    ViolationKind,
)

# Options with their own config fields; they may not be passed through ``attributes``
RESERVED_ATTRIBUTES = frozenset(
    {"id", "name", "type", "value", "required", "minlength", "maxlength", "pattern", "match", "validateif"}
)


class FieldConfig(BaseModel):
    """
    Declarative definition of a single form field.

    Usage:
        config = FieldConfig(
            id="password_confirmation",
            type="password",
            label="Confirm password",
            required=True,
            minlength=8,
            match="password",
            message={"noMatch": "Passwords do not match"},
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Identity
    id: str | None = None
    name: str | None = None
    type: str = "text"
    input_type: str | None = None
    tag_name: str | None = None

    # Presentation
    label: str | None = None
    optional: bool | str = False
    wrapper_tag: str = "div"
    classes: str | list[str] = []
    data_attributes: dict[str, Any] = {}
    attributes: dict[str, Any] = {}
    choices: list[str | dict[str, Any] | tuple[str, Any]] = []
    render_errors: bool = True

    # Constraints
    required: bool = False
    minlength: Annotated[int, Ge(0)] | None = None
    maxlength: Annotated[int, Ge(0)] | None = None
    # Matched against the whole value, as browsers do for the pattern attribute;
    # a pattern written for an unanchored search needs explicit .* around it
    pattern: re.Pattern[str] | None = None
    match: str | None = None
    validateif: str | None = None

    # Value and messages
    value: Any = None
    message: MessageOverride | None = None
    available_attributes: tuple[str, ...] | None = None

    @model_validator(mode="before")
    @classmethod
    def _apply_preset_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("value") is None:
            preset = FIELD_TYPES.get(data.get("type", "text"))
            if preset is not None and preset.default_value is not None:
                data = {**data, "value": preset.default_value}
        return data

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        get_field_type(value)
        return value

    @field_validator("message", mode="before")
    @classmethod
    def _normalize_message(cls, value: Any) -> Any:
        if isinstance(value, str):
            return BlanketMessage(value)
        if isinstance(value, Mapping):
            return PerKindMessages({ViolationKind(kind): text for kind, text in value.items()})
        if isinstance(value, Callable):
            return ComputedMessage(value)
        return value

    @field_validator("attributes")
    @classmethod
    def _check_attributes(cls, value: dict[str, Any]) -> dict[str, Any]:
        reserved = RESERVED_ATTRIBUTES.intersection(value)
        if reserved:
            raise ValueError(
                f"Configure {', '.join(sorted(reserved))} as field options, not via 'attributes'"
            )
        return value

    # Derived settings

    @property
    def field_type(self) -> FieldType:
        return get_field_type(self.type)

    @property
    def resolved_input_type(self) -> str | None:
        return self.input_type or self.field_type.input_type

    @property
    def resolved_tag_name(self) -> str:
        return self.tag_name or self.field_type.tag_name

    @property
    def whitelist(self) -> tuple[str, ...]:
        """Attribute names this field may render."""
        if self.available_attributes is not None:
            return self.available_attributes
        return self.field_type.available_attributes

    def is_active(self, kind: ViolationKind) -> bool:
        """Whether the constraint behind ``kind`` is configured (not whether it is satisfied)."""
        if kind is ViolationKind.VALUE_MISSING:
            return self.required
        if kind is ViolationKind.TOO_SHORT:
            return self.minlength is not None
        if kind is ViolationKind.TOO_LONG:
            return self.maxlength is not None
        if kind is ViolationKind.PATTERN_MISMATCH:
            return self.pattern is not None
        if kind is ViolationKind.NO_MATCH:
            return self.match is not None
        if kind is ViolationKind.TYPE_MISMATCH:
            return self.field_type.type_check is not None
        return False

    def configured_attributes(self) -> dict[str, Any]:
        """All configured values that could become HTML attributes, before whitelisting."""
        configured = dict(self.attributes)
        configured.update(
            {
                "required": self.required,
                "minlength": self.minlength,
                "maxlength": self.maxlength,
                "pattern": self.pattern.pattern if self.pattern is not None else None,
                "match": self.match,
                "validateif": self.validateif,
                "name": self.name,
                "value": self.value,
            }
        )
        return {key: value for key, value in configured.items() if value is not None}
