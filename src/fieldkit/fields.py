"""
fieldkit: declarative HTML form fields with matching server-side validation.

A Field renders its label, widget and error markup from a FieldConfig and
re-validates submitted values against the same constraints it rendered, so the
browser and the server agree on what is valid.

Validation Philosophy:
    - One violation per field at a time, chosen by a fixed precedence:
      noMatch > valueMissing > tooShort > tooLong > patternMismatch > typeMismatch
    - The constraint set is always evaluated in full; the attribute whitelist
      only decides what is rendered
    - Fields hold no per-request state; submitted values and sibling values
      are always passed in
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from django.utils.safestring import SafeString

from .config import FieldConfig
from .html import attribute_value, build_tag, join_html, merge_classes
from .messages import override_for, resolve_message
from .presets import FieldType
from .types import VALIDITY_STATES, BlanketMessage, FieldError, ViolationKind

logger = logging.getLogger(__name__)

_ID_BRACKETS = re.compile(r"\]\[|[\[\]]")


def create_valid_id(id: Any) -> str | None:
    """Rewrite array notation (``foo[bar]``, ``foo[]``) into a valid DOM id."""
    if not isinstance(id, str):
        return None
    valid = _ID_BRACKETS.sub("_", id)
    if valid != id:
        logger.debug("Rewrote field id %r to %r", id, valid)
    return valid


def _sibling_value(entry: Any) -> Any:
    # Sibling snapshots may hold raw values or objects exposing .value
    return getattr(entry, "value", entry)


class Field:
    """
    A single form control built from a FieldConfig.

    Usage:
        field = Field(id="username", label="Username", required=True, minlength=3)
        html = field.render(request.POST.get("username"))
        error = field.validate(field.parse_body(request.POST))
    """

    def __new__(cls, config: FieldConfig | None = None, **options: Any) -> Field:
        # Field(type="select") builds the preset's widget class
        if cls is Field:
            type_name = options.get("type", config.type if config is not None else "text")
            cls = FIELD_CLASSES.get(type_name, Field)
        return super().__new__(cls)

    def __init__(self, config: FieldConfig | None = None, **options: Any) -> None:
        if config is None:
            config = FieldConfig(**options)
        elif options:
            inherited = {name: getattr(config, name) for name in config.model_fields_set}
            config = FieldConfig(**{**inherited, **options})
        self.config = config

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, type={self.type!r})"

    # Configuration shortcuts

    @property
    def id(self) -> str | None:
        return self.config.id

    @property
    def type(self) -> str:
        return self.config.type

    @property
    def value(self) -> Any:
        return self.config.value

    @property
    def field_type(self) -> FieldType:
        return self.config.field_type

    # Constraint evaluation

    def validation_ready(self, fields: Mapping[str, Any] | None) -> bool:
        """False when a ``validateif`` sibling is present but falsy."""
        gate = self.config.validateif
        if not fields or gate is None or gate not in fields:
            return True
        return bool(_sibling_value(fields[gate]))

    def coerce(self, value: Any) -> str:
        """
        String form of a submitted value, falling back to the configured value.

        Only a None or False default counts as empty; a default of 0 validates
        as "0". Multiple submitted values are joined with commas.
        """
        if value is None:
            value = self.config.value
            if value is None or value is False:
                return ""
        if isinstance(value, (list, tuple)):
            return ",".join(self.coerce(item) for item in value if item is not None)
        if isinstance(value, bool):
            return attribute_value(value)
        return str(value)

    def get_errors(self, value: str, fields: Mapping[str, Any] | None = None) -> dict[ViolationKind, bool]:
        """Evaluate every check for a coerced value, in precedence order."""
        config = self.config
        length = len(value)
        no_match = False
        if fields and config.match is not None and config.match in fields:
            no_match = value != self.coerce_sibling(fields[config.match])
        type_check = self.field_type.type_check
        return {
            ViolationKind.NO_MATCH: no_match,
            ViolationKind.VALUE_MISSING: config.required and length == 0,
            ViolationKind.TOO_SHORT: config.minlength is not None and length < config.minlength,
            ViolationKind.TOO_LONG: config.maxlength is not None and length > config.maxlength,
            ViolationKind.PATTERN_MISMATCH: (
                config.pattern is not None and length > 0 and config.pattern.fullmatch(value) is None
            ),
            ViolationKind.TYPE_MISMATCH: type_check is not None and length > 0 and not type_check(value),
        }

    def coerce_sibling(self, entry: Any) -> str:
        value = _sibling_value(entry)
        if value is None:
            return ""
        if isinstance(value, bool):
            return attribute_value(value)
        return str(value)

    def get_error(self, value: str, fields: Mapping[str, Any] | None = None) -> ViolationKind | None:
        """Return the first failing check for a coerced value, or None."""
        for kind, failed in self.get_errors(value, fields).items():
            if failed:
                return kind
        return None

    def validate(self, value: Any = None, fields: Mapping[str, Any] | None = None) -> FieldError | None:
        """
        Validate a submitted value.

        Args:
            value: The raw submitted value; None falls back to the configured value
            fields: Snapshot of sibling values keyed by field id, used by
                ``match`` and ``validateif``

        Returns:
            A FieldError for the highest-precedence violation, or None when valid.
        """
        if not self.validation_ready(fields):
            logger.debug("Skipping validation of %r: %r is empty", self.id, self.config.validateif)
            return None

        kind = self.get_error(self.coerce(value), fields)
        if kind is None:
            return None
        logger.debug("Field %r failed %s", self.id, kind.value)
        return FieldError(kind, resolve_message(kind, self.config))

    def clean(self, value: Any = None, fields: Mapping[str, Any] | None = None) -> str:
        """Like validate, but raise the FieldError and return the coerced value when valid."""
        error = self.validate(value, fields)
        if error is not None:
            raise error
        return self.coerce(value)

    # Attribute resolution

    def get_type_attribute(self) -> dict[str, str]:
        input_type = self.config.resolved_input_type
        return {"type": input_type} if input_type else {}

    def get_data_attributes(self) -> dict[str, Any]:
        return {f"data-{key}": value for key, value in self.config.data_attributes.items()}

    def validation_message_attributes(self) -> dict[str, str]:
        """data-message attributes carrying the message for each active constraint."""
        config = self.config
        attrs: dict[str, str] = {}
        if isinstance(config.message, BlanketMessage):
            attrs["data-message"] = config.message.text
        for kind in VALIDITY_STATES:
            if config.is_active(kind):
                attrs[f"data-message-{kind.value}"] = resolve_message(kind, config)
            else:
                message = override_for(kind, config)
                if message is not None:
                    attrs[f"data-message-{kind.value}"] = message
        return attrs

    def widget_attributes(self, value: Any = None) -> dict[str, Any]:
        """
        Resolve the widget's HTML attributes.

        Only whitelisted configuration is projected. Identity attributes and
        the type are overlaid afterwards, then the validation messages.
        """
        config = self.config
        configured = config.configured_attributes()
        attrs: dict[str, Any] = self.get_type_attribute()
        attrs.update((key, configured[key]) for key in config.whitelist if key in configured)
        attrs.update(
            {
                "name": attrs.get("name") or attrs.get("id") or config.id,
                "id": create_valid_id(attrs.get("id") or config.id),
                "value": value if value is not None else config.value,
            }
        )
        attrs.update(self.get_type_attribute())
        attrs.update(self.validation_message_attributes())
        return attrs

    # Rendering

    def label_text(self, label: str | None = None) -> str:
        return label or self.config.label or ""

    def label_html(self, label: str | None = None, label_for: str | None = None) -> SafeString:
        text = self.label_text(label)
        if not text:
            return SafeString("")
        config = self.config
        contents: list[Any] = [text]
        if config.optional and not config.required:
            indicator = config.optional if isinstance(config.optional, str) else "(optional)"
            contents.append(build_tag("span", {"class": "optionalIndicator"}, indicator))
        return build_tag("label", {"for": label_for or create_valid_id(config.id)}, join_html(*contents))

    def widget_html(self, value: Any = None) -> SafeString:
        return build_tag(self.config.resolved_tag_name, self.widget_attributes(value))

    def error_html(
        self,
        value: Any = None,
        fields: Mapping[str, Any] | None = None,
        render_errors: bool | None = None,
    ) -> SafeString:
        if render_errors is False or (render_errors is None and not self.config.render_errors):
            return SafeString("")
        error = self.validate(value, fields)
        if not isinstance(error, FieldError):
            return SafeString("")
        return build_tag("label", {"for": create_valid_id(self.id), "class": "fieldError"}, error.message)

    def field_html(self, contents: Any, wrapper_tag: str | None = None) -> SafeString:
        attrs = {
            "class": merge_classes(self.config.classes, "field"),
            "data-type": self.type,
        }
        attrs.update(self.get_data_attributes())
        return build_tag(wrapper_tag or self.config.wrapper_tag, attrs, contents)

    def render(
        self,
        value: Any = None,
        *,
        fields: Mapping[str, Any] | None = None,
        label: str | None = None,
        label_for: str | None = None,
        wrapper_tag: str | None = None,
        render_errors: bool | None = None,
    ) -> SafeString:
        """
        Render the complete field block: wrapper, label, widget and error.

        Args:
            value: The value to show in the widget and to validate
            fields: Sibling values for ``match`` and ``validateif``
            label: Replaces the configured label text
            label_for: Replaces the label's ``for`` target
            wrapper_tag: Replaces the configured wrapper element
            render_errors: False suppresses error markup for this render
        """
        label_markup = self.label_html(label, label_for)
        widget_markup = self.widget_html(value)
        if self.field_type.widget_first:
            contents = join_html(widget_markup, label_markup)
        else:
            contents = join_html(label_markup, widget_markup)
        contents = join_html(contents, self.error_html(value, fields, render_errors))
        return self.field_html(contents, wrapper_tag)

    # Request bodies

    def body_key(self) -> str | None:
        return self.id

    def parse_body(self, body: Mapping[str, Any]) -> Any:
        """
        Pull this field's submitted value out of a parsed request body.

        Fields with the ``multiple`` attribute read every value from
        multi-value bodies such as Django's QueryDict.
        """
        if self.config.attributes.get("multiple") and hasattr(body, "getlist"):
            return body.getlist(self.body_key())
        submitted = body.get(self.body_key())
        if isinstance(self.config.value, bool):
            return True if submitted is True or submitted == "true" else None
        return submitted


class ChoiceField(Field):
    """
    A select box with one option per configured choice.

    Choices are either bare values (used as both label and value), single-entry
    ``{label: value}`` mappings, or ``(label, value)`` tuples.
    """

    def get_choices(self) -> list[tuple[str, Any]]:
        choices: list[tuple[str, Any]] = []
        for choice in self.config.choices:
            if isinstance(choice, dict):
                choices.extend(choice.items())
            elif isinstance(choice, tuple):
                choices.append(choice)
            else:
                choices.append((choice, choice))
        return choices

    def widget_attributes(self, value: Any = None) -> dict[str, Any]:
        attrs = super().widget_attributes(value)
        attrs.pop("type", None)
        attrs.pop("value", None)
        return attrs

    def option_html(self, label: str, option_value: Any, selected: bool) -> SafeString:
        attrs = {"value": option_value, "selected": "selected" if selected else None}
        return build_tag("option", attrs, label)

    def widget_html(self, value: Any = None) -> SafeString:
        if value is None:
            selected = set()
        elif isinstance(value, (list, tuple)):
            selected = {attribute_value(item) for item in value}
        else:
            selected = {attribute_value(value)}
        options = [
            self.option_html(label, option_value, attribute_value(option_value) in selected)
            for label, option_value in self.get_choices()
        ]
        return build_tag(self.config.resolved_tag_name, self.widget_attributes(value), join_html(*options))


class CheckableField(Field):
    """
    Checkbox and radio inputs.

    The widget always carries the configured value; the value being rendered
    only decides whether the input is checked.
    """

    def is_checked(self, value: Any) -> bool:
        if value is None or self.config.value is None:
            return False
        return attribute_value(value) == attribute_value(self.config.value)

    def widget_attributes(self, value: Any = None) -> dict[str, Any]:
        attrs = super().widget_attributes(None)
        if self.is_checked(value):
            attrs["checked"] = "checked"
        return attrs


class CheckboxField(CheckableField):
    def parse_body(self, body: Mapping[str, Any]) -> Any:
        if isinstance(self.config.value, bool):
            return super().parse_body(body)
        submitted = body.get(self.body_key())
        if submitted is not None and attribute_value(submitted) == attribute_value(self.config.value):
            return submitted
        return None


class RadioField(CheckableField):
    """Radio inputs are submitted under their group name rather than their id."""

    def body_key(self) -> str | None:
        return self.config.name or self.id


FIELD_CLASSES: dict[str, type[Field]] = {
    "select": ChoiceField,
    "checkbox": CheckboxField,
    "radio": RadioField,
}


def make_field(type: str = "text", **options: Any) -> Field:
    """Build a field of the named preset, using the preset's widget class."""
    return Field(type=type, **options)
