"""
Message resolution for violations.

Per-field overrides take precedence over the built-in defaults below. Defaults
are interpolated with the field's own constraint values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import BlanketMessage, ComputedMessage, PerKindMessages, ViolationKind

if TYPE_CHECKING:
    from .config import FieldConfig


DEFAULT_MESSAGES: dict[ViolationKind, str] = {
    ViolationKind.VALUE_MISSING: "This field is required",
    ViolationKind.TOO_SHORT: "Please use {minlength} characters or more",
    ViolationKind.TOO_LONG: "Please use {maxlength} characters or less",
    ViolationKind.PATTERN_MISMATCH: "Please use the required format",
    ViolationKind.TYPE_MISMATCH: "Please enter a valid {type}",
    ViolationKind.NO_MATCH: "{id} must match {match}",
}

FALLBACK_MESSAGE = "Please enter a valid value"


def default_message(kind: ViolationKind, config: FieldConfig) -> str:
    """Return the built-in message for ``kind`` filled in from ``config``."""
    template = DEFAULT_MESSAGES.get(kind, FALLBACK_MESSAGE)
    return template.format(
        minlength=config.minlength,
        maxlength=config.maxlength,
        type=config.type,
        id=config.id,
        match=config.match,
    )


def resolve_message(kind: ViolationKind, config: FieldConfig) -> str:
    """Resolve the message shown for ``kind`` on a field configured by ``config``."""
    override = config.message
    if isinstance(override, BlanketMessage):
        return override.text
    if isinstance(override, ComputedMessage):
        return override.func(kind)
    if isinstance(override, PerKindMessages):
        message = override.get(kind)
        if message:
            return message
    return default_message(kind, config)


def override_for(kind: ViolationKind, config: FieldConfig) -> str | None:
    """Return an explicit per-kind override for ``kind``, if one was configured."""
    if isinstance(config.message, PerKindMessages):
        return config.message.get(kind) or None
    return None
