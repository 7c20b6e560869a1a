"""
Violation kinds, the validation error wrapper and message override types.

Usage:
    from fieldkit import Field

    field = Field(id="email", type="email", required=True)
    error = field.validate("")
    if error is not None:
        # error is a FieldError with .kind and .message
        assert error.kind is ViolationKind.VALUE_MISSING

Message overrides:
    The ``message`` option of a field accepts three shapes, each normalized
    into one of the classes below when the field is configured:
        - str: BlanketMessage, used for every violation
        - mapping of kind to str: PerKindMessages
        - callable taking a ViolationKind: ComputedMessage
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from django.core.exceptions import ValidationError


class ViolationKind(str, Enum):
    """Reasons a submitted value can fail validation.

    Values follow the names of the browser's ValidityState flags, plus
    ``noMatch`` for cross-field equality.
    """

    VALUE_MISSING = "valueMissing"
    TOO_SHORT = "tooShort"
    TOO_LONG = "tooLong"
    PATTERN_MISMATCH = "patternMismatch"
    NO_MATCH = "noMatch"
    TYPE_MISMATCH = "typeMismatch"
    # Reserved, never produced by the evaluator
    BAD_INPUT = "badInput"
    CUSTOM_ERROR = "customError"
    RANGE_OVERFLOW = "rangeOverflow"
    RANGE_UNDERFLOW = "rangeUnderflow"
    STEP_MISMATCH = "stepMismatch"


# Order in which data-message-* attributes are emitted
VALIDITY_STATES: tuple[ViolationKind, ...] = (
    ViolationKind.BAD_INPUT,
    ViolationKind.CUSTOM_ERROR,
    ViolationKind.PATTERN_MISMATCH,
    ViolationKind.RANGE_OVERFLOW,
    ViolationKind.RANGE_UNDERFLOW,
    ViolationKind.STEP_MISMATCH,
    ViolationKind.TOO_LONG,
    ViolationKind.TYPE_MISMATCH,
    ViolationKind.VALUE_MISSING,
    ViolationKind.NO_MATCH,
    ViolationKind.TOO_SHORT,
)


class FieldError(ValidationError):
    """
    A single violation together with its resolved message.

    Subclasses Django's ValidationError so it can be raised from ``clean``
    methods and added to Django forms unchanged. The violation kind is
    stored as the error ``code``.

    Attributes:
        kind: The ViolationKind that failed
        message: The resolved, human-readable message
    """

    def __init__(self, kind: ViolationKind, message: str) -> None:
        super().__init__(message, code=kind.value)
        self._kind = kind

    @property
    def kind(self) -> ViolationKind:
        """The violation that was detected."""
        return self._kind

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldError):
            return NotImplemented
        return self.kind is other.kind and self.message == other.message

    def __hash__(self) -> int:
        return hash((self.kind, self.message))

    def __repr__(self) -> str:
        return f"FieldError({self.kind.value!r}, {self.message!r})"


@dataclass(frozen=True)
class BlanketMessage:
    """One message used for every violation."""

    text: str


@dataclass(frozen=True)
class PerKindMessages:
    """Messages keyed by violation kind; missing kinds use the defaults."""

    messages: dict[ViolationKind, str] = field(default_factory=dict)

    def get(self, kind: ViolationKind) -> str | None:
        return self.messages.get(kind)


@dataclass(frozen=True)
class ComputedMessage:
    """A function from violation kind to message."""

    func: Callable[[ViolationKind], str]


MessageOverride = BlanketMessage | PerKindMessages | ComputedMessage
