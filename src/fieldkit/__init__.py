from importlib.metadata import PackageNotFoundError, version

from .config import FieldConfig
from .fields import CheckboxField, ChoiceField, Field, RadioField, create_valid_id, make_field
from .messages import resolve_message
from .presets import FIELD_TYPES, FieldType, get_field_type
from .request import extract_values, get_body, validate_submission
from .types import FieldError, ViolationKind

try:
    __version__ = version("django-fieldkit")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "Field",
    "ChoiceField",
    "CheckboxField",
    "RadioField",
    "FieldConfig",
    "FieldError",
    "FieldType",
    "FIELD_TYPES",
    "ViolationKind",
    "create_valid_id",
    "extract_values",
    "get_body",
    "get_field_type",
    "make_field",
    "resolve_message",
    "validate_submission",
    "__version__",
]
