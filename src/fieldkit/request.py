"""
Request-body extraction for submitted forms.

Works with plain mappings, objects exposing a ``body`` mapping, and Django
HttpRequest objects (whose parsed form data lives in ``request.POST``).
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from django.http import HttpRequest

from .fields import Field
from .types import FieldError

logger = logging.getLogger(__name__)


def get_body(request: Any) -> Mapping[str, Any]:
    """Return the parsed body mapping of ``request``."""
    if isinstance(request, Mapping):
        return request
    if isinstance(request, HttpRequest):
        logger.debug("Reading submitted values from request.POST")
        return request.POST
    body = getattr(request, "body", None)
    if isinstance(body, Mapping):
        return body
    raise TypeError(
        f"Cannot read a parsed body from {type(request).__name__}; "
        "pass a mapping, a Django HttpRequest or an object with a 'body' mapping"
    )


def extract_values(fields: Iterable[Field], request: Any) -> dict[str, Any]:
    """Extract every field's submitted value, keyed by field id."""
    body = get_body(request)
    return {field.id: field.parse_body(body) for field in fields}


def validate_submission(fields: Iterable[Field], request: Any) -> dict[str, FieldError]:
    """
    Validate a whole submission.

    Each field is validated against the values of all the others, so
    ``match`` and ``validateif`` see the same snapshot.

    Returns:
        FieldErrors keyed by field id; empty when the submission is valid.
    """
    fields = list(fields)
    values = extract_values(fields, request)
    errors: dict[str, FieldError] = {}
    for field in fields:
        error = field.validate(values[field.id], values)
        if error is not None:
            errors[field.id] = error
    return errors
