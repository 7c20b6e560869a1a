"""HTML tag and class-list helpers built on django.utils.html."""

from collections.abc import Iterable, Mapping
from typing import Any

from django.utils.html import conditional_escape, format_html, format_html_join
from django.utils.safestring import SafeString, mark_safe


def attribute_value(value: Any) -> str:
    """Stringify an attribute value, spelling booleans the way browsers expect."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_attributes(attrs: Mapping[str, Any]) -> SafeString:
    """
    Render attributes as ` key="value"` pairs in insertion order.

    Attributes whose value is None or False are omitted. Values are escaped.
    """
    return format_html_join(
        "",
        ' {}="{}"',
        (
            (key, attribute_value(value))
            for key, value in attrs.items()
            if value is not None and value is not False
        ),
    )


def build_tag(tag_name: str, attrs: Mapping[str, Any] | None = None, content: Any = None) -> SafeString:
    """
    Build an HTML element.

    Without content the tag is self-closed (``<input .../>``). Content that is
    not already marked safe is escaped.
    """
    attributes = flatten_attributes(attrs or {})
    if content is None:
        return format_html("<{}{}/>", tag_name, attributes)
    return format_html("<{}{}>{}</{}>", tag_name, attributes, conditional_escape(content), tag_name)


def merge_classes(classes: str | Iterable[str] | None, *extra: str) -> str:
    """Join configured classes with extra ones, dropping blanks and duplicates."""
    if classes is None:
        classes = []
    elif isinstance(classes, str):
        classes = classes.split()
    merged: list[str] = []
    for name in [*classes, *extra]:
        name = name.strip()
        if name and name not in merged:
            merged.append(name)
    return " ".join(merged)


def join_html(*parts: Any) -> SafeString:
    """Concatenate markup fragments, escaping any that are not marked safe."""
    return mark_safe("".join(conditional_escape(part) for part in parts))
