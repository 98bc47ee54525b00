"""
Annotation clauses for Effect Schema fields.

Builds the trailing ``.annotations({ ... })`` call that records a field's
description and its default value.
"""

import re
from typing import List, Optional

from ...core.schema import FieldDefinition, FieldType

# Signed decimal literal, ASCII digits only
_NUMERIC_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")

# Namespaced SurrealDB function call such as time::now()
_FUNCTION_MARKER = "::"


def escape_single_quotes(value: str) -> str:
    """
    Escape a string for a single-quoted TypeScript literal.

    Already escaped quotes are unescaped first so they are not escaped twice.
    """
    return value.replace("\\'", "'").replace("'", "\\'")


def quote(value: str) -> str:
    """Wrap a value in a single-quoted literal."""
    return f"'{escape_single_quotes(value)}'"


def is_native_literal(value: str) -> bool:
    """
    Whether a default can be emitted as-is.

    Quoted strings, booleans, numbers, arrays and objects already read as
    TypeScript literals.
    """
    return (
        value.startswith("'")
        or value.startswith('"')
        or value in ("true", "false")
        or _NUMERIC_RE.fullmatch(value) is not None
        or value.startswith("[")
        or value.startswith("{")
    )


def default_entry(field: FieldDefinition) -> Optional[str]:
    """Annotation entry for a field's default value, None without one."""
    value = field.default_value
    if not value:
        return None

    if _FUNCTION_MARKER in value:
        # Database-side defaults on datetimes keep their provenance
        if field.field_type == FieldType.DATETIME:
            return f"surrealDefault: {quote(value)}"
        return f"default: {quote(value)}"

    if is_native_literal(value):
        return f"default: {value}"

    return f"default: {quote(value)}"


def annotation_entries(field: FieldDefinition) -> List[str]:
    """Ordered key/value entries for a field: description, then default."""
    entries = []

    if field.description:
        entries.append(f"description: {quote(field.description)}")

    default = default_entry(field)
    if default:
        entries.append(default)

    return entries


def build_annotations(field: FieldDefinition) -> str:
    """
    Build the annotation clause for a field.

    Args:
        field: Field definition

    Returns:
        ``.annotations({ ... })`` or an empty string when there is nothing to record
    """
    entries = annotation_entries(field)
    if not entries:
        return ""
    return f".annotations({{ {', '.join(entries)} }})"
