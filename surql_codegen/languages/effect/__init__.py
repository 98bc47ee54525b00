"""
Effect Schema code generator module.

Generates TypeScript Effect Schema classes from table definitions.
"""

from .generator import (
    EffectGenerator,
    create_effect_generator,
    emit_table_class,
    generate_schema_document,
)
from .types import (
    EffectTypeMapper,
    map_field_type,
    RECORD_ID_PATTERN,
    UNTYPED_RECORD_PATTERN,
)
from .annotations import build_annotations, escape_single_quotes
from .naming import format_class_name, is_valid_identifier, TYPESCRIPT_RESERVED_WORDS

__all__ = [
    # Generator
    "EffectGenerator",
    "create_effect_generator",
    "emit_table_class",
    "generate_schema_document",
    # Type mapping
    "EffectTypeMapper",
    "map_field_type",
    "RECORD_ID_PATTERN",
    "UNTYPED_RECORD_PATTERN",
    # Annotations
    "build_annotations",
    "escape_single_quotes",
    # Naming
    "format_class_name",
    "is_valid_identifier",
    "TYPESCRIPT_RESERVED_WORDS",
]
