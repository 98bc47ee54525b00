"""
Effect Schema type system for code generation.

Maps table field type tags to Effect Schema validator expressions.
"""

from typing import Dict, Optional

from ...core.schema import FieldDefinition, FieldType

# Shape of a record id such as user:42 or user:tobie
RECORD_ID_PATTERN = "/^[a-zA-Z0-9_-]+:[a-zA-Z0-9_-]+$/"

# Untyped record fallback, kept apart from RECORD_ID_PATTERN
UNTYPED_RECORD_PATTERN = "/^[a-zA-Z0-9_-]+:⟨\\d+⟩$/"

STRING_TYPE = "Schema.String"

# Types that map to a fixed expression
PRIMITIVE_TYPE_MAP: Dict[FieldType, str] = {
    FieldType.INT: "Schema.Number.pipe(Schema.int())",
    FieldType.NUMBER: "Schema.Number.pipe(Schema.int())",
    FieldType.FLOAT: "Schema.Number",
    FieldType.BOOL: "Schema.Boolean",
    FieldType.DATETIME: "Schema.Date",
    FieldType.ARRAY: "Schema.Array(Schema.String)",
    FieldType.ARRAY_FLOAT: "Schema.Array(Schema.Number)",
    FieldType.OBJECT: "Schema.Record(Schema.String, Schema.Unknown)",
    FieldType.STRING: STRING_TYPE,
}

# Present even when declared optional
ALWAYS_PRESENT_TYPES = {FieldType.DATETIME}


def record_id(table_name: str) -> str:
    """Expression for the identifier type scoped to a table."""
    return f'recordId("{table_name}")'


def array_of(expression: str) -> str:
    return f"Schema.Array({expression})"


def optional(expression: str) -> str:
    return f"Schema.optional({expression})"


def pattern_string(pattern: str) -> str:
    return f"{STRING_TYPE}.pipe(Schema.pattern({pattern}))"


class EffectTypeMapper:
    """
    Maps field definitions to Effect Schema expressions.

    Unknown tags fall back to ``Schema.String`` and relational fields
    without a reference fall back to pattern-constrained strings, so every
    field produces something that compiles.
    """

    def map_field_type(
        self, field: FieldDefinition, annotations: str = "", table_name: str = ""
    ) -> str:
        """
        Map a field to a validator expression.

        Args:
            field: The field to map
            annotations: Annotation clause attached to the inner validator
            table_name: Owning table, used to resolve self references

        Returns:
            Expression, wrapped in Schema.optional when the field is optional
        """
        field_type = field.field_type
        expression = self._map_base_type(field, field_type, table_name) + annotations

        if field.optional and field_type not in ALWAYS_PRESENT_TYPES:
            expression = optional(expression)

        return expression

    def _map_base_type(
        self,
        field: FieldDefinition,
        field_type: Optional[FieldType],
        table_name: str,
    ) -> str:
        """Map the base type without considering optionality."""
        if field_type in PRIMITIVE_TYPE_MAP:
            return PRIMITIVE_TYPE_MAP[field_type]

        elif field_type == FieldType.RECORD:
            return self._map_record(field, table_name)

        elif field_type == FieldType.ARRAY_RECORD:
            if field.reference:
                return array_of(record_id(field.reference.table))
            return array_of(pattern_string(RECORD_ID_PATTERN))

        elif field_type == FieldType.REFERENCES:
            if field.reference:
                return array_of(record_id(field.reference.table))
            return array_of(STRING_TYPE)

        # Unknown tags
        return STRING_TYPE

    def _map_record(self, field: FieldDefinition, table_name: str) -> str:
        """Map a single record link."""
        if not field.reference:
            return pattern_string(UNTYPED_RECORD_PATTERN)

        if table_name and field.reference.table == table_name:
            # Self reference, e.g. telegram_message.reply_to_message_id
            return record_id(table_name)

        return record_id(field.reference.table)


_default_mapper = EffectTypeMapper()


def map_field_type(field: FieldDefinition, annotations: str = "", table_name: str = "") -> str:
    """Map a field with the default mapper."""
    return _default_mapper.map_field_type(field, annotations, table_name)
