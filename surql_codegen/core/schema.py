"""
Core schema representation for code generation.

Converts table definitions produced by an upstream SurQL parser or exporter
into a normalized internal format that generators can work with consistently.
"""

import json
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum


class FieldType(Enum):
    """Field type tags understood by the generators."""

    INT = "int"
    NUMBER = "number"
    FLOAT = "float"
    BOOL = "bool"
    DATETIME = "datetime"
    ARRAY = "array"
    ARRAY_FLOAT = "array_float"
    ARRAY_RECORD = "array_record"
    OBJECT = "object"
    RECORD = "record"
    REFERENCES = "references"
    STRING = "string"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["FieldType"]:
        """Resolve a case-insensitive type tag, None when unrecognized."""
        try:
            return cls(tag.lower())
        except ValueError:
            return None


# Types whose values point at rows of another table
RELATIONAL_TYPES = {FieldType.RECORD, FieldType.ARRAY_RECORD, FieldType.REFERENCES}


@dataclass(frozen=True)
class Reference:
    """Target of a relational field."""

    table: str


@dataclass(frozen=True)
class FieldDefinition:
    """Represents a single field of a table."""

    name: str
    type: str
    optional: bool = False
    description: Optional[str] = None
    default_value: Optional[str] = None
    reference: Optional[Reference] = None

    @property
    def field_type(self) -> Optional[FieldType]:
        """Parsed type tag, None for tags outside the vocabulary."""
        return FieldType.from_tag(self.type)

    @property
    def is_relational(self) -> bool:
        return self.field_type in RELATIONAL_TYPES


@dataclass(frozen=True)
class TableDefinition:
    """Represents a table and its declared fields."""

    name: str
    fields: List[FieldDefinition] = field(default_factory=list)
    description: Optional[str] = None

    def get_field(self, name: str) -> Optional[FieldDefinition]:
        """Get field by name."""
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None

    def has_field(self, name: str) -> bool:
        return self.get_field(name) is not None

    def self_references(self) -> List[FieldDefinition]:
        """Fields whose reference points back at this table."""
        return [
            f
            for f in self.fields
            if f.is_relational and f.reference and f.reference.table == self.name
        ]


def _convert_reference(raw: Any) -> Optional[Reference]:
    """Accept either {"table": name} or a bare table name."""
    if not raw:
        return None
    if isinstance(raw, str):
        return Reference(table=raw)
    if isinstance(raw, dict) and raw.get("table"):
        return Reference(table=str(raw["table"]))
    return None


def _default_text(value: Any) -> Optional[str]:
    """Defaults are carried as source text; JSON values keep their JSON spelling."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _description_text(value: Any) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"description must be a string, got {type(value).__name__}")
    return value


def _convert_field(raw: Dict[str, Any]) -> FieldDefinition:
    return FieldDefinition(
        name=str(raw["name"]),
        type=str(raw.get("type", "string")),
        optional=bool(raw.get("optional", False)),
        description=_description_text(raw.get("description")),
        default_value=_default_text(raw.get("defaultValue", raw.get("default_value"))),
        reference=_convert_reference(raw.get("reference")),
    )


def load_table_definitions(data: Any) -> List[TableDefinition]:
    """
    Convert parsed JSON table metadata into TableDefinition objects.

    Args:
        data: List of table objects as exported by the schema parser

    Returns:
        List of TableDefinition in input order

    Raises:
        GeneratorError: If the payload is not a list of table objects, or a
            name or description is not a string
    """
    from .generator import GeneratorError

    if not isinstance(data, list):
        raise GeneratorError(
            f"Table definitions must be a list, got {type(data).__name__}"
        )

    tables = []
    for index, raw_table in enumerate(data):
        if not isinstance(raw_table, dict):
            raise GeneratorError(f"Table entry {index} is not an object")

        name = raw_table.get("name", "")
        if not isinstance(name, str):
            raise GeneratorError(
                f"Table entry {index} has a non-string name: {name!r}"
            )

        description = raw_table.get("description")
        if description is not None and not isinstance(description, str):
            raise GeneratorError(f"Table entry {index} has a non-string description")

        try:
            fields = [_convert_field(raw) for raw in raw_table.get("fields", [])]
        except (KeyError, TypeError) as e:
            raise GeneratorError(
                f"Invalid field in table entry {index}: {e}"
            ) from e

        tables.append(
            TableDefinition(
                name=name,
                fields=fields,
                description=description,
            )
        )

    return tables
