"""
Effect Schema code generator implementation.

Generates TypeScript ``Schema.Class`` definitions from table definitions.
"""

from typing import List, Optional, Sequence
from pathlib import Path

from ...core.generator import CodeGenerator, GeneratorError
from ...core.schema import TableDefinition, FieldDefinition, Reference
from ...core.config import GeneratorConfig
from .annotations import build_annotations
from .naming import format_class_name, is_valid_identifier, class_name_conflicts
from .types import EffectTypeMapper, RECORD_ID_PATTERN

ID_FIELD = "id"
ID_DESCRIPTION = "Unique identifier"


class EffectGenerator(CodeGenerator):
    """Code generator for Effect Schema classes."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Effect generator with configuration."""
        super().__init__(config)

        self.type_mapper = EffectTypeMapper()
        self.indent = " " * self.config.indent_size
        self.schema_module = self.config.custom.get("schema_module", "effect")

    def get_template_directory(self) -> Optional[Path]:
        """Return the Effect templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def language_name(self) -> str:
        """Return the target name."""
        return "effect"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def generate(self, tables: Sequence[TableDefinition]) -> str:
        """Generate the preamble followed by one class per table."""
        if tables is None:
            raise GeneratorError("No table definitions provided")

        parts = [self.render_preamble()]
        parts.extend(self.generate_single_schema(table) for table in tables)

        return "\n\n".join(parts) + "\n"

    def render_preamble(self) -> str:
        """Render the shared RecordId type and its constructor."""
        return self.render_template(
            "preamble.ts.j2",
            {
                "schema_module": self.schema_module,
                "record_id_pattern": RECORD_ID_PATTERN,
            },
        )

    def generate_single_schema(self, table: TableDefinition) -> str:
        """Generate the class definition for a single table."""
        if not isinstance(table.name, str) or not table.name.strip():
            raise GeneratorError(f"Table name must be a non-empty string: {table.name!r}")

        class_name = format_class_name(table.name)

        field_lines = [
            self._render_field(field, table.name)
            for field in self._fields_with_id(table)
        ]

        description = None
        if self.config.add_comments and table.description:
            description = self._escape_comment(table.description)

        return self.render_template(
            "class.ts.j2",
            {
                "class_name": class_name,
                "table_name": table.name,
                "description": description,
                "body": ",\n".join(field_lines),
            },
        )

    def _fields_with_id(self, table: TableDefinition) -> List[FieldDefinition]:
        """Declared fields, led by a synthesized id when none is declared."""
        if table.has_field(ID_FIELD):
            return list(table.fields)

        id_field = FieldDefinition(
            name=ID_FIELD,
            type="record",
            description=ID_DESCRIPTION,
            reference=Reference(table=table.name),
        )
        return [id_field, *table.fields]

    def _render_field(self, field: FieldDefinition, table_name: str) -> str:
        annotations = build_annotations(field)
        expression = self.type_mapper.map_field_type(field, annotations, table_name)
        return f"{self.indent}{field.name}: {expression}"

    def _escape_comment(self, description: str) -> str:
        """Escape a table description for a block comment."""
        return description.replace("'", "\\'").replace("*/", "*\\/")

    def validate_schemas(self, tables: Sequence[TableDefinition]) -> List[str]:
        """Validate tables for Effect generation."""
        warnings = super().validate_schemas(tables)

        for table in tables:
            class_name = format_class_name(table.name) if table.name else ""

            if class_name and not is_valid_identifier(class_name):
                warnings.append(
                    f"Class name '{class_name}' for table '{table.name}' "
                    f"is not a valid TypeScript identifier"
                )
            elif class_name_conflicts(class_name):
                warnings.append(
                    f"Class name '{class_name}' shadows a preamble declaration"
                )

            for field in table.fields:
                if not is_valid_identifier(field.name, allow_reserved=True):
                    warnings.append(
                        f"Field {table.name}.{field.name} is not a valid TypeScript identifier"
                    )

        return warnings


# Default generator shared by the module-level helpers
_default_generator: Optional[EffectGenerator] = None


def get_default_generator() -> EffectGenerator:
    """Get the default Effect generator instance."""
    global _default_generator
    if _default_generator is None:
        _default_generator = EffectGenerator()
    return _default_generator


def emit_table_class(table: TableDefinition) -> str:
    """Generate the class definition for one table with default settings."""
    return get_default_generator().generate_single_schema(table)


def generate_schema_document(tables: Sequence[TableDefinition]) -> str:
    """Generate the full TypeScript document with default settings."""
    return get_default_generator().generate(tables)


def create_effect_generator(config: Optional[GeneratorConfig] = None) -> EffectGenerator:
    """Create an Effect generator, loading the target defaults when no config is given."""
    if config is None:
        from ...core.config import load_config

        config = load_config("effect")

    return EffectGenerator(config)
