"""
SurQL Code Generation

Generates runtime-checked data classes from SurrealDB table definitions.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_target_info,
    list_supported_targets,
)
from .core.generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .core.schema import (
    TableDefinition,
    FieldDefinition,
    Reference,
    FieldType,
    load_table_definitions,
)
from .core.config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .languages.effect import (
    EffectGenerator,
    build_annotations,
    emit_table_class,
    format_class_name,
    generate_schema_document,
    map_field_type,
)

__version__ = "0.1.0"


def generate_from_tables(tables_data, target="effect", config=None):
    """
    Generate code from parsed table metadata.

    Args:
        tables_data: List of table objects (dicts) or TableDefinition values
        target: Target generator name
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        GenerationResult with generated code
    """
    if tables_data is None:
        return GenerationResult.error("Code generation failed: no table definitions provided")

    try:
        if all(isinstance(t, TableDefinition) for t in tables_data):
            tables = list(tables_data)
        else:
            tables = load_table_definitions(tables_data)
        generator = get_generator(target, config)
    except (GeneratorError, RegistryError, TypeError) as e:
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    return generate_code(generator, tables)


def quick_generate(tables_data, target="effect", **options):
    """
    Quick code generation from table metadata.

    Args:
        tables_data: Table metadata as a list or a JSON string
        target: Target generator name
        **options: Generator options

    Returns:
        Generated code string
    """
    if isinstance(tables_data, str):
        import json

        tables_data = json.loads(tables_data)

    result = generate_from_tables(tables_data, target, options)

    if result.success:
        return result.code
    else:
        raise GeneratorError(result.error_message)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "TableDefinition",
    "FieldDefinition",
    "Reference",
    "FieldType",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "EffectGenerator",
    "build_annotations",
    "emit_table_class",
    "format_class_name",
    "generate_code",
    "generate_from_tables",
    "generate_schema_document",
    "get_generator",
    "get_target_info",
    "list_supported_targets",
    "load_config",
    "load_table_definitions",
    "map_field_type",
    "quick_generate",
]
