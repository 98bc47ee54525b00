"""
Core code generation components.

Provides base classes and utilities used by all target generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    TableDefinition,
    FieldDefinition,
    Reference,
    FieldType,
    RELATIONAL_TYPES,
    load_table_definitions,
)
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Table model
    "TableDefinition",
    "FieldDefinition",
    "Reference",
    "FieldType",
    "RELATIONAL_TYPES",
    "load_table_definitions",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
