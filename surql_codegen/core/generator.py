"""
Generator contract and the error-handling wrapper around it.

A target generator turns an ordered list of ``TableDefinition`` into one
source document. ``generate_code`` runs a generator, collects validation
warnings and metadata, and converts failures into a failed
``GenerationResult`` instead of raising.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .config import GeneratorConfig, get_config_manager
from .schema import FieldType, TableDefinition
from .templates import TemplateEngine, create_template_engine
from ..logging_config import get_logger

logger = get_logger(__name__)

# Consecutive blank lines kept by format_code
MAX_BLANK_LINES = 2


class GeneratorError(Exception):
    """Raised when tables cannot be turned into code."""

    pass


class CodeGenerator(ABC):
    """Base class for target generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Target name, e.g. 'effect'."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension of the generated file, e.g. '.ts'."""

    def get_template_directory(self) -> Optional[Path]:
        """Directory holding this target's templates, None for in-memory only."""
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    @abstractmethod
    def generate(self, tables: Sequence[TableDefinition]) -> str:
        """
        Generate the complete document.

        Args:
            tables: Table definitions in output order

        Returns:
            Source text

        Raises:
            GeneratorError: If the input cannot be generated
        """

    @abstractmethod
    def generate_single_schema(self, table: TableDefinition) -> str:
        """Generate the declaration for one table."""

    def validate_schemas(self, tables: Sequence[TableDefinition]) -> List[str]:
        """
        Report input that generates but probably not as intended.

        Warnings never change the generated code. Targets extend this with
        their own naming checks.
        """
        warnings = []

        for table in tables:
            if not table.fields:
                warnings.append(f"Table '{table.name}' declares no fields")

            for column in table.fields:
                location = f"{table.name}.{column.name}"
                if column.field_type is None:
                    warnings.append(f"Unknown type '{column.type}' in {location}")
                elif column.is_relational and not column.reference:
                    warnings.append(f"Relational field {location} has no reference table")

        return warnings

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace, cap blank runs and apply the line ending."""
        lines = []
        blank_run = 0

        for line in code.split("\n"):
            line = line.rstrip()
            blank_run = blank_run + 1 if not line else 0
            if blank_run <= MAX_BLANK_LINES:
                lines.append(line)

        return self.config.line_ending.join(lines)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)


@dataclass
class GenerationResult:
    """Generated code plus warnings and metadata, or the reason it failed."""

    code: str
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None
    exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        """Failed result with no code."""
        return cls(code="", success=False, error_message=message, exception=exception)


def _is_fallback(column) -> bool:
    return column.field_type is None or (column.is_relational and not column.reference)


def collect_metadata(
    generator: CodeGenerator, tables: Sequence[TableDefinition]
) -> Dict[str, Any]:
    """Summary of a generation run, shown by the CLI in verbose mode."""
    columns = [column for table in tables for column in table.fields]

    return {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "table_count": len(tables),
        "field_count": len(columns),
        "self_references": sum(len(table.self_references()) for table in tables),
        "fallback_types": sum(1 for column in columns if _is_fallback(column)),
        "has_datetime": any(column.field_type == FieldType.DATETIME for column in columns),
    }


def generate_code(
    generator: CodeGenerator, tables: Optional[Sequence[TableDefinition]]
) -> GenerationResult:
    """
    Run a generator without raising.

    Args:
        generator: Configured target generator
        tables: Tables to generate, in output order

    Returns:
        GenerationResult; ``success`` is False when generation failed
    """
    try:
        if tables is None:
            raise GeneratorError("No table definitions provided")

        warnings = get_config_manager().validate_config(generator.config)
        warnings.extend(generator.validate_schemas(tables))

        code = generator.format_code(generator.generate(tables))
        metadata = collect_metadata(generator, tables)
    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    for warning in warnings:
        logger.debug("Generation warning: %s", warning)
    logger.info(
        "Generated %s code for %d table(s)", generator.language_name, len(tables)
    )

    return GenerationResult(code, warnings, metadata)
