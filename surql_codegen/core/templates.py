"""
Jinja2 rendering for generated source files.

Each target ships its templates in a directory next to its generator.
In-memory templates registered with ``add_template`` take precedence over
files of the same name.
"""

import re
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateError as JinjaTemplateError,
    select_autoescape,
)

_WORD_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATOR_RE = re.compile(r"[-\s_]+")


class TemplateError(Exception):
    """Raised when a template cannot be found or rendered."""

    pass


class TemplateEngine:
    """Renders code templates with filters for TypeScript output."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Create an engine.

        Args:
            template_dir: Directory of ``*.j2`` files, or None for in-memory only
        """
        self.template_dir = template_dir
        self._memory = DictLoader({})

        loaders = [self._memory]
        if template_dir is not None and template_dir.is_dir():
            loaders.append(FileSystemLoader(str(template_dir)))

        # Generated code is not markup; block tags must not leave blank lines
        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._env.filters.update(
            pascal_case=pascal_case,
            indent=indent_lines,
            comment=comment_lines,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a named template."""
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {e}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render template source given inline."""
        try:
            return self._env.from_string(template_string).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """Register an in-memory template, shadowing any file of that name."""
        self._memory.mapping[name] = content
        if self._env.cache is not None:
            self._env.cache.clear()

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.list_templates()


def pascal_case(value: str) -> str:
    """``telegram_message`` or ``telegramMessage`` to ``TelegramMessage``."""
    words = _SEPARATOR_RE.split(_WORD_BOUNDARY_RE.sub(r"\1_\2", str(value)))
    return "".join(word.capitalize() for word in words if word)


def indent_lines(value: str, spaces: int = 2) -> str:
    """Indent every non-blank line."""
    prefix = " " * spaces
    return "\n".join(prefix + line if line.strip() else line for line in str(value).split("\n"))


def comment_lines(value: str, marker: str = "//") -> str:
    """Prefix every line with a comment marker, without trailing spaces."""
    return "\n".join(f"{marker} {line}".rstrip() for line in str(value).split("\n"))


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
