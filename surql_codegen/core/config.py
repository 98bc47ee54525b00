"""
Generator settings.

Settings are resolved in three layers: the target's defaults, an optional
JSON settings file, then explicit overrides (CLI flags or keyword options).
Keys a target does not model directly land in ``GeneratorConfig.custom``.
"""

import json
from copy import deepcopy
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

LINE_ENDINGS = ("\n", "\r\n")

# Per-target defaults; "custom" holds target-specific keys
TARGET_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "effect": {
        "indent_size": 2,
        "line_ending": "\n",
        "add_comments": True,
        "custom": {"schema_module": "effect"},
    },
}


class ConfigError(Exception):
    """Raised for unreadable or malformed settings."""

    pass


@dataclass
class GeneratorConfig:
    """Settings shared by every generator."""

    # Written by the CLI when set, printed otherwise
    output_file: Optional[str] = None

    indent_size: int = 2
    line_ending: str = "\n"

    # Emit table descriptions as doc comments
    add_comments: bool = True

    # Target-specific keys, e.g. schema_module for Effect
    custom: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "GeneratorConfig":
        """Build a config, moving unrecognized keys into ``custom``."""
        known = {f.name for f in fields(cls)}
        custom = dict(values.get("custom") or {})

        kwargs = {}
        for key, value in values.items():
            if key == "custom":
                continue
            if key in known:
                kwargs[key] = value
            else:
                custom[key] = value

        return cls(custom=custom, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Flat mapping suitable for a settings file."""
        flat = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "custom"}
        flat.update(self.custom)
        return flat


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if key == "custom" and isinstance(value, dict):
            base.setdefault("custom", {}).update(value)
        else:
            base[key] = value


class ConfigManager:
    """Resolves generator settings for a target."""

    def __init__(self):
        self._defaults: Dict[str, Dict[str, Any]] = deepcopy(TARGET_DEFAULTS)

    def get_config(
        self,
        target: str = "effect",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Resolve settings for a target.

        Args:
            target: Target name; unknown targets start from the dataclass defaults
            custom_config: Overrides applied last
            config_file: JSON settings file applied between defaults and overrides

        Returns:
            Resolved GeneratorConfig
        """
        resolved = deepcopy(self._defaults.get(target, {}))

        if config_file:
            _merge(resolved, self._read_config_file(config_file))

        if custom_config:
            _merge(resolved, custom_config)

        return GeneratorConfig.from_dict(resolved)

    def _read_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            values = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file {path}: {e}") from e

        if not isinstance(values, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Read settings from %s: %s", path, sorted(values))
        return values

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Write settings as a flat JSON object."""
        path = Path(output_path)
        try:
            path.write_text(
                json.dumps(config.to_dict(), indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

        logger.info("Saved settings to %s", path)

    def list_targets(self) -> List[str]:
        return list(self._defaults)

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """Return a warning per questionable setting; never raises."""
        warnings = []

        if not isinstance(config.indent_size, int) or config.indent_size < 1:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.line_ending not in LINE_ENDINGS:
            warnings.append(f"Unsupported line_ending: {config.line_ending!r}")

        module = config.custom.get("schema_module")
        if module is not None and (not isinstance(module, str) or not module.strip()):
            warnings.append(f"Invalid schema_module: {module!r}")

        return warnings


_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Shared ConfigManager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    target: str = "effect",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """Resolve settings with the shared manager."""
    return get_config_manager().get_config(target, custom_config, config_file)
