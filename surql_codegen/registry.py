"""
Target registry.

Maps target names such as "effect" (and aliases like "effect-ts") to
generator classes and builds configured generator instances.
"""

from typing import Dict, Type, Optional, Any, List, Union
from pathlib import Path

from .core.generator import CodeGenerator
from .core.config import GeneratorConfig, ConfigError, load_config
from .logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Raised for unknown targets or invalid registrations."""

    pass


class GeneratorRegistry:
    """Target name to generator class mapping, with aliases."""

    def __init__(self):
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            target: Primary target name (e.g., 'effect')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this target
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, CodeGenerator
        ):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        target_key = target.lower()

        if target_key in self._generators and not replace:
            logger.debug("Target %s already registered, skipping", target_key)
            return

        self._generators[target_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()

            if alias_key == target_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary target"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != target_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = target_key

        logger.debug("Registered target %s (%s)", target_key, generator_class.__name__)

    def unregister(self, target: str):
        """Unregister a generator and its aliases."""
        target_key = target.lower()
        self._generators.pop(target_key, None)

        for alias in [a for a, t in self._aliases.items() if t == target_key]:
            del self._aliases[alias]

    def resolve(self, target: str) -> str:
        """Resolve an alias to its primary target name."""
        target_key = target.lower()
        return self._aliases.get(target_key, target_key)

    def get_generator_class(self, target: str) -> Type[CodeGenerator]:
        """
        Get generator class for target.

        Raises:
            RegistryError: If target not found
        """
        target_key = self.resolve(target)

        if target_key in self._generators:
            return self._generators[target_key]

        raise RegistryError(
            f"No generator registered for target: {target}. "
            f"Available: {', '.join(self.list_targets())}"
        )

    def create_generator(
        self,
        target: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for target.

        Args:
            target: Target name or alias
            config: Configuration as GeneratorConfig, dict, or file path

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If generator creation fails
        """
        generator_class = self.get_generator_class(target)
        target_key = self.resolve(target)

        try:
            if isinstance(config, GeneratorConfig):
                final_config = config
            elif isinstance(config, (str, Path)):
                final_config = load_config(target_key, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(target_key, custom_config=config)
            elif config is None:
                final_config = load_config(target_key)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")
        except ConfigError as e:
            raise RegistryError(f"Failed to create {target} generator: {e}") from e

        return generator_class(final_config)

    def list_targets(self) -> List[str]:
        """Get list of registered primary target names."""
        return sorted(self._generators.keys())

    def get_aliases_for_target(self, target: str) -> List[str]:
        """Get all aliases for a specific target."""
        target_key = self.resolve(target)
        return sorted(alias for alias, t in self._aliases.items() if t == target_key)

    def is_supported(self, target: str) -> bool:
        """Check if target is supported."""
        return self.resolve(target) in self._generators

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """
        Get information about a registered target.

        Raises:
            RegistryError: If target not found
        """
        generator_class = self.get_generator_class(target)
        target_key = self.resolve(target)

        generator = generator_class(load_config(target_key))

        return {
            "name": generator.language_name,
            "class": generator_class.__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_target(target_key),
            "module": generator_class.__module__,
            "config": generator.config,
        }


# Shared registry, built on first use
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Shared registry with the built-in targets registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in generators with their aliases."""
    from .languages.effect import EffectGenerator

    registry.register("effect", EffectGenerator, aliases=["effect-schema", "effect-ts"])


def register_generator(
    target: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(target, generator_class, aliases)


def get_generator(
    target: str = "effect",
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> CodeGenerator:
    """Get generator instance from global registry."""
    return get_registry().create_generator(target, config)


def list_supported_targets() -> List[str]:
    """List all supported targets from global registry."""
    return get_registry().list_targets()


def is_target_supported(target: str) -> bool:
    """Check if target is supported by global registry."""
    return get_registry().is_supported(target)


def get_target_info(target: str) -> Dict[str, Any]:
    """Get information about a supported target."""
    return get_registry().get_target_info(target)
