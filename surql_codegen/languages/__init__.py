"""
Target-specific code generators.

This module contains generators for different validation frameworks.
"""

from .effect import EffectGenerator, create_effect_generator

__all__ = ["EffectGenerator", "create_effect_generator"]
