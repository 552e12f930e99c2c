"""
Option Schema

Whitelisted, typed configuration options with defaults, and the aliases
that map retired option names onto their replacements.
"""

from .types import OptionSpec, OptionType, coerce
from .defaults import (
    DEFAULT_DEPRECATIONS,
    DEFAULT_OPTIONS,
    build_whitelist,
    validate_deprecations,
)

__all__ = [
    "OptionSpec",
    "OptionType",
    "coerce",
    "DEFAULT_DEPRECATIONS",
    "DEFAULT_OPTIONS",
    "build_whitelist",
    "validate_deprecations",
]
