"""
Domainer - Domain Mapping Registry

Maps custom domains onto the sites of a multisite installation:
- Whitelisted, typed global options with deprecation aliases
- Transient, non-persisted option overrides
- A directory of domain records keyed by sanitized domain name
- Pluggable persistence (memory, YAML files, SQLite options table)
"""

__version__ = "0.1.0"

from .domains.types import Domain
from .errors import (
    ConfigurationError,
    DomainerError,
    StorageError,
    UnsupportedOptionError,
    UnsupportedOptionWarning,
)
from .registry.registry import ConfigRegistry, SaveScope

__all__ = [
    "ConfigRegistry",
    "ConfigurationError",
    "Domain",
    "DomainerError",
    "SaveScope",
    "StorageError",
    "UnsupportedOptionError",
    "UnsupportedOptionWarning",
]
