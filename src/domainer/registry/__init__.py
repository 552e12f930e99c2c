"""
Configuration Registry

The per-context store of whitelisted options, transient overrides and the
domain directory, persisted through an options storage backend.
"""

from .registry import DOMAINS_KEY, OPTIONS_KEY, ConfigRegistry, SaveScope

__all__ = [
    "ConfigRegistry",
    "SaveScope",
    "OPTIONS_KEY",
    "DOMAINS_KEY",
]
