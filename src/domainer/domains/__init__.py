"""
Domain Mapping Layer

Custom domains mapped onto network sites, with their redirect, www and
https preferences.
"""

from .types import WWW_RULES, Domain, WwwRule

__all__ = [
    "Domain",
    "WwwRule",
    "WWW_RULES",
]
