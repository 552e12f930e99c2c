"""Built-in option whitelist and deprecated option aliases."""

from __future__ import annotations

from typing import Iterable

from ..errors import ConfigurationError
from .types import OptionSpec, OptionType

DEFAULT_OPTIONS: tuple[OptionSpec, ...] = (
    OptionSpec(
        "redirection_permanent", True, OptionType.BOOL,
        "Use permanent (301) rather than temporary (302) redirects",
    ),
    OptionSpec(
        "www_rule", "auto", OptionType.STR,
        "Global www preference: auto, always or never",
    ),
    OptionSpec(
        "force_https", False, OptionType.BOOL,
        "Redirect plain http requests to https on mapped domains",
    ),
    OptionSpec(
        "remote_login", True, OptionType.BOOL,
        "Authenticate mapped domains through the network domain",
    ),
    OptionSpec(
        "redirect_admin", False, OptionType.BOOL,
        "Send admin requests back to the original site domain",
    ),
    OptionSpec(
        "redirect_users", True, OptionType.BOOL,
        "Redirect logged-in users to the mapped domain",
    ),
    OptionSpec(
        "cookie_lifetime", 172800, OptionType.INT,
        "Lifetime in seconds of cross-domain authentication cookies",
    ),
    OptionSpec(
        "blocked_hosts", [], OptionType.LIST,
        "Hosts that may never be mapped to a site",
    ),
)

# Retired option name -> replacement
DEFAULT_DEPRECATIONS: dict[str, str] = {
    "permanent_redirects": "redirection_permanent",
    "www": "www_rule",
    "https": "force_https",
}


def build_whitelist(specs: Iterable[OptionSpec]) -> dict[str, OptionSpec]:
    """Index option specs by name, rejecting duplicates."""
    whitelist: dict[str, OptionSpec] = {}
    for spec in specs:
        if spec.name in whitelist:
            raise ConfigurationError(f"Option '{spec.name}' declared twice")
        whitelist[spec.name] = spec
    return whitelist


def validate_deprecations(
    deprecations: dict[str, str],
    whitelist: dict[str, OptionSpec],
) -> None:
    """Ensure every deprecated alias points at a whitelisted option."""
    for old, new in deprecations.items():
        if new not in whitelist:
            raise ConfigurationError(
                f"Deprecated option '{old}' maps to unknown option '{new}'"
            )
        if old in whitelist:
            raise ConfigurationError(
                f"Deprecated option '{old}' is still whitelisted"
            )
