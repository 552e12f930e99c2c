"""
Domain data model.

A Domain maps a custom host name onto one site of the network, carrying
the per-domain redirect, www and https preferences.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any

from ..options.types import OptionType, coerce

logger = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.-]*://")


class WwwRule(str, Enum):
    """How a domain treats the www. prefix."""
    AUTO = "auto"      # Accept either form
    ALWAYS = "always"  # Redirect bare host to www.
    NEVER = "never"    # Redirect www. to bare host


@dataclass(frozen=True, slots=True)
class Domain:
    """
    A custom domain mapped onto a site.

    Domains are keyed by their sanitized name, so ``https://WWW.Example.com/``
    and ``example.com`` refer to the same record.
    """

    # Required: sanitized host name
    name: str

    blog_id: int = 0            # Site the domain maps to (0 = unassigned)
    primary: bool = False       # Canonical domain for the site?
    active: bool = True         # Inactive domains are kept but not served
    redirect: bool = True       # Redirect to the primary domain (False = serve as alias)
    www: str = WwwRule.AUTO.value
    secure: bool = False        # Serve over https

    def __post_init__(self):
        object.__setattr__(self, "name", self.sanitize(self.name))
        object.__setattr__(self, "www", WwwRule(self.www).value)

    @staticmethod
    def sanitize(name: str) -> str:
        """
        Normalize a host name for use as a directory key.

        Lowercases, strips any scheme, path, port, trailing dots and a
        leading ``www.``.
        """
        host = (name or "").strip().lower()
        host = _SCHEME_RE.sub("", host)
        host = host.split("/", 1)[0]
        host = host.split("?", 1)[0]
        host = host.rsplit(":", 1)[0] if ":" in host else host
        host = host.rstrip(".")
        if host.startswith("www."):
            host = host[4:]
        return host

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def dump(self) -> dict[str, Any]:
        """Export the full configuration record, including ``name``."""
        return asdict(self)

    def with_changes(self, **changes: Any) -> Domain:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def is_alias(self) -> bool:
        return not self.primary and not self.redirect

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> Domain:
        """
        Create a Domain from a persisted configuration record.

        Args:
            name: The domain name (takes precedence over any ``name`` key)
            data: Dictionary of domain attributes

        Returns:
            Domain instance

        Raises:
            ValueError: If ``www`` is not a known rule
        """
        known = set(cls.field_names())
        unknown = sorted(k for k in data if k not in known)
        if unknown:
            logger.debug(f"Ignoring unknown fields for domain '{name}': {unknown}")

        www = data.get("www") or WwwRule.AUTO.value
        if isinstance(www, str):
            www = www.strip().lower()

        return cls(
            name=name,
            blog_id=coerce(data.get("blog_id", 0), OptionType.INT),
            primary=coerce(data.get("primary", False), OptionType.BOOL),
            active=coerce(data.get("active", True), OptionType.BOOL),
            redirect=coerce(data.get("redirect", True), OptionType.BOOL),
            www=www,
            secure=coerce(data.get("secure", False), OptionType.BOOL),
        )


# Valid www rules
WWW_RULES = [r.value for r in WwwRule]
