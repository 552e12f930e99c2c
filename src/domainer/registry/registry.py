"""
Thread-safe configuration registry.

Holds the whitelisted options, their transient overrides, and the domain
directory, and loads/saves them through an options storage backend.
"""

from __future__ import annotations

import logging
import threading
import warnings
from enum import Enum
from typing import Any, Iterable, Mapping

from ..domains.types import Domain
from ..errors import UnsupportedOptionError, UnsupportedOptionWarning
from ..options.defaults import (
    DEFAULT_DEPRECATIONS,
    DEFAULT_OPTIONS,
    build_whitelist,
    validate_deprecations,
)
from ..options.types import OptionSpec
from ..storage.base import OptionStorage

logger = logging.getLogger(__name__)

# Storage keys for the two persisted blobs
OPTIONS_KEY = "domainer_options"
DOMAINS_KEY = "domainer_domains"


class SaveScope(str, Enum):
    """Which blob(s) ``ConfigRegistry.save`` persists."""
    OPTIONS = "options"
    DOMAINS = "domains"
    ALL = "all"

    @classmethod
    def parse(cls, value: SaveScope | str | bool) -> SaveScope:
        # Legacy callers pass True to mean "everything"
        if value is True:
            return cls.ALL
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        raise ValueError(f"Invalid save scope: {value!r}")


class ConfigRegistry:
    """
    Registry of options and domains for one service context.

    Options must be whitelisted; names listed as deprecated are transparently
    resolved to their replacements. Overrides shadow stored values on read
    but are never saved.
    """

    def __init__(
        self,
        storage: OptionStorage,
        options: Iterable[OptionSpec] = DEFAULT_OPTIONS,
        deprecations: Mapping[str, str] | None = None,
        strict: bool = False,
    ):
        self._storage = storage
        self._whitelist = build_whitelist(options)
        self._deprecated = dict(DEFAULT_DEPRECATIONS if deprecations is None else deprecations)
        validate_deprecations(self._deprecated, self._whitelist)
        self.strict = strict

        self._options: dict[str, Any] = {}
        self._overrides: dict[str, Any] = {}
        self._domains: dict[str, Domain] = {}
        self._loaded = False
        self._warned_aliases: set[str] = set()
        self._lock = threading.RLock()

    # =========================================================================
    # Option schema
    # =========================================================================

    @property
    def storage(self) -> OptionStorage:
        return self._storage

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get_defaults(self) -> dict[str, Any]:
        """Get the whitelisted option names and their default values."""
        return {name: spec.fresh_default() for name, spec in self._whitelist.items()}

    def spec(self, option: str) -> OptionSpec | None:
        """Get the spec for an option (aliases resolved), or None."""
        return self._whitelist.get(self.resolve_alias(option))

    def option_names(self) -> list[str]:
        return list(self._whitelist)

    def deprecations(self) -> dict[str, str]:
        return dict(self._deprecated)

    def resolve_alias(self, option: str) -> str:
        """
        Resolve a deprecated option name to its replacement.

        Returns the name unchanged if it is not deprecated.
        """
        replacement = self._deprecated.get(option)
        if replacement is None:
            return option

        if option not in self._warned_aliases:
            self._warned_aliases.add(option)
            logger.warning(f"Option '{option}' is deprecated, use '{replacement}' instead")
        return replacement

    def has(self, option: str) -> bool:
        """Check if an option (or the replacement of a deprecated one) is supported."""
        return self.resolve_alias(option) in self._whitelist

    def _check(self, option: str) -> str:
        """Resolve an option name, reporting it if unsupported."""
        name = self.resolve_alias(option)
        if name not in self._whitelist:
            if self.strict:
                raise UnsupportedOptionError(name)
            logger.warning(f"The option '{name}' is not supported")
            warnings.warn(
                f"The option '{name}' is not supported",
                UnsupportedOptionWarning,
                stacklevel=3,
            )
        return name

    # =========================================================================
    # Option access
    # =========================================================================

    def get_with_override(
        self,
        option: str,
        default: Any = None,
        bypass_override: bool = False,
    ) -> tuple[Any, bool]:
        """
        Get an option value and whether an override exists for it.

        Args:
            option: The option name (deprecated names are resolved)
            default: Returned when the option is unset or stored as None
            bypass_override: Return the stored value even if overridden

        Returns:
            (value, has_override) tuple
        """
        name = self._check(option)
        with self._lock:
            # None counts as unset, for stored values and overrides alike
            if self._options.get(name) is None:
                return default, False

            has_override = self._overrides.get(name) is not None
            if has_override and not bypass_override:
                return self._overrides[name], True
            return self._options[name], has_override

    def get(self, option: str, default: Any = None, bypass_override: bool = False) -> Any:
        """Get an option value, preferring any override unless bypassed."""
        value, _ = self.get_with_override(option, default, bypass_override)
        return value

    def set(self, option: str, value: Any) -> None:
        """Set an option value. The value is stored as given."""
        name = self._check(option)
        with self._lock:
            self._options[name] = value

    def override(self, option: str, value: Any) -> None:
        """Temporarily override an option value. Overrides are never saved."""
        name = self._check(option)
        with self._lock:
            self._overrides[name] = value

    def clear_override(self, option: str) -> bool:
        """Drop the override for an option. Returns True if one existed."""
        name = self.resolve_alias(option)
        with self._lock:
            if name in self._overrides:
                del self._overrides[name]
                return True
            return False

    def clear_overrides(self) -> None:
        """Drop all overrides."""
        with self._lock:
            self._overrides.clear()

    def overridden(self) -> dict[str, Any]:
        """Get a copy of the current overrides."""
        with self._lock:
            return dict(self._overrides)

    def all_options(self, bypass_override: bool = False) -> dict[str, Any]:
        """Get the effective value of every stored option."""
        with self._lock:
            values = dict(self._options)
            if not bypass_override:
                values.update({k: v for k, v in self._overrides.items() if k in values and v is not None})
            return values

    # =========================================================================
    # Domain access
    # =========================================================================

    def get_domain(self, name: str, field: str | None = None) -> Any:
        """
        Get a domain, or one of its fields.

        Args:
            name: The domain name (sanitized before lookup)
            field: Optional field to return instead of the whole domain

        Returns:
            The domain, the field's value, or None if the domain is not registered
        """
        key = Domain.sanitize(name)
        with self._lock:
            domain = self._domains.get(key)

        if domain is None:
            return None
        if field is None:
            return domain
        return getattr(domain, field)

    def has_domain(self, name: str) -> bool:
        with self._lock:
            return Domain.sanitize(name) in self._domains

    def add_domain(self, domain: Domain, replace: bool = False) -> None:
        """
        Add a domain to the directory.

        Raises:
            ValueError: If the domain exists and ``replace`` is False
        """
        with self._lock:
            if domain.name in self._domains and not replace:
                raise ValueError(f"Domain '{domain.name}' already registered")
            self._domains[domain.name] = domain

    def remove_domain(self, name: str) -> bool:
        """Remove a domain. Returns True if it was registered."""
        with self._lock:
            return self._domains.pop(Domain.sanitize(name), None) is not None

    def domains(self) -> list[Domain]:
        """Get all domains, sorted by name."""
        with self._lock:
            return sorted(self._domains.values(), key=lambda d: d.name)

    def find_domains(self, blog_id: int) -> list[Domain]:
        """Get all domains mapped to a site."""
        return [d for d in self.domains() if d.blog_id == blog_id]

    def primary_domain(self, blog_id: int) -> Domain | None:
        """Get the active primary domain of a site, if any."""
        for domain in self.find_domains(blog_id):
            if domain.primary and domain.active:
                return domain
        return None

    # =========================================================================
    # Persistence
    # =========================================================================

    def load(self, force_reload: bool = False) -> None:
        """
        Load options and domains from storage.

        Does nothing if already loaded, unless ``force_reload`` is set.
        """
        with self._lock:
            if self._loaded and not force_reload:
                return

            self._load_options()
            self._load_domains()
            self._loaded = True

    def _load_options(self) -> None:
        stored = dict(self._storage.load_blob(OPTIONS_KEY) or {})

        # Carry values saved under retired names over to their replacements
        for old, new in self._deprecated.items():
            if old in stored and new not in stored:
                logger.info(f"Migrating stored option '{old}' to '{new}'")
                stored[new] = stored[old]

        for name, spec in self._whitelist.items():
            if name in stored:
                value = spec.coerce(stored[name])
            else:
                value = spec.fresh_default()
            self.set(name, value)

        logger.info(f"Loaded {len(self._whitelist)} options")

    def _load_domains(self) -> None:
        stored = self._storage.load_blob(DOMAINS_KEY) or {}

        domains: dict[str, Domain] = {}
        for name, config in stored.items():
            if not isinstance(config, dict):
                logger.warning(f"Skipping malformed config for domain '{name}'")
                continue
            config = dict(config, name=name)
            try:
                domain = Domain.from_dict(name, config)
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping invalid config for domain '{name}': {e}")
                continue
            domains[domain.name] = domain

        self._domains = domains
        logger.info(f"Loaded {len(domains)} domains")

    def save(self, scope: SaveScope | str | bool = SaveScope.ALL) -> None:
        """
        Save options and/or domains to storage.

        Overrides are never saved. Domains are stored keyed by name, without
        a redundant ``name`` field.

        Args:
            scope: ``options``, ``domains`` or ``all`` (``True`` means ``all``)
        """
        scope = SaveScope.parse(scope)

        with self._lock:
            if scope in (SaveScope.OPTIONS, SaveScope.ALL):
                self._storage.save_blob(OPTIONS_KEY, dict(self._options))
                logger.info(f"Saved {len(self._options)} options")

            if scope in (SaveScope.DOMAINS, SaveScope.ALL):
                data = {}
                for name, domain in self._domains.items():
                    config = domain.dump()
                    config.pop("name", None)
                    data[name] = config
                self._storage.save_blob(DOMAINS_KEY, data)
                logger.info(f"Saved {len(data)} domains")

    def __contains__(self, option: str) -> bool:
        return self.has(option)

    def __repr__(self) -> str:
        return (
            f"ConfigRegistry(options={len(self._options)}, "
            f"overrides={len(self._overrides)}, domains={len(self._domains)}, "
            f"loaded={self._loaded})"
        )
