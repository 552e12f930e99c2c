"""Shared test fixtures for the domainer registry."""

import logging

import pytest

from domainer.options.types import OptionSpec, OptionType
from domainer.registry.registry import DOMAINS_KEY, OPTIONS_KEY, ConfigRegistry
from domainer.storage.memory import MemoryStorage


# =============================================================================
# Storage Fixtures
# =============================================================================

@pytest.fixture
def storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def seeded_storage() -> MemoryStorage:
    """In-memory storage holding a saved options blob and two domains."""
    return MemoryStorage({
        OPTIONS_KEY: {
            "redirection_permanent": False,
            "www_rule": "always",
            "cookie_lifetime": "3600",
            "blocked_hosts": ["localhost"],
        },
        DOMAINS_KEY: {
            "example.com": {"blog_id": 2, "primary": True, "secure": True},
            "example.net": {"blog_id": 2, "redirect": True},
        },
    })


# =============================================================================
# Registry Fixtures
# =============================================================================

@pytest.fixture
def registry(storage) -> ConfigRegistry:
    """Loaded registry over empty storage, with the built-in options."""
    registry = ConfigRegistry(storage)
    registry.load()
    return registry


@pytest.fixture
def typed_specs() -> list[OptionSpec]:
    """One option of every supported type."""
    return [
        OptionSpec("enabled", True, OptionType.BOOL),
        OptionSpec("retries", 3, OptionType.INT),
        OptionSpec("label", "main", OptionType.STR),
        OptionSpec("ratio", 0.5, OptionType.FLOAT),
        OptionSpec("hosts", [], OptionType.LIST),
    ]


@pytest.fixture(autouse=True)
def reset_domainer_logging():
    """Detach handlers installed by setup_logging so they don't outlive capture."""
    yield
    logger = logging.getLogger("domainer")
    for handler in list(logger.handlers):
        if getattr(handler, "_domainer", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
