"""Configuration for the domainer service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# Environment variable naming the config file
CONFIG_ENV_VAR = "DOMAINER_CONFIG"


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 8060
    workers: int = 1
    reload: bool = False


@dataclass
class StorageConfig:
    """Persistence backend configuration."""
    backend: str = "yaml"  # memory | yaml | sqlite
    # Directory for the yaml backend (one file per blob)
    directory: str = "data"
    # Database file for the sqlite backend
    db_path: str = "domainer.db"


@dataclass
class RegistryConfig:
    """Registry behaviour."""
    # Raise on unsupported options instead of warning
    strict: bool = False
    # Load options and domains from storage on startup
    load_on_startup: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"


@dataclass
class Config:
    """Main configuration container."""
    server: ServerConfig = field(default_factory=ServerConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        """Create config from dictionary."""
        return cls(
            server=ServerConfig(**data.get("server", {})),
            storage=StorageConfig(**data.get("storage", {})),
            registry=RegistryConfig(**data.get("registry", {})),
            logging=LoggingConfig(**data.get("logging", {})),
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load config from YAML file."""
        import yaml
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> Config:
        """Load config from JSON file."""
        import json
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)


def load_config(path: str | Path | None = None) -> Config:
    """
    Resolve and load the service configuration.

    Lookup order: explicit path, the ``DOMAINER_CONFIG`` environment
    variable, ``config.yaml`` in the working directory. Falls back to
    defaults when none of them exists.
    """
    candidate = path or os.environ.get(CONFIG_ENV_VAR) or "config.yaml"
    config_path = Path(candidate)

    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        logger.info("No config file found, using defaults")
        return Config()

    if config_path.suffix == ".json":
        config = Config.from_json(config_path)
    else:
        config = Config.from_yaml(config_path)

    logger.info(f"Loaded config from {config_path}")
    return config
