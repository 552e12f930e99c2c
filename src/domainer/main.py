"""FastAPI application - Domainer management service.

Start with:
    PYTHONPATH=src uvicorn domainer.main:app --host 0.0.0.0 --port 8060

Serves the option and domain mapping endpoints over one registry:
- /options/*   — read, set and override options
- /domains/*   — domain mapping CRUD
- /registry/*  — save to / reload from storage
- GET /health
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .config import Config, load_config
from .domains import routes as domain_routes
from .errors import StorageError, UnsupportedOptionError
from .logging_config import setup_logging
from .registry.registry import ConfigRegistry
from .routes import options_router, registry_router
from .storage import OptionStorage, create_storage

logger = logging.getLogger(__name__)


def build_registry(config: Config, storage: OptionStorage | None = None) -> ConfigRegistry:
    """Create a registry for the configured storage backend."""
    registry = ConfigRegistry(
        storage if storage is not None else create_storage(config.storage),
        strict=config.registry.strict,
    )
    if config.registry.load_on_startup:
        registry.load()
    return registry


def create_app(config: Config | None = None, registry: ConfigRegistry | None = None) -> FastAPI:
    """
    Build the management app.

    Args:
        config: Service configuration (loaded from disk if omitted)
        registry: Pre-built registry, mainly for tests
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting domainer service...")
        cfg = config if config is not None else load_config()
        setup_logging(cfg.logging.level)

        app.state.config = cfg
        app.state.registry = registry if registry is not None else build_registry(cfg)
        logger.info(f"Registry ready: {app.state.registry!r}")

        yield

        logger.info("Domainer service stopped")

    app = FastAPI(
        title="Domainer",
        description="Domain mapping registry for multisite networks",
        version=__version__,
        lifespan=lifespan,
    )

    app.include_router(options_router)
    app.include_router(domain_routes.router)
    app.include_router(registry_router)

    @app.exception_handler(UnsupportedOptionError)
    async def unsupported_option_handler(request: Request, exc: UnsupportedOptionError):
        return JSONResponse(status_code=404, content={"error": "unsupported_option", "detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error: {exc}")
        return JSONResponse(status_code=500, content={"error": "storage_error", "detail": str(exc)})

    @app.get("/health")
    async def health(request: Request):
        registry_ = getattr(request.app.state, "registry", None)
        return {
            "status": "healthy" if registry_ is not None and registry_.is_loaded else "starting",
            "version": __version__,
            "domains": len(registry_.domains()) if registry_ is not None else 0,
        }

    return app


app = create_app()
