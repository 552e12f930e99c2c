"""FastAPI routes for option access and registry persistence."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from .dependencies import get_registry
from .errors import StorageError
from .registry.registry import ConfigRegistry, SaveScope

logger = logging.getLogger(__name__)

options_router = APIRouter(prefix="/options", tags=["Options"])
registry_router = APIRouter(prefix="/registry", tags=["Registry"])


class OptionValue(BaseModel):
    """Request body carrying an option value."""
    value: Any = Field(..., description="New value (coerced to the option's type)")


class OptionResponse(BaseModel):
    name: str
    value: Any
    stored_value: Any = None
    default: Any = None
    type: str
    has_override: bool = False
    deprecated_alias: str | None = None


class OptionListResponse(BaseModel):
    options: dict[str, Any]
    overrides: dict[str, Any]
    defaults: dict[str, Any]
    deprecations: dict[str, str]


class SaveResponse(BaseModel):
    success: bool
    message: str
    scope: str


class ReloadResponse(BaseModel):
    success: bool
    message: str
    options_loaded: int = 0
    domains_loaded: int = 0


def _option_response(registry: ConfigRegistry, requested: str) -> OptionResponse:
    name = registry.resolve_alias(requested)
    spec = registry.spec(name)
    value, has_override = registry.get_with_override(name, spec.fresh_default())
    stored = registry.get(name, spec.fresh_default(), bypass_override=True)

    return OptionResponse(
        name=name,
        value=value,
        stored_value=stored,
        default=spec.default,
        type=spec.type.value,
        has_override=has_override,
        deprecated_alias=requested if requested != name else None,
    )


def _require_option(registry: ConfigRegistry, name: str) -> None:
    if not registry.has(name):
        raise HTTPException(status_code=404, detail=f"Option not supported: {name}")


# =============================================================================
# Option Endpoints
# =============================================================================

@options_router.get("", response_model=OptionListResponse)
async def list_options(registry: ConfigRegistry = Depends(get_registry)):
    """List every effective option value, with overrides and defaults."""
    return OptionListResponse(
        options=registry.all_options(),
        overrides=registry.overridden(),
        defaults=registry.get_defaults(),
        deprecations=registry.deprecations(),
    )


@options_router.get("/{name}", response_model=OptionResponse)
async def get_option(name: str, registry: ConfigRegistry = Depends(get_registry)):
    """Get one option. Deprecated names resolve to their replacement."""
    _require_option(registry, name)
    return _option_response(registry, name)


@options_router.put("/{name}", response_model=OptionResponse)
async def set_option(name: str, body: OptionValue, registry: ConfigRegistry = Depends(get_registry)):
    """
    Set an option value.

    The value is coerced to the option's declared type. Call
    ``POST /registry/save`` to persist it.
    """
    _require_option(registry, name)
    spec = registry.spec(name)
    registry.set(spec.name, spec.coerce(body.value))
    logger.info(f"Set option: {spec.name}")
    return _option_response(registry, name)


@options_router.post("/{name}/override", response_model=OptionResponse)
async def override_option(name: str, body: OptionValue, registry: ConfigRegistry = Depends(get_registry)):
    """Temporarily override an option. Overrides are never saved."""
    _require_option(registry, name)
    spec = registry.spec(name)
    registry.override(spec.name, spec.coerce(body.value))
    logger.info(f"Overrode option: {spec.name}")
    return _option_response(registry, name)


@options_router.delete("/{name}/override", response_model=OptionResponse)
async def clear_option_override(name: str, registry: ConfigRegistry = Depends(get_registry)):
    """Drop an option's override."""
    _require_option(registry, name)
    if not registry.clear_override(name):
        raise HTTPException(status_code=404, detail=f"No override set for: {name}")
    return _option_response(registry, name)


# =============================================================================
# Save/Reload Endpoints
# =============================================================================

@registry_router.post("/save", response_model=SaveResponse)
async def save_registry(
    scope: SaveScope = Query(SaveScope.ALL, description="options, domains or all"),
    registry: ConfigRegistry = Depends(get_registry),
):
    """Persist options and/or domains. Overrides are not saved."""
    try:
        registry.save(scope)
    except StorageError as e:
        logger.error(f"Failed to save registry: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save: {str(e)}")

    return SaveResponse(success=True, message=f"Saved {scope.value}", scope=scope.value)


@registry_router.post("/reload", response_model=ReloadResponse)
async def reload_registry(registry: ConfigRegistry = Depends(get_registry)):
    """
    Reload options and domains from storage.

    Unsaved changes are discarded; overrides are kept.
    """
    try:
        registry.load(force_reload=True)
    except StorageError as e:
        logger.error(f"Failed to reload registry: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to reload: {str(e)}")

    return ReloadResponse(
        success=True,
        message="Reloaded options and domains",
        options_loaded=len(registry.all_options(bypass_override=True)),
        domains_loaded=len(registry.domains()),
    )
