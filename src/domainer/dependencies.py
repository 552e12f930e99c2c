"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

from fastapi import HTTPException, Request

from .registry.registry import ConfigRegistry


def get_registry(request: Request) -> ConfigRegistry:
    """Get the registry bound to the app, raising if not configured."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(status_code=503, detail="Registry not initialized")
    return registry
