"""FastAPI routes for the Domain mapping API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_registry
from ..registry.registry import ConfigRegistry
from .models import (
    CreateDomainRequest,
    DomainListResponse,
    DomainModel,
    UpdateDomainRequest,
)
from .types import Domain

logger = logging.getLogger(__name__)

# Create router with Domains tag for OpenAPI grouping
router = APIRouter(prefix="/domains", tags=["Domains"])


def _domain_to_model(domain: Domain) -> DomainModel:
    """Convert Domain dataclass to Pydantic model."""
    return DomainModel(**domain.dump())


@router.get("", response_model=DomainListResponse)
async def list_domains(site: int | None = None, registry: ConfigRegistry = Depends(get_registry)):
    """
    List all mapped domains.

    Pass ``site`` to list only the domains of one site.
    """
    domains = registry.domains() if site is None else registry.find_domains(site)

    return DomainListResponse(
        domains=[_domain_to_model(d) for d in domains],
        count=len(domains),
    )


@router.get("/{name}", response_model=DomainModel)
async def get_domain(name: str, registry: ConfigRegistry = Depends(get_registry)):
    """Get a single domain by name. The name is sanitized before lookup."""
    domain = registry.get_domain(name)
    if not domain:
        raise HTTPException(status_code=404, detail=f"Domain not found: {name}")

    return _domain_to_model(domain)


@router.post("", response_model=DomainModel, status_code=201)
async def create_domain(request: CreateDomainRequest, registry: ConfigRegistry = Depends(get_registry)):
    """
    Map a new domain.

    The sanitized domain name must be unique.
    """
    domain = Domain(**request.model_dump())
    if not domain.name:
        raise HTTPException(status_code=422, detail=f"Invalid domain name: {request.name}")

    if registry.has_domain(domain.name):
        raise HTTPException(status_code=409, detail=f"Domain already exists: {domain.name}")

    registry.add_domain(domain)
    logger.info(f"Created domain: {domain.name}")

    return _domain_to_model(domain)


@router.put("/{name}", response_model=DomainModel)
async def update_domain(
    name: str,
    request: UpdateDomainRequest,
    registry: ConfigRegistry = Depends(get_registry),
):
    """
    Update an existing domain.

    Only provided fields are updated; others retain their current values.
    """
    existing = registry.get_domain(name)
    if not existing:
        raise HTTPException(status_code=404, detail=f"Domain not found: {name}")

    changes = request.model_dump(exclude_none=True)
    domain = existing.with_changes(**changes)

    registry.add_domain(domain, replace=True)
    logger.info(f"Updated domain: {domain.name}")

    return _domain_to_model(domain)


@router.delete("/{name}")
async def delete_domain(name: str, registry: ConfigRegistry = Depends(get_registry)):
    """
    Unmap a domain.

    The change is not persisted until the registry is saved.
    """
    if not registry.remove_domain(name):
        raise HTTPException(status_code=404, detail=f"Domain not found: {name}")

    logger.info(f"Deleted domain: {name}")

    return {"success": True, "message": f"Domain '{Domain.sanitize(name)}' deleted"}
