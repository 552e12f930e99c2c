"""
Pydantic models for the Domain API.

Provides request/response models for the domain mapping endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

WwwValue = Literal["auto", "always", "never"]


class DomainModel(BaseModel):
    """Domain representation for API responses."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "example.com",
                "blog_id": 2,
                "primary": True,
                "active": True,
                "redirect": True,
                "www": "never",
                "secure": True,
            }
        }
    )

    name: str = Field(..., description="Sanitized domain name")
    blog_id: int = Field(0, description="Site the domain maps to")
    primary: bool = Field(False, description="Canonical domain for the site")
    active: bool = Field(True, description="Whether the domain is served")
    redirect: bool = Field(True, description="Redirect to the primary domain (false = alias)")
    www: WwwValue = Field("auto", description="www preference: auto, always, never")
    secure: bool = Field(False, description="Serve over https")


class CreateDomainRequest(BaseModel):
    """Request model for mapping a new domain."""

    name: str = Field(..., min_length=1, description="Domain name (sanitized on save)")
    blog_id: int = Field(0, ge=0, description="Site the domain maps to")
    primary: bool = Field(False, description="Canonical domain for the site")
    active: bool = Field(True, description="Whether the domain is served")
    redirect: bool = Field(True, description="Redirect to the primary domain")
    www: WwwValue = Field("auto", description="www preference")
    secure: bool = Field(False, description="Serve over https")


class UpdateDomainRequest(BaseModel):
    """Request model for updating a domain (all fields optional)."""

    blog_id: Optional[int] = Field(None, ge=0, description="Site the domain maps to")
    primary: Optional[bool] = Field(None, description="Canonical domain for the site")
    active: Optional[bool] = Field(None, description="Whether the domain is served")
    redirect: Optional[bool] = Field(None, description="Redirect to the primary domain")
    www: Optional[WwwValue] = Field(None, description="www preference")
    secure: Optional[bool] = Field(None, description="Serve over https")


class DomainListResponse(BaseModel):
    """Response model for listing all domains."""

    domains: List[DomainModel] = Field(..., description="List of all domains")
    count: int = Field(..., description="Total number of domains")
