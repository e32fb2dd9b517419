"""Pydantic schemas for the Remotable tenant service."""

from remotable.schemas.tenants import (
    CreateTenantRequest,
    ListTenantsResponse,
    RemoteTenantResponse,
    TenantResponse,
    UpdateTenantRequest,
)

__all__ = [
    "CreateTenantRequest",
    "UpdateTenantRequest",
    "TenantResponse",
    "ListTenantsResponse",
    "RemoteTenantResponse",
]
