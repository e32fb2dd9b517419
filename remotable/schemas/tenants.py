"""Tenant-related Pydantic schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

TenantKind = Literal["tenant", "bespoke", "null_test"]

SLUG_PATTERN = r"^[a-z0-9_-]{1,64}$"


class CreateTenantRequest(BaseModel):
    """Request to create a tenant record."""

    kind: TenantKind = "tenant"
    slug: str = Field(..., pattern=SLUG_PATTERN)
    name: str = Field(..., min_length=1, max_length=200)
    remote_id: int | None = Field(default=None, ge=1)
    expires_at: datetime | None = None
    nosync: bool = False


class UpdateTenantRequest(BaseModel):
    """Partial update of a tenant record. Omitted fields are left alone."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    remote_id: int | None = Field(default=None, ge=1)
    expires_at: datetime | None = None
    nosync: bool | None = None


class TenantResponse(BaseModel):
    """A tenant record as returned by the API."""

    tenant_id: int
    kind: TenantKind
    slug: str
    name: str
    remote_id: int | None
    expires_at: str | None
    nosync: bool
    expired: bool


class ListTenantsResponse(BaseModel):
    """Response for GET /tenants endpoint."""

    items: list[TenantResponse]


class RemoteTenantResponse(BaseModel):
    """Remote directory view of a local tenant."""

    slug: str
    remote_id: int
    remote: dict[str, Any]
