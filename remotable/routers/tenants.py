"""Tenants router for local tenant records and remote lookups."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from remotable.config import settings
from remotable.database import get_db
from remotable.middleware.rate_limit import limiter
from remotable.models.tenant import Tenant
from remotable.remote.client import RemoteClient, get_remote_client
from remotable.schemas.tenants import (
    CreateTenantRequest,
    ListTenantsResponse,
    RemoteTenantResponse,
    TenantKind,
    TenantResponse,
    UpdateTenantRequest,
)
from remotable.services.tenants import TenantService

router = APIRouter(prefix="/api/v1/tenants", tags=["Tenants"])


def _to_response(tenant: Tenant) -> TenantResponse:
    return TenantResponse(
        tenant_id=tenant.id,
        kind=tenant.kind,
        slug=tenant.slug,
        name=tenant.name,
        remote_id=tenant.remote_id,
        expires_at=tenant.expires_at.isoformat() if tenant.expires_at else None,
        nosync=tenant.nosync,
        expired=tenant.is_expired(),
    )


@router.get(
    "",
    response_model=ListTenantsResponse,
    status_code=status.HTTP_200_OK,
)
async def list_tenants(
    kind: TenantKind | None = None,
    nosync: bool | None = None,
    db: AsyncSession = Depends(get_db),
) -> ListTenantsResponse:
    """
    List tenant records ordered by slug.

    Optionally filtered by kind and by the nosync flag.
    """
    tenants = await TenantService(db).list_tenants(kind=kind, nosync=nosync)
    return ListTenantsResponse(items=[_to_response(t) for t in tenants])


@router.post(
    "",
    response_model=TenantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_tenant(
    data: CreateTenantRequest,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    """Create a tenant record."""
    tenant = await TenantService(db).create(data)
    await db.commit()
    return _to_response(tenant)


@router.get(
    "/by-remote-id/{remote_id}",
    response_model=TenantResponse,
    status_code=status.HTTP_200_OK,
)
async def get_tenant_by_remote_id(
    remote_id: int,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    """Get a tenant by its remote directory id."""
    tenant = await TenantService(db).get_by_remote_id(remote_id)
    return _to_response(tenant)


@router.get(
    "/{slug}",
    response_model=TenantResponse,
    status_code=status.HTTP_200_OK,
)
async def get_tenant(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    """Get a tenant by slug."""
    tenant = await TenantService(db).get_by_slug(slug)
    return _to_response(tenant)


@router.patch(
    "/{slug}",
    response_model=TenantResponse,
    status_code=status.HTTP_200_OK,
)
async def update_tenant(
    slug: str,
    data: UpdateTenantRequest,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    """
    Update a tenant record.

    Only fields present in the body are changed. Sending `expires_at: null`
    marks the record expired; sending `remote_id: null` detaches it.
    """
    service = TenantService(db)
    tenant = await service.get_by_slug(slug)
    tenant = await service.update(tenant, data)
    await db.commit()
    return _to_response(tenant)


@router.post(
    "/{slug}/expire",
    response_model=TenantResponse,
    status_code=status.HTTP_200_OK,
)
async def expire_tenant(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> TenantResponse:
    """Mark a tenant record as expired."""
    service = TenantService(db)
    tenant = await service.expire(await service.get_by_slug(slug))
    await db.commit()
    return _to_response(tenant)


@router.delete(
    "/{slug}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_tenant(
    slug: str,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Delete a tenant record."""
    service = TenantService(db)
    await service.delete(await service.get_by_slug(slug))
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{slug}/remote",
    response_model=RemoteTenantResponse,
    status_code=status.HTTP_200_OK,
)
@limiter.limit(settings.remote_lookup_rate_limit)
async def get_remote_tenant(
    request: Request,  # noqa: ARG001 - required by slowapi
    slug: str,
    db: AsyncSession = Depends(get_db),
    client: RemoteClient = Depends(get_remote_client),
) -> RemoteTenantResponse:
    """
    Fetch the remote directory's record for a tenant.

    Tenants marked nosync are refused. Remote failures are reported as
    504 (timeout), 503 (unavailable) or 502 (network or other remote error).
    """
    service = TenantService(db)
    tenant = await service.get_by_slug(slug)
    payload = await service.fetch_remote(tenant, client)
    return RemoteTenantResponse(
        slug=tenant.slug,
        remote_id=tenant.remote_id,
        remote=payload,
    )
