"""Tenant service for reading and maintaining local tenant records."""

from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from remotable.config import settings
from remotable.logging import get_logger
from remotable.models.tenant import TENANT_KINDS, Tenant
from remotable.remote.client import RemoteClient
from remotable.schemas.tenants import CreateTenantRequest, UpdateTenantRequest

logger = get_logger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    """Normalise to UTC; naive timestamps are taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
            }
        },
    )


class TenantService:
    """Service for tenant records and their remote counterparts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_tenants(self, kind: str | None = None, nosync: bool | None = None) -> list[Tenant]:
        query = select(Tenant).order_by(Tenant.slug)
        if kind is not None:
            query = query.where(Tenant.kind == kind)
        if nosync is not None:
            query = query.where(Tenant.nosync.is_(nosync))
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_slug(self, slug: str) -> Tenant:
        """
        Look up a tenant by slug.

        Raises:
            HTTPException(404) - No tenant with this slug
        """
        result = await self.db.execute(select(Tenant).where(Tenant.slug == slug))
        tenant = result.scalar_one_or_none()
        if not tenant:
            raise _error(status.HTTP_404_NOT_FOUND, "NOT_FOUND", f"Tenant '{slug}' not found")
        return tenant

    async def get_by_remote_id(self, remote_id: int) -> Tenant:
        result = await self.db.execute(select(Tenant).where(Tenant.remote_id == remote_id))
        tenant = result.scalar_one_or_none()
        if not tenant:
            raise _error(
                status.HTTP_404_NOT_FOUND,
                "NOT_FOUND",
                f"No tenant with remote id {remote_id}",
            )
        return tenant

    async def create(self, data: CreateTenantRequest) -> Tenant:
        """
        Create a tenant record.

        Records created without an expiry get one `tenant_expires_after_hours`
        from now.

        Raises:
            HTTPException(409) - Slug or remote id already taken
        """
        expires_at = _as_utc(data.expires_at) or (
            datetime.now(timezone.utc) + timedelta(hours=settings.tenant_expires_after_hours)
        )
        model = TENANT_KINDS[data.kind]
        tenant = model(
            slug=data.slug,
            name=data.name,
            remote_id=data.remote_id,
            expires_at=expires_at,
            nosync=data.nosync,
        )
        self.db.add(tenant)
        await self._flush_or_conflict()
        logger.info("Created %s tenant %s (remote id %s)", data.kind, tenant.slug, tenant.remote_id)
        return tenant

    async def update(self, tenant: Tenant, data: UpdateTenantRequest) -> Tenant:
        """Apply the fields present in the request."""
        changes: dict[str, Any] = {
            field: getattr(data, field)
            for field in data.model_fields_set
        }
        # name and nosync are not nullable
        for field in ("name", "nosync"):
            if changes.get(field, ...) is None:
                changes.pop(field)
        if "expires_at" in changes:
            changes["expires_at"] = _as_utc(changes["expires_at"])

        for field, value in changes.items():
            setattr(tenant, field, value)
        await self._flush_or_conflict()
        logger.info("Updated tenant %s: %s", tenant.slug, ", ".join(sorted(changes)) or "no changes")
        return tenant

    async def expire(self, tenant: Tenant) -> Tenant:
        tenant.expire()
        await self.db.flush()
        return tenant

    async def delete(self, tenant: Tenant) -> None:
        await self.db.delete(tenant)
        await self.db.flush()
        logger.info("Deleted tenant %s", tenant.slug)

    async def fetch_remote(self, tenant: Tenant, client: RemoteClient) -> dict[str, Any]:
        """
        Fetch the remote directory's view of a tenant.

        Nothing is written back to the local record.

        Raises:
            HTTPException(409) - Tenant is marked nosync or has no remote id
            HTTPException(404) - Remote directory does not know the tenant
            RemoteError - Remote directory could not answer
        """
        if tenant.nosync:
            raise _error(
                status.HTTP_409_CONFLICT,
                "NOSYNC",
                f"Tenant '{tenant.slug}' is excluded from remote lookups",
            )
        if tenant.remote_id is None:
            raise _error(
                status.HTTP_409_CONFLICT,
                "NO_REMOTE_ID",
                f"Tenant '{tenant.slug}' has no remote id",
            )

        payload = await client.fetch_tenant(tenant.remote_id)
        if payload is None:
            raise _error(
                status.HTTP_404_NOT_FOUND,
                "REMOTE_NOT_FOUND",
                f"Remote directory has no tenant {tenant.remote_id}",
            )
        return payload

    async def _flush_or_conflict(self) -> None:
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise _error(
                status.HTTP_409_CONFLICT,
                "CONFLICT",
                "A tenant with this slug or remote id already exists",
            )
