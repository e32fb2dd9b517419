"""Services for the Remotable tenant service."""

from remotable.services.tenants import TenantService

__all__ = ["TenantService"]
