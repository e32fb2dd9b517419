"""Database models for the Remotable tenant service."""

from remotable.models.tenant import TENANT_KINDS, BespokeTenant, NullTestTenant, Tenant

__all__ = [
    "Tenant",
    "BespokeTenant",
    "NullTestTenant",
    "TENANT_KINDS",
]
