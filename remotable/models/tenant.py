"""Tenant models mirrored from the remote directory."""

from datetime import datetime, timezone

from sqlalchemy import (
    TIMESTAMP,
    Boolean,
    CheckConstraint,
    Column,
    Index,
    Integer,
    String,
    Text,
    false,
    func,
)

from remotable.database import Base


class Tenant(Base):
    """
    Local copy of a tenant known to the remote directory.

    `remote_id` identifies the record remotely. A record with `nosync` set is
    never looked up remotely.
    """

    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(32), nullable=False)
    slug = Column(String(64), unique=True, nullable=False)
    name = Column(Text, nullable=False)
    remote_id = Column(Integer, unique=True)
    expires_at = Column(TIMESTAMP(timezone=True))
    nosync = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("length(slug) BETWEEN 1 AND 64", name="ck_tenant_slug_length"),
        Index("idx_tenants_kind", "kind"),
    )

    __mapper_args__ = {
        "polymorphic_on": kind,
        "polymorphic_identity": "tenant",
    }

    def is_expired(self, now: datetime | None = None) -> bool:
        """True if the record has no expiry or its expiry is not in the future."""
        if self.expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        # SQLite hands back naive timestamps
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at <= now

    def expire(self) -> None:
        self.expires_at = datetime.now(timezone.utc)


class BespokeTenant(Tenant):
    """Tenant served by a custom directory endpoint."""

    __mapper_args__ = {"polymorphic_identity": "bespoke"}


class NullTestTenant(Tenant):
    """Tenant with no real remote counterpart, used to exercise the null path."""

    __mapper_args__ = {"polymorphic_identity": "null_test"}


TENANT_KINDS: dict[str, type[Tenant]] = {
    "tenant": Tenant,
    "bespoke": BespokeTenant,
    "null_test": NullTestTenant,
}
