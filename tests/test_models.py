"""Tests for tenant expiry on the model."""

from datetime import datetime, timedelta, timezone

from remotable.models.tenant import TENANT_KINDS, BespokeTenant, NullTestTenant, Tenant


class TestIsExpired:
    """Tenant.is_expired()."""

    def test_missing_expiry_counts_as_expired(self):
        assert Tenant(slug="a", name="A", expires_at=None).is_expired()

    def test_future_expiry_is_not_expired(self):
        tenant = Tenant(slug="a", name="A", expires_at=datetime.now(timezone.utc) + timedelta(hours=1))
        assert not tenant.is_expired()

    def test_past_expiry_is_expired(self):
        tenant = Tenant(slug="a", name="A", expires_at=datetime.now(timezone.utc) - timedelta(seconds=1))
        assert tenant.is_expired()

    def test_naive_expiry_is_read_as_utc(self):
        now = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)
        tenant = Tenant(slug="a", name="A", expires_at=datetime(2026, 2, 1, 13, 0))
        assert not tenant.is_expired(now=now)
        assert tenant.is_expired(now=now + timedelta(hours=2))

    def test_expiry_boundary_is_expired(self, frozen_time):
        with frozen_time("2026-02-01 12:00:00"):
            tenant = Tenant(slug="a", name="A", expires_at=datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc))
            assert tenant.is_expired()

    def test_record_expires_as_time_passes(self, frozen_time):
        expires_at = datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)
        tenant = Tenant(slug="a", name="A", expires_at=expires_at)
        with frozen_time("2026-02-01 11:59:59"):
            assert not tenant.is_expired()
        with frozen_time("2026-02-01 12:00:01"):
            assert tenant.is_expired()


class TestExpire:
    """Tenant.expire()."""

    def test_expire_marks_record_expired(self, frozen_time):
        tenant = Tenant(slug="a", name="A", expires_at=datetime.now(timezone.utc) + timedelta(days=1))
        with frozen_time("2026-02-01 12:00:00"):
            tenant.expire()
            assert tenant.expires_at == datetime(2026, 2, 1, 12, 0, tzinfo=timezone.utc)
            assert tenant.is_expired()


class TestTenantKinds:
    """Single-table tenant kinds."""

    def test_kind_discriminators(self):
        assert Tenant(slug="a", name="A").kind == "tenant"
        assert BespokeTenant(slug="b", name="B").kind == "bespoke"
        assert NullTestTenant(slug="c", name="C").kind == "null_test"

    def test_kind_registry(self):
        assert TENANT_KINDS == {
            "tenant": Tenant,
            "bespoke": BespokeTenant,
            "null_test": NullTestTenant,
        }
