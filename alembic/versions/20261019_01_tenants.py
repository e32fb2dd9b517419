"""Tenants table."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

revision = "20261019_01_tenants"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("kind", sa.String(length=32), nullable=False),
        sa.Column("slug", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("remote_id", sa.Integer(), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "nosync",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "length(slug) BETWEEN 1 AND 64",
            name="ck_tenant_slug_length",
        ),
        sa.UniqueConstraint("slug", name="uq_tenants_slug"),
        sa.UniqueConstraint("remote_id", name="uq_tenants_remote_id"),
    )
    op.create_index("idx_tenants_kind", "tenants", ["kind"])


def downgrade() -> None:
    op.drop_index("idx_tenants_kind", table_name="tenants")
    op.drop_table("tenants")
