"""Database configuration and session management."""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from alembic.autogenerate import compare_metadata
from alembic.command import downgrade, upgrade
from alembic.config import Config
from alembic.migration import MigrationContext
from remotable.config import settings
from remotable.logging import get_logger

logger = get_logger(__name__)

engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


def _alembic_config(db_url: str | None = None) -> Config:
    root = Path(__file__).resolve().parents[1]
    config = Config(str(root / "alembic.ini"))
    config.set_main_option("script_location", str(root / "alembic"))
    if db_url:
        config.set_main_option("sqlalchemy.url", db_url)
    return config


def run_migrations(revision: str = "head", db_url: str | None = None) -> None:
    """Upgrade to a target revision, or downgrade everything when it is "base"."""
    config = _alembic_config(db_url)
    if revision == "base":
        downgrade(config, revision)
    else:
        upgrade(config, revision)


async def migrate_db(revision: str = "head", db_url: str | None = None) -> None:
    """Async wrapper to run migrations without blocking the event loop."""
    url = db_url or settings.database_url
    logger.info("Migrating database to %s", revision)
    await asyncio.to_thread(run_migrations, revision, url)


async def init_db(db_url: str | None = None) -> None:
    """Initialize database schema via Alembic migrations."""
    await migrate_db("head", db_url)


def _compare(connection: Connection) -> list:
    context = MigrationContext.configure(connection, opts={"compare_type": True})
    return compare_metadata(context, Base.metadata)


async def schema_diffs(db_url: str | None = None) -> list:
    """
    Compare a migrated database against the registered models.

    Callers must import remotable.models first so Base.metadata is populated.
    An empty list means the migrations and the models agree.
    """
    diff_engine = create_async_engine(db_url or settings.database_url, poolclass=NullPool)
    try:
        async with diff_engine.connect() as conn:
            return await conn.run_sync(_compare)
    finally:
        await diff_engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
