"""Database configuration and connection management.

A single :class:`Database` is built at startup and shared for the life of
the process. It owns the async engine (and therefore the connection pool),
the session factory, and the table metadata queries are written against.

Reading and writing go through an ``AsyncSession``::

    async with database.session() as session:
        result = await session.execute(select(users))

Statements that must be atomic use a transaction-local session, which
commits on normal exit and rolls back on any exception::

    async with database.transaction() as tx:
        await tx.execute(insert(users).values(email=email))
        await tx.execute(insert(oauth_accounts).values(...))

To add a table, declare it under ``app/models/``, add it to
``app.models.tables`` and generate a migration with
``python scripts/migrate.py create <message>``.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import MetaData, text
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import Settings
from app.core.exceptions import DatabaseConfigurationError
from app.models import metadata as schema_metadata

logger = structlog.get_logger()

DEFAULT_WARMUP_TIMEOUT = 2.0


def ssl_required(environment: str) -> bool:
    """Encrypted transport is required in production and nowhere else."""
    return environment == "production"


def build_connect_args(settings: Settings) -> dict[str, Any]:
    """Build asyncpg connection arguments for the given settings."""
    return {
        "ssl": "require" if ssl_required(settings.environment) else "disable",
        "server_settings": {
            "application_name": settings.app_name,
        },
    }


def _discard_outcome(task: asyncio.Task) -> None:
    """Retrieve the result of an abandoned task so asyncio does not report it."""
    if not task.cancelled():
        task.exception()


class Database:
    """Process-wide connection handle."""

    def __init__(
        self,
        engine: AsyncEngine,
        metadata: MetaData = schema_metadata,
        *,
        ssl: bool = False,
        warmup_timeout: float = DEFAULT_WARMUP_TIMEOUT,
    ):
        """Bind an engine to the table metadata."""
        self.engine = engine
        self.metadata = metadata
        self.ssl = ssl
        self.warmup_timeout = warmup_timeout
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings, metadata: MetaData = schema_metadata) -> "Database":
        """
        Create the engine and its connection pool.

        No connection is opened here; the pool connects lazily.

        Raises:
            DatabaseConfigurationError: If the connection settings are missing
                or the URL cannot be parsed
        """
        url = settings.sqlalchemy_database_url

        try:
            engine = create_async_engine(
                url,
                echo=settings.debug,
                pool_pre_ping=True,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
                pool_recycle=settings.database_pool_recycle,
                connect_args=build_connect_args(settings),
            )
        except (ArgumentError, ValueError) as e:
            # A non-numeric port surfaces as ValueError
            logger.error("database_configuration_invalid", error=str(e))
            raise DatabaseConfigurationError(f"Invalid database URL: {e}") from e

        return cls(
            engine,
            metadata,
            ssl=ssl_required(settings.environment),
            warmup_timeout=settings.database_warmup_timeout,
        )

    async def _select_one(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def warm_up(self, timeout: float | None = None) -> bool:
        """
        Try to open one connection within ``timeout`` seconds.

        The connection attempt races the timer; whichever finishes first
        decides the outcome. A slow attempt is cancelled and left to finish on its own.
        Failure is logged and never raised, the pool will connect on first use.

        Returns:
            True if a connection was established in time
        """
        if timeout is None:
            timeout = self.warmup_timeout

        attempt = asyncio.create_task(self._select_one())
        done, _ = await asyncio.wait({attempt}, timeout=timeout)

        if attempt not in done:
            attempt.add_done_callback(_discard_outcome)
            attempt.cancel()
            logger.error("database_warmup_failed", error="timeout", timeout=timeout)
            return False

        error = attempt.exception()
        if error is not None:
            logger.error("database_warmup_failed", error=str(error))
            return False

        logger.info("database_connected", ssl=self.ssl)
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session outside of any explicit transaction."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a transaction-local session; commit on success, roll back on error."""
        async with self.session_factory() as session:
            async with session.begin():
                yield session

    async def check_connection(self) -> bool:
        """Check if database connection is healthy."""
        try:
            await self._select_one()
        except Exception as e:
            logger.warning("database_health_check_failed", error=str(e))
            return False
        return True

    async def create_all(self) -> None:
        """Create every declared table that does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))
            await conn.run_sync(self.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop every declared table."""
        async with self.engine.begin() as conn:
            await conn.run_sync(self.metadata.drop_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("database_connections_closed")


async def create_database(settings: Settings) -> Database:
    """
    Build the shared connection handle and warm it up.

    Only configuration errors propagate; a failed warm-up still returns a
    usable handle.
    """
    database = Database.from_settings(settings)
    await database.warm_up()
    return database
