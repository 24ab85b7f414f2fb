"""Database configuration and session management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from src.config import Settings

Base: Any = declarative_base()


class StoreError(Exception):
    """Base class for relational store failures."""


class StoreUnavailable(StoreError):
    """A connection to the store could not be established."""


class QueryFailed(StoreError):
    """A statement was rejected or failed while executing."""


def build_database_url(settings: Settings) -> URL:
    """Return the configured database URL.

    DATABASE_URL wins when set; otherwise the URL is assembled from the
    individual DB_* settings so credentials never need manual escaping.
    """
    if settings.database_url:
        return make_url(settings.database_url)

    query = {}
    if settings.db_ssl_mode:
        key = "ssl" if settings.db_driver.endswith("asyncpg") else "sslmode"
        query[key] = settings.db_ssl_mode

    return URL.create(
        settings.db_driver,
        username=settings.db_user,
        password=settings.db_password,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
        query=query,
    )


class Database:
    """Connection pool for the relational store.

    One instance is built at startup and shared by reference; every
    repository operation borrows a session through ``session()`` and
    returns it when the block exits.
    """

    def __init__(self, url: str | URL, pool_size: int = 5, max_overflow: int = 10, **engine_options):
        url = make_url(url)
        if url.get_backend_name() != "sqlite":
            engine_options.setdefault("pool_size", pool_size)
            engine_options.setdefault("max_overflow", max_overflow)
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, pool_pre_ping=True, **engine_options)
        self._session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            build_database_url(settings),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session bound to a pooled connection.

        Commits when the block succeeds and rolls back otherwise. Failures
        are raised as StoreUnavailable (no connection) or QueryFailed.
        """
        async with self._session_factory() as session:
            try:
                await session.connection()
            except (OSError, SQLAlchemyError) as e:
                raise StoreUnavailable(f"Could not connect to {self.url.render_as_string()}") from e

            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise QueryFailed(str(e)) from e
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create all tables registered on Base.metadata if missing."""
        # Import all models here so they are registered with Base.metadata
        from src import models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OSError, SQLAlchemyError) as e:
            raise StoreUnavailable(f"Could not initialize {self.url.render_as_string()}") from e

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Dependency that provides the application's connection pool."""
    return request.app.state.database
