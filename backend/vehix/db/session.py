"""Engine and session factories for the record store."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vehix.core.config import get_settings

# One engine per database URL; tests point DATABASE_URL at a temporary file.
_factories: dict[str, tuple[AsyncEngine, async_sessionmaker[AsyncSession]]] = {}


def _database_url(override: str | None) -> str:
    return override or get_settings().database_url


def _factory_for(url: str) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    entry = _factories.get(url)
    if entry is None:
        engine = create_async_engine(url, echo=False, future=True)
        entry = (
            engine,
            async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession),
        )
        _factories[url] = entry
    return entry


def get_engine(database_url: str | None = None) -> AsyncEngine:
    return _factory_for(_database_url(database_url))[0]


def get_sessionmaker(
    database_url: str | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Return the cached sessionmaker for ``database_url`` (or the configured URL)."""
    return _factory_for(_database_url(database_url))[1]


async def get_session(database_url: str | None = None) -> AsyncIterator[AsyncSession]:
    """Yield a session; objects stay usable after commit."""
    async with get_sessionmaker(database_url)() as session:
        yield session


async def dispose_engine(database_url: str | None = None) -> None:
    """Close pooled connections and forget the engine for ``database_url``."""
    entry = _factories.pop(_database_url(database_url), None)
    if entry is not None:
        await entry[0].dispose()
