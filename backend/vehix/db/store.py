"""Durable record store used by the account services.

A thin wrapper over ``AsyncSession`` that exposes the create/read/save
contract the account layer depends on and converts SQLAlchemy failures into
``StoreError``. Nothing here retries; callers decide whether to.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vehix.core.errors import StoreError
from vehix.db.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore:
    """Create/read/save access to persisted records keyed by string ids."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def fetch_all(
        self,
        model: type[ModelT],
        *criteria: Any,
        order_by: Any | None = None,
    ) -> list[ModelT]:
        """Return every ``model`` row matching all ``criteria``."""
        stmt = select(model).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load {model.__name__} records") from exc
        return list(result.scalars().unique().all())

    async def fetch_one(self, model: type[ModelT], *criteria: Any) -> ModelT | None:
        """Return the first ``model`` row matching ``criteria`` or ``None``."""
        try:
            result = await self.session.execute(select(model).where(*criteria).limit(1))
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load {model.__name__} record") from exc
        return result.scalars().first()

    async def get(self, model: type[ModelT], ident: str) -> ModelT | None:
        """Return a record by primary key."""
        try:
            return await self.session.get(model, ident)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load {model.__name__} {ident}") from exc

    def insert(self, entity: Base) -> None:
        """Stage a new record; it is written on the next ``save``."""
        self.session.add(entity)

    def insert_all(self, entities: Sequence[Base]) -> None:
        self.session.add_all(entities)

    async def save(self) -> None:
        """Commit pending changes, rolling back and raising ``StoreError`` on failure."""
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.warning("Record store save failed: %s", exc)
            raise StoreError("Failed to save records") from exc


__all__ = ["RecordStore"]
