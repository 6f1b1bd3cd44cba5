"""Generic CRUD Repository — single-table persistence parameterized by ORM model.

Invariants:
    - Model must expose an `id` primary-key attribute and an `updated_at` column
    - Each operation opens one pooled session and issues one statement
    - Misses return the not-found sentinel (None / False), never raise
    - update() always rewrites updated_at, even when no other field is supplied
    - Integrity failures surface as ConstraintViolationError (via session manager)

Design Decisions:
    - Model passed to the constructor (the table descriptor), not bound by an
      abstract base: subclasses only add entity-specific queries
    - UPDATE ... RETURNING keeps update atomic without a read-modify-write
    - values dicts use ORM attribute names; keys resolved to mapped attributes
      before building statements so renamed columns (user_metadata) work
"""

import logging
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update

from user_service.db.base import Base
from user_service.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class CrudRepository(Generic[ModelT]):
    """Create/read/update/delete against the table mapped by `model`."""

    def __init__(self, db: DatabaseSessionManager, model: type[ModelT]):
        self.db = db
        self.model = model

    async def get_all(self) -> list[ModelT]:
        async with self.db.session() as session:
            result = await session.execute(select(self.model))
            return list(result.scalars().all())

    async def get_by_id(self, id: UUID) -> ModelT | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(self.model).where(self.model.id == id).limit(1),
            )
            return result.scalar_one_or_none()

    async def create(self, values: dict[str, Any]) -> ModelT:
        """Insert one row; model defaults fill id and timestamps when absent."""
        async with self.db.session() as session:
            row = self.model(**values)
            session.add(row)
            await session.commit()
            await session.refresh(row)
            logger.info(
                f"Created {self.model.__name__} {row.id}",
                extra={"user_id": str(row.id)},
            )
            return row

    async def update(self, id: UUID, values: dict[str, Any]) -> ModelT | None:
        """Merge supplied fields into the row; None when no row matched."""
        assignments = {
            getattr(self.model, key): value for key, value in values.items()
        }
        assignments[self.model.updated_at] = datetime.now(timezone.utc)
        async with self.db.session() as session:
            result = await session.execute(
                update(self.model)
                .where(self.model.id == id)
                .values(assignments)
                .returning(self.model),
            )
            row = result.scalar_one_or_none()
            await session.commit()
            return row

    async def delete(self, id: UUID) -> bool:
        """Remove the row; True only if a row was actually deleted."""
        async with self.db.session() as session:
            result = await session.execute(
                delete(self.model).where(self.model.id == id),
            )
            await session.commit()
            return (result.rowcount or 0) > 0
