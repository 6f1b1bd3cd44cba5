"""Base Fixture — named rows for one model, seeded and cleared by id.

Invariants:
    - seed_records inserts every row of the fixture in the caller's transaction
    - clear_records deletes only rows whose ids belong to the fixture
"""

import logging
from typing import Any, ClassVar

from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from user_service.db.base import Base

logger = logging.getLogger(__name__)


class BaseFixture:
    """Subclasses set `name`, `model` and `data` (row name → column values)."""
    name: ClassVar[str]
    model: ClassVar[type[Base]]
    data: ClassVar[dict[str, dict[str, Any]]]

    def ids(self) -> list:
        return [row["id"] for row in self.data.values()]

    async def seed_records(self, session: AsyncSession) -> int:
        await session.execute(insert(self.model), list(self.data.values()))
        logger.info(
            f"Seeded {len(self.data)} {self.model.__name__} row(s)",
            extra={"fixture": self.name},
        )
        return len(self.data)

    async def clear_records(self, session: AsyncSession) -> int:
        result = await session.execute(
            delete(self.model).where(self.model.id.in_(self.ids())),
        )
        logger.info(
            f"Cleared {result.rowcount} {self.model.__name__} row(s)",
            extra={"fixture": self.name},
        )
        return result.rowcount
