"""User ORM — the single persisted entity exposed over the API.

Invariants:
    - id is UUID primary key, generated on insert when absent, never updated
    - auth0_id is unique and indexed (auth0_id_idx) for secondary-key lookups
    - created_at set once at insert; updated_at rewritten by every update
    - metadata holds {"facilities": [...], "defaultFacility": "..."} as stored JSON

Design Decisions:
    - Attribute named user_metadata: "metadata" is reserved on declarative models,
      the column itself keeps the name "metadata"
    - JSON column (JSONB on PostgreSQL) for metadata: whole-value replacement only
    - Python-side defaults so SQLite tests and PostgreSQL behave the same
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, JSON, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from user_service.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User record keyed by id and by external identity-provider id."""
    __tablename__ = "users"
    __table_args__ = (Index("auth0_id_idx", "auth0_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    auth0_id: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    user_metadata: Mapped[dict | None] = mapped_column(
        "metadata", JSON().with_variant(JSONB, "postgresql"), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} auth0_id={self.auth0_id!r}>"
