"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Single-table system: no relationships, no cascades

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for alembic and tests
"""

from user_service.models.user import User  # noqa: F401
