"""User Service — generic CRUD over the users table plus the auth0 id lookup.

Invariants:
    - Bound to the User model; no state beyond the shared session manager
    - get_by_auth0_id returns None on a miss (same sentinel as get_by_id)
"""

from sqlalchemy import select

from user_service.infrastructure.database import DatabaseSessionManager
from user_service.models.user import User
from user_service.services.crud_repository import CrudRepository


class UserService(CrudRepository[User]):
    """Users persistence with the secondary-key lookup."""

    def __init__(self, db: DatabaseSessionManager):
        super().__init__(db, User)

    async def get_by_auth0_id(self, auth0_id: str) -> User | None:
        async with self.db.session() as session:
            result = await session.execute(
                select(User).where(User.auth0_id == auth0_id).limit(1),
            )
            return result.scalar_one_or_none()
