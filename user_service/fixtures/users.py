"""User fixture — one user with two facilities."""

from datetime import datetime, timezone
from uuid import UUID

from user_service.fixtures.base import BaseFixture
from user_service.models.user import User

_SEEDED_AT = datetime(2025, 1, 1, tzinfo=timezone.utc)


class UserFixture(BaseFixture):
    name = "user"
    model = User
    data = {
        "test_user": {
            "id": UUID("550e8400-e29b-41d4-a716-446655440000"),
            "auth0_id": "auth0|1234567890",
            "user_metadata": {
                "facilities": ["facility1", "facility2"],
                "defaultFacility": "facility1",
            },
            "created_at": _SEEDED_AT,
            "updated_at": _SEEDED_AT,
        },
    }
