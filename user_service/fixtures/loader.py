"""Fixture Loader — seeds and clears registered fixture sets.

Invariants:
    - Each fixture set is loaded or cleared inside one transaction
    - No names → every registered fixture; unknown names raise KeyError
    - Clearing walks the selection in reverse (dependents first)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from user_service.fixtures.base import BaseFixture
from user_service.fixtures.users import UserFixture

logger = logging.getLogger(__name__)

FIXTURES: dict[str, BaseFixture] = {
    fixture.name: fixture for fixture in (UserFixture(),)
}


def select_fixtures(names: list[str] | None = None) -> list[BaseFixture]:
    if not names:
        return list(FIXTURES.values())
    unknown = [name for name in names if name not in FIXTURES]
    if unknown:
        raise KeyError(f"Unknown fixture(s): {', '.join(unknown)}")
    return [FIXTURES[name] for name in names]


async def load_fixtures(
    session_factory: async_sessionmaker[AsyncSession],
    names: list[str] | None = None,
) -> None:
    for fixture in select_fixtures(names):
        async with session_factory() as session, session.begin():
            await fixture.seed_records(session)


async def clear_fixtures(
    session_factory: async_sessionmaker[AsyncSession],
    names: list[str] | None = None,
) -> None:
    for fixture in reversed(select_fixtures(names)):
        async with session_factory() as session, session.begin():
            await fixture.clear_records(session)
