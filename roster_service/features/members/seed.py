"""Sample teams and members for local development."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import exists, select

from roster_service.features.members.models import Member, Team
from roster_service.features.members.repository import get_team_repository

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

SAMPLE_TEAM_NAMES = ("teamA", "teamB")


async def seed_sample_data(session: AsyncSession, *, count: int = 100) -> int:
    """Insert ``teamA``, ``teamB`` and ``count`` members, then commit.

    Member ``i`` is named ``member{i}``, is ``i`` years old and belongs to
    teamA when ``i`` is even, teamB otherwise. Nothing is inserted when any
    member already exists.

    Returns:
        Number of members inserted.
    """
    if await session.scalar(select(exists().where(Member.id.is_not(None)))):
        logger.info("Sample data skipped, members already present")
        return 0

    team_repo = get_team_repository()
    teams = []
    for name in SAMPLE_TEAM_NAMES:
        team = await team_repo.get_by_name(session, name)
        teams.append(team if team is not None else Team(name=name))
    team_a, team_b = teams

    await team_repo.create_many(session, teams)

    # One add per member: the cascade through a team reaches only members
    # already added, so ids follow the index
    for i in range(count):
        session.add(Member(f"member{i}", i, team_a if i % 2 == 0 else team_b))
    await session.commit()

    logger.info("Sample data inserted", extra={"teams": len(teams), "members": count})
    return count
