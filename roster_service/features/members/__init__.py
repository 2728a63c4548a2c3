"""Members feature: members, their teams, and dynamic search with paging."""

from __future__ import annotations

from .models import Member, Team
from .repository import (
    MemberRepository,
    TeamRepository,
    get_member_repository,
    get_team_repository,
)
from .schemas import MemberDto, MemberSearchCondition, MemberTeamDto
from .service import MemberService

__all__ = [
    "Member",
    "MemberDto",
    "MemberRepository",
    "MemberSearchCondition",
    "MemberService",
    "MemberTeamDto",
    "Team",
    "TeamRepository",
    "get_member_repository",
    "get_team_repository",
]
