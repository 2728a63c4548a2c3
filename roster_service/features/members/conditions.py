"""Member search predicates.

Each function maps one optional criterion onto a clause over ``Member`` or
``Team`` (or None when the criterion is absent). Queries using the team
predicate must join ``Team``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roster_service.core.database import (
    ConditionBuilder,
    between_if_present,
    eq_if_text,
    ge_if_present,
    le_if_present,
)
from roster_service.features.members.models import Member, Team

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from roster_service.features.members.schemas import MemberSearchCondition


def username_eq(username: str | None) -> ColumnElement[bool] | None:
    return eq_if_text(Member.username, username)


def team_name_eq(team_name: str | None) -> ColumnElement[bool] | None:
    return eq_if_text(Team.name, team_name)


def age_goe(age: int | None) -> ColumnElement[bool] | None:
    return ge_if_present(Member.age, age)


def age_loe(age: int | None) -> ColumnElement[bool] | None:
    return le_if_present(Member.age, age)


def age_between(age_goe: int | None, age_loe: int | None) -> ColumnElement[bool] | None:
    """Inclusive age range; either bound may be absent."""
    return between_if_present(Member.age, age_goe, age_loe)


def member_search_clauses(condition: MemberSearchCondition) -> list[ColumnElement[bool]]:
    """Present clauses for ``condition``, ready for ``select(...).where(*clauses)``.

    An empty list means no filtering.
    """
    clauses = (
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )
    return [clause for clause in clauses if clause is not None]


def member_search_condition(condition: MemberSearchCondition) -> ColumnElement[bool]:
    """Single clause for ``condition`` assembled with a ConditionBuilder.

    Returns ``true()`` when every criterion is absent.
    """
    builder = ConditionBuilder()
    builder.and_(username_eq(condition.username))
    builder.and_(team_name_eq(condition.team_name))
    builder.and_(age_between(condition.age_goe, condition.age_loe))
    return builder.build()
