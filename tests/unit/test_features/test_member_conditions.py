"""Unit tests for member search criteria and predicates."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from roster_service.features.members.conditions import (
    age_between,
    member_search_clauses,
    member_search_condition,
    team_name_eq,
    username_eq,
)
from roster_service.features.members.schemas import MemberSearchCondition, MemberTeamDto


def sql(clause) -> str:
    return str(clause.compile(compile_kwargs={"literal_binds": True}))


@pytest.mark.unit
class TestMemberSearchCondition:
    """Tests for the search criteria model."""

    def test_all_fields_optional(self):
        condition = MemberSearchCondition()

        assert condition.username is None
        assert condition.team_name is None
        assert condition.age_goe is None
        assert condition.age_loe is None

    def test_frozen(self):
        condition = MemberSearchCondition(age_goe=28)

        with pytest.raises(ValidationError):
            condition.age_goe = 30

    def test_non_numeric_age_rejected(self):
        with pytest.raises(ValidationError):
            MemberSearchCondition(age_goe="twenty")

    def test_numeric_string_age_coerced(self):
        assert MemberSearchCondition(age_loe="35").age_loe == 35


@pytest.mark.unit
class TestMemberPredicates:
    """Tests for the member-specific clause helpers."""

    def test_username_and_team(self):
        assert sql(username_eq("member1")) == "member.username = 'member1'"
        assert sql(team_name_eq("teamB")) == "team.name = 'teamB'"

    def test_blank_text_is_absent(self):
        assert username_eq("") is None
        assert team_name_eq("  ") is None

    def test_age_between(self):
        assert sql(age_between(20, 30)) == "member.age >= 20 AND member.age <= 30"
        assert age_between(None, None) is None

    def test_no_criteria_gives_no_clauses(self):
        assert member_search_clauses(MemberSearchCondition()) == []
        assert sql(member_search_condition(MemberSearchCondition())) == "true"

    def test_blank_username_and_null_team_are_absent(self):
        condition = MemberSearchCondition(username="", team_name=None)

        assert member_search_clauses(condition) == []
        assert sql(member_search_condition(condition)) == "true"

    def test_every_criterion_present(self):
        condition = MemberSearchCondition(
            username="member3", team_name="teamB", age_goe=25, age_loe=35
        )

        clauses = member_search_clauses(condition)

        assert [sql(c) for c in clauses] == [
            "member.username = 'member3'",
            "team.name = 'teamB'",
            "member.age >= 25",
            "member.age <= 35",
        ]
        assert sql(member_search_condition(condition)) == " AND ".join(sql(c) for c in clauses)


@pytest.mark.unit
def test_member_team_dto_allows_missing_team():
    dto = MemberTeamDto(member_id=1, username="solo", age=33)

    assert dto.team_id is None
    assert dto.team_name is None
