"""Integration tests for member search, paging and bulk statements."""
from __future__ import annotations

from itertools import combinations

import pytest

from roster_service.core.database import NotFoundError
from roster_service.core.pagination import PageRequest
from roster_service.features.members.models import Member, Team
from roster_service.features.members.repository import MemberRepository, TeamRepository
from roster_service.features.members.schemas import MemberDto, MemberSearchCondition
from roster_service.features.members.seed import seed_sample_data

pytestmark = pytest.mark.integration

CRITERIA = {"username": "member2", "team_name": "teamB", "age_goe": 15, "age_loe": 35}


@pytest.fixture
def repo() -> MemberRepository:
    return MemberRepository()


@pytest.fixture
async def roster(db_session, sample_members) -> list[Member]:
    """The four sample members plus member5 (age 50) with no team."""
    solo = Member("member5", 50)
    db_session.add(solo)
    await db_session.commit()
    return [*sample_members, solo]


def count_queries(statements: list[str]) -> list[str]:
    return [s for s in statements if "count(" in s.lower()]


TEAM_OF = {
    "member1": "teamA",
    "member2": "teamA",
    "member3": "teamB",
    "member4": "teamB",
    "member5": None,
}


def matches(member: Member, criteria: dict) -> bool:
    team_name = TEAM_OF[member.username]
    return (
        ("username" not in criteria or member.username == criteria["username"])
        and ("team_name" not in criteria or team_name == criteria["team_name"])
        and ("age_goe" not in criteria or member.age >= criteria["age_goe"])
        and ("age_loe" not in criteria or member.age <= criteria["age_loe"])
    )


def criteria_subsets():
    keys = list(CRITERIA)
    for size in range(len(keys) + 1):
        for subset in combinations(keys, size):
            yield {key: CRITERIA[key] for key in subset}


# ──────────────────────────────────────────────────────────────
# Search (unpaged)
# ──────────────────────────────────────────────────────────────


class TestSearch:
    """Projected search over member LEFT JOIN team."""

    async def test_age_at_least_28(self, db_session, repo, sample_members):
        rows = await repo.search(
            db_session, MemberSearchCondition(age_goe=28), order_by=[Member.id]
        )

        assert [row.age for row in rows] == [30, 40]
        assert [row.username for row in rows] == ["member3", "member4"]

    async def test_team_and_age_range(self, db_session, repo, sample_members):
        condition = MemberSearchCondition(team_name="teamB", age_goe=35, age_loe=40)

        rows = await repo.search(db_session, condition)

        assert [row.username for row in rows] == ["member4"]
        assert rows[0].team_name == "teamB"

    async def test_blank_criteria_match_everything(self, db_session, repo, roster):
        filtered = await repo.search(
            db_session, MemberSearchCondition(username="", team_name=None), order_by=[Member.id]
        )
        unfiltered = await repo.search(db_session, MemberSearchCondition(), order_by=[Member.id])

        assert len(unfiltered) == len(roster)
        assert filtered == unfiltered

    async def test_member_without_team_projects_nulls(self, db_session, repo, roster):
        rows = await repo.search(db_session, MemberSearchCondition(username="member5"))

        assert len(rows) == 1
        assert rows[0].team_id is None
        assert rows[0].team_name is None
        assert rows[0].age == 50

    async def test_every_subset_of_criteria(self, db_session, repo, roster):
        """Each present subset accepts exactly the rows satisfying all of it."""
        for criteria in criteria_subsets():
            condition = MemberSearchCondition(**criteria)
            expected = [m.username for m in roster if matches(m, criteria)]

            where_rows = await repo.search(db_session, condition, order_by=[Member.id])
            builder_rows = await repo.search_by_builder(db_session, condition, order_by=[Member.id])

            assert [r.username for r in where_rows] == expected, criteria
            assert builder_rows == where_rows, criteria

    async def test_member_dtos(self, db_session, repo, roster):
        dtos = await repo.search_member_dtos(
            db_session, MemberSearchCondition(team_name="teamB"), order_by=[Member.id]
        )

        assert dtos == [
            MemberDto(username="member3", age=30),
            MemberDto(username="member4", age=40),
        ]

    async def test_member_dtos_include_members_without_team(self, db_session, repo, roster):
        dtos = await repo.search_member_dtos(
            db_session, MemberSearchCondition(age_goe=45), order_by=[Member.id]
        )

        assert dtos == [MemberDto(username="member5", age=50)]

    async def test_find_by_username(self, db_session, repo, sample_members):
        members = await repo.find_by_username(db_session, "member3")

        assert [m.age for m in members] == [30]
        assert await repo.find_by_username(db_session, "nobody") == []

    async def test_get_member_team(self, db_session, repo, sample_members):
        dto = await repo.get_member_team(db_session, sample_members[0].id)

        assert dto.username == "member1"
        assert dto.team_name == "teamA"

    async def test_get_member_team_missing(self, db_session, repo, sample_members):
        with pytest.raises(NotFoundError) as exc_info:
            await repo.get_member_team(db_session, 9999)

        assert exc_info.value.identifier == {"id": 9999}


# ──────────────────────────────────────────────────────────────
# Paging
# ──────────────────────────────────────────────────────────────


class TestSearchPage:
    """Paged search with and without count elision."""

    async def test_short_first_page_skips_count(
        self, db_session, repo, sample_members, statement_log
    ):
        statement_log.clear()

        page = await repo.search_page_complex(
            db_session,
            MemberSearchCondition(age_goe=20),
            PageRequest(offset=0, limit=10),
            order_by=[Member.id],
        )

        assert page.total == 3
        assert [row.username for row in page.content] == ["member2", "member3", "member4"]
        assert count_queries(statement_log) == []

    async def test_full_first_page_counts(self, db_session, repo, statement_log):
        await seed_sample_data(db_session, count=25)
        statement_log.clear()

        page = await repo.search_page_complex(
            db_session, MemberSearchCondition(), PageRequest(offset=0, limit=10), order_by=[Member.id]
        )

        assert len(page.content) == 10
        assert page.total == 25
        assert page.pages == 3
        assert len(count_queries(statement_log)) == 1

    async def test_last_page_total_derived(self, db_session, repo, statement_log):
        await seed_sample_data(db_session, count=103)
        statement_log.clear()

        page = await repo.search_page_complex(
            db_session,
            MemberSearchCondition(),
            PageRequest(offset=100, limit=10),
            order_by=[Member.id],
        )

        assert [row.username for row in page.content] == ["member100", "member101", "member102"]
        assert page.total == 103
        assert page.is_last
        assert count_queries(statement_log) == []

    async def test_simple_page_always_counts(self, db_session, repo, statement_log):
        await seed_sample_data(db_session, count=103)
        statement_log.clear()

        page = await repo.search_page_simple(
            db_session,
            MemberSearchCondition(),
            PageRequest(offset=100, limit=10),
            order_by=[Member.id],
        )

        assert page.number_of_elements == 3
        assert page.total == 103
        assert len(count_queries(statement_log)) == 1

    async def test_page_past_the_end_counts(self, db_session, repo, statement_log):
        await seed_sample_data(db_session, count=12)
        statement_log.clear()

        page = await repo.search_page_complex(
            db_session, MemberSearchCondition(), PageRequest(offset=50, limit=10)
        )

        assert list(page.content) == []
        assert page.total == 12
        assert len(count_queries(statement_log)) == 1

    async def test_filtered_count_uses_team_join(self, db_session, repo):
        await seed_sample_data(db_session, count=40)

        page = await repo.search_page_complex(
            db_session,
            MemberSearchCondition(team_name="teamA", age_goe=10),
            PageRequest.of(0, 5),
            order_by=[Member.age.desc()],
        )

        # teamA holds the even ages; 10..38 gives 15 members
        assert page.total == 15
        assert [row.age for row in page.content] == [38, 36, 34, 32, 30]
        assert all(row.team_name == "teamA" for row in page.content)

    async def test_walk_all_pages(self, db_session, repo):
        await seed_sample_data(db_session, count=23)
        condition = MemberSearchCondition(age_loe=20)
        request = PageRequest.of(0, 4)
        seen: list[str] = []

        while True:
            page = await repo.search_page_complex(
                db_session, condition, request, order_by=[Member.id]
            )
            assert page.total == 21
            assert len(page.content) <= 4
            seen.extend(row.username for row in page.content)
            if not page.has_next:
                break
            request = request.next()

        assert seen == [f"member{i}" for i in range(21)]


# ──────────────────────────────────────────────────────────────
# Bulk statements
# ──────────────────────────────────────────────────────────────


class TestBulkStatements:
    """Bulk UPDATE/DELETE bypass the session; later reads see the new rows."""

    async def test_rename_younger_than(self, db_session, repo, sample_members):
        updated = await repo.rename_younger_than(db_session, 28, "guest")

        members = await repo.find_all(db_session)
        assert updated == 2
        assert [m.username for m in members] == ["guest", "guest", "member3", "member4"]

    async def test_add_and_multiply_age(self, db_session, repo, sample_members):
        assert await repo.add_age(db_session, 1) == 4
        assert await repo.multiply_age(db_session, 2) == 4

        members = await repo.find_all(db_session)
        assert [m.age for m in members] == [22, 42, 62, 82]

    async def test_delete_older_than(self, db_session, repo, sample_members):
        deleted = await repo.delete_older_than(db_session, 18)

        members = await repo.find_all(db_session)
        assert deleted == 3
        assert [m.username for m in members] == ["member1"]

    async def test_pending_changes_flushed_before_bulk(self, db_session, repo, sample_members):
        db_session.add(Member("member9", 5))

        updated = await repo.rename_younger_than(db_session, 8, "young")

        assert updated == 1
        assert [m.username for m in await repo.find_by_username(db_session, "young")] == ["young"]

    async def test_large_bulk_delete_logs_warning(self, db_session, repo, caplog):
        await seed_sample_data(db_session, count=30)

        with caplog.at_level("WARNING", logger="repository.Member"):
            deleted = await repo.delete_older_than(db_session, 5)

        assert deleted == 24
        assert any(r.getMessage() == "Bulk delete executed" for r in caplog.records)


# ──────────────────────────────────────────────────────────────
# Teams and relationships
# ──────────────────────────────────────────────────────────────


class TestTeams:
    """Team lookups and moving members between teams."""

    async def test_get_by_name(self, db_session, teams):
        team_repo = TeamRepository()

        team = await team_repo.get_by_name(db_session, "teamB")

        assert team is teams["teamB"]
        assert await team_repo.get_by_name(db_session, "teamZ") is None

    async def test_change_team(self, db_session, repo, sample_members, teams):
        member1 = sample_members[0]

        member1.change_team(teams["teamB"])
        await db_session.flush()

        rows = await repo.search(db_session, MemberSearchCondition(team_name="teamB"))
        assert sorted(row.username for row in rows) == ["member1", "member3", "member4"]

    async def test_constructor_places_member_on_team(self):
        team = Team(name="teamC")

        member = Member("member7", 7, team)

        assert member.team is team
        assert team.members == [member]


# ──────────────────────────────────────────────────────────────
# Sample data
# ──────────────────────────────────────────────────────────────


class TestSeed:
    """Sample data insertion."""

    async def test_seed_layout(self, db_session, repo):
        inserted = await seed_sample_data(db_session, count=6)

        rows = await repo.search(db_session, MemberSearchCondition(), order_by=[Member.id])
        assert inserted == 6
        assert [(r.username, r.age, r.team_name) for r in rows] == [
            ("member0", 0, "teamA"),
            ("member1", 1, "teamB"),
            ("member2", 2, "teamA"),
            ("member3", 3, "teamB"),
            ("member4", 4, "teamA"),
            ("member5", 5, "teamB"),
        ]

    async def test_seed_ids_follow_index(self, db_session, repo):
        await seed_sample_data(db_session, count=20)

        members = await repo.find_all(db_session)

        assert [m.username for m in members] == [f"member{i}" for i in range(20)]
        assert [m.age for m in members] == list(range(20))

    async def test_seed_ids_follow_index_with_existing_teams(self, db_session, repo, teams):
        await seed_sample_data(db_session, count=7)

        rows = await repo.search(db_session, MemberSearchCondition(), order_by=[Member.id])

        assert [r.username for r in rows] == [f"member{i}" for i in range(7)]
        assert [r.team_id for r in rows[:2]] == [teams["teamA"].id, teams["teamB"].id]

    async def test_seed_is_idempotent(self, db_session, repo):
        await seed_sample_data(db_session, count=5)

        assert await seed_sample_data(db_session, count=5) == 0
        assert len(await repo.find_all(db_session)) == 5

    async def test_seed_reuses_existing_teams(self, db_session, teams):
        await seed_sample_data(db_session, count=4)

        team_a = await TeamRepository().get_by_name(db_session, "teamA")
        assert team_a.id == teams["teamA"].id
