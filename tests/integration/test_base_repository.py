"""Integration tests for the generic repository over entity selects."""
from __future__ import annotations

import pytest
from sqlalchemy import select

from roster_service.core.database import BaseRepository, NotFoundError, OrderBy, Where
from roster_service.core.pagination import PageRequest
from roster_service.features.members.models import Member, Team

pytestmark = pytest.mark.integration


@pytest.fixture
def repo() -> BaseRepository[Member]:
    return BaseRepository(Member)


class TestLookups:
    async def test_get_and_get_or_raise(self, db_session, repo, sample_members):
        member = await repo.get(db_session, sample_members[1].id)

        assert member is sample_members[1]
        assert await repo.get(db_session, 9999) is None
        with pytest.raises(NotFoundError) as exc_info:
            await repo.get_or_raise(db_session, 9999)
        assert exc_info.value.details == {"model": "Member", "id": 9999}
        assert str(exc_info.value) == "Member not found with id=9999 (model='Member', id=9999)"

    async def test_get_by(self, db_session, repo, sample_members):
        member = await repo.get_by(db_session, Member.username, "member4")

        assert member is not None
        assert member.age == 40

    async def test_list_window(self, db_session, repo, sample_members):
        members = await repo.list(db_session, limit=2, offset=1)

        assert len(members) == 2

    async def test_create_assigns_id(self, db_session):
        team = await BaseRepository(Team).create(db_session, Team(name="teamC"))

        assert team.id is not None

    async def test_create_many_keeps_order(self, db_session, repo):
        created = await repo.create_many(
            db_session, [Member("first", 1), Member("second", 2), Member("third", 3)]
        )

        assert [m.id for m in created] == sorted(m.id for m in created)
        assert [m.username for m in await repo.list(db_session)] == ["first", "second", "third"]

    async def test_delete(self, db_session, repo, sample_members):
        await repo.delete(db_session, sample_members[0])

        assert await repo.get(db_session, sample_members[0].id) is None


class TestCountAndPaging:
    async def test_count_ignores_window_and_ordering(self, db_session, repo, sample_members):
        stmt = select(Member).where(Member.age > 15).order_by(Member.age).limit(1).offset(1)

        assert await repo.count(db_session, stmt) == 3

    async def test_paginate_entities(self, db_session, repo, sample_members, statement_log):
        stmt = OrderBy(Member.age, "desc").apply(Where(Member.age >= 20).apply(select(Member)))
        statement_log.clear()

        page = await repo.paginate(db_session, stmt, PageRequest.of(0, 5))

        assert [m.username for m in page.content] == ["member4", "member3", "member2"]
        assert page.total == 3
        assert not [s for s in statement_log if "count(" in s.lower()]

    async def test_search_counted_always_counts(
        self, db_session, repo, sample_members, statement_log
    ):
        stmt = select(Member).order_by(Member.id)
        statement_log.clear()

        page = await repo.search_counted(db_session, stmt, PageRequest.of(0, 5))

        assert page.total == 4
        assert page.pages == 1
        assert len([s for s in statement_log if "count(" in s.lower()]) == 1

    async def test_invalid_request_runs_nothing(self, db_session, statement_log):
        from roster_service.core.database import InvalidPageRequestError

        statement_log.clear()
        with pytest.raises(InvalidPageRequestError):
            PageRequest.of(0, 0)

        assert statement_log == []
