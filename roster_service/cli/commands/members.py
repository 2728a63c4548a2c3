"""Member search commands.

Example:bash
    roster-service members search --team-name teamB --age-goe 31 --age-loe 35
    roster-service members page --page 1 --size 10
"""

import json

import click

from roster_service.cli.utils import coro
from roster_service.core.pagination import PageRequest, PageResponse
from roster_service.features.members.schemas import MemberSearchCondition, MemberTeamDto


def _condition_options(func):
    func = click.option("--age-loe", type=int, default=None, help="Maximum age (inclusive)")(func)
    func = click.option("--age-goe", type=int, default=None, help="Minimum age (inclusive)")(func)
    func = click.option("--team-name", default=None, help="Exact team name")(func)
    return click.option("--username", default=None, help="Exact username")(func)


@click.group(name="members")
def members() -> None:
    """Search members and their teams."""


@members.command()
@_condition_options
@coro
async def search(
    username: str | None, team_name: str | None, age_goe: int | None, age_loe: int | None
) -> None:
    """Print every matching member as JSON lines."""
    from roster_service.features.members.models import Member
    from roster_service.features.members.service import MemberService
    from roster_service.infra.database import close_database, get_async_session

    condition = MemberSearchCondition(
        username=username, team_name=team_name, age_goe=age_goe, age_loe=age_loe
    )
    try:
        async with get_async_session() as session:
            rows = await MemberService(session).list_members(condition, order_by=[Member.id])
    finally:
        await close_database()

    for row in rows:
        click.echo(row.model_dump_json())


@members.command()
@_condition_options
@click.option("--page", default=0, show_default=True, type=int, help="Zero-based page number")
@click.option("--size", default=20, show_default=True, type=int, help="Page size")
@click.option("--always-count", is_flag=True, help="Run the count query even when derivable")
@coro
async def page(
    username: str | None,
    team_name: str | None,
    age_goe: int | None,
    age_loe: int | None,
    page: int,
    size: int,
    always_count: bool,
) -> None:
    """Print one page of matching members as JSON."""
    from roster_service.features.members.models import Member
    from roster_service.features.members.service import MemberService
    from roster_service.infra.database import close_database, get_async_session

    condition = MemberSearchCondition(
        username=username, team_name=team_name, age_goe=age_goe, age_loe=age_loe
    )
    try:
        request = PageRequest.of(page, size)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    try:
        async with get_async_session() as session:
            service = MemberService(session)
            search_page = service.search_page_simple if always_count else service.search_page
            result = await search_page(condition, request, order_by=[Member.id])
    finally:
        await close_database()

    response = PageResponse[MemberTeamDto].from_result(result)
    click.echo(json.dumps(response.model_dump(mode="json"), indent=2))
