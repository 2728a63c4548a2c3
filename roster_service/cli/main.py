"""Main CLI entry point for roster-service management commands."""

import click

from roster_service.cli.commands import database, members, server
from roster_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="roster-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Roster Service CLI - database management and member search.

    \b
    Command Groups:
      db         Connectivity, tables, migrations and sample data
      members    Search members from the command line
      serve      Run the HTTP API

    \b
    Quick Start:
      roster-service db upgrade          # Apply migrations
      roster-service db seed             # Insert sample teams and members
      roster-service members page --team-name teamA --size 5
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(members.members)
cli.add_command(server.serve)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
