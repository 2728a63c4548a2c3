"""CLI command modules."""

from roster_service.cli.commands import database, members, server

__all__ = [
    "database",
    "members",
    "server",
]
