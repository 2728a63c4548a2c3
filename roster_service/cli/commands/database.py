"""Database management commands.

Example:bash
    # Check connectivity
    roster-service db init

    # Create tables from model metadata, or apply migrations
    roster-service db create-tables
    roster-service db upgrade

    # Insert teamA/teamB and 100 members
    roster-service db seed

    # Drop all tables (development only!)
    roster-service db drop-all --confirm
"""

import sys
from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError

from roster_service.cli.utils import coro, error, info, success, warning
from roster_service.core.settings import get_db_settings

ALEMBIC_INI = Path("alembic.ini")


def _alembic_config():
    """Build the Alembic config from alembic.ini, pointing at the configured URL."""
    from alembic.config import Config

    config = Config(str(ALEMBIC_INI))
    config.set_main_option("sqlalchemy.url", get_db_settings().url.replace("%", "%%"))
    # Logging is already configured by the CLI entry point
    config.attributes["configure_logger"] = False
    return config


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify database connectivity."""
    from roster_service.infra.database import close_database, init_database

    info("Initializing database connection...")
    try:
        await init_database()
        success("Database connected successfully!")
    except SQLAlchemyError as e:
        error(f"Failed to connect to database: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command(name="create-tables")
@coro
async def create_tables_cmd() -> None:
    """Create missing tables from the model metadata."""
    from roster_service.infra.database import close_database, create_tables

    try:
        await create_tables()
        success("Tables created")
    except SQLAlchemyError as e:
        error(f"Failed to create tables: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command(name="drop-all")
@click.option("--confirm", is_flag=True, help="Skip confirmation prompt")
@coro
async def drop_all_cmd(confirm: bool) -> None:
    """Drop all tables.

    WARNING: This is a destructive operation that cannot be undone!
    """
    warning("This will DELETE ALL TABLES in the database!")
    if not confirm and not click.confirm("Are you sure you want to drop all tables?"):
        info("Drop cancelled")
        return

    from roster_service.infra.database import close_database, drop_tables

    try:
        await drop_tables()
        success("Tables dropped")
    except SQLAlchemyError as e:
        error(f"Failed to drop tables: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command()
@click.option("--count", default=100, show_default=True, type=click.IntRange(min=0),
              help="Number of members to insert")
@coro
async def seed(count: int) -> None:
    """Insert teamA, teamB and sample members (skipped if members exist)."""
    from roster_service.features.members.seed import seed_sample_data
    from roster_service.infra.database import close_database, create_tables, get_async_session

    try:
        if get_db_settings().create_tables:
            await create_tables()
        async with get_async_session() as session:
            inserted = await seed_sample_data(session, count=count)
    except SQLAlchemyError as e:
        error(f"Failed to seed database: {e}")
        sys.exit(1)
    finally:
        await close_database()

    if inserted:
        success(f"Inserted {inserted} members")
    else:
        info("Members already present, nothing inserted")


@db.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Apply Alembic migrations up to REVISION."""
    from alembic import command

    info(f"Upgrading database to: {revision}")
    command.upgrade(_alembic_config(), revision)
    success("Database upgraded successfully!")


@db.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Revert Alembic migrations down to REVISION."""
    from alembic import command

    info(f"Downgrading database to: {revision}")
    command.downgrade(_alembic_config(), revision)
    success("Database downgraded successfully!")


@db.command()
def current() -> None:
    """Show the current Alembic revision."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)
