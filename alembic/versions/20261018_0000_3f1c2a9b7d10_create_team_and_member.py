"""create team and member

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-18 00:00:00.000000+00:00

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9b7d10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "team",
        sa.Column("name", sa.String(length=100), nullable=False, comment="Team name (e.g., 'teamA')"),
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Auto-incrementing integer primary key",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_team")),
        sa.UniqueConstraint("name", name=op.f("uq_team_name")),
    )
    op.create_table(
        "member",
        sa.Column("username", sa.String(length=100), nullable=False, comment="Display name, not unique"),
        sa.Column("age", sa.Integer(), nullable=False, comment="Age in whole years"),
        sa.Column("team_id", sa.Integer(), nullable=True),
        sa.Column(
            "id",
            sa.Integer(),
            autoincrement=True,
            nullable=False,
            comment="Auto-incrementing integer primary key",
        ),
        sa.ForeignKeyConstraint(
            ["team_id"],
            ["team.id"],
            name=op.f("fk_member_team_id_team"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_member")),
    )
    op.create_index(op.f("ix_member_username"), "member", ["username"], unique=False)
    op.create_index(op.f("ix_member_team_id"), "member", ["team_id"], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f("ix_member_team_id"), table_name="member")
    op.drop_index(op.f("ix_member_username"), table_name="member")
    op.drop_table("member")
    op.drop_table("team")
