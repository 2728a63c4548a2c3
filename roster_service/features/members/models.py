"""SQLAlchemy models for the members feature."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster_service.core.database import Base, IntegerPKMixin


class Team(Base, IntegerPKMixin):
    """A named group of members."""

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Team name (e.g., 'teamA')",
    )

    members: Mapped[list[Member]] = relationship(
        back_populates="team",
        order_by="Member.id",
    )

    def __repr__(self) -> str:
        """Return team summary for debugging."""
        return f"<Team(id={self.id}, name={self.name!r})>"


class Member(Base, IntegerPKMixin):
    """A person with an age, optionally belonging to one team.

    Pass ``team`` to the constructor or call change_team() to place a member
    on a team.
    """

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
        comment="Display name, not unique",
    )
    age: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Age in whole years",
    )
    team_id: Mapped[int | None] = mapped_column(
        ForeignKey("team.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    team: Mapped[Team | None] = relationship(back_populates="members")

    def __init__(self, username: str, age: int = 0, team: Team | None = None) -> None:
        super().__init__(username=username, age=age)
        if team is not None:
            self.change_team(team)

    def change_team(self, team: Team) -> None:
        """Move the member to ``team``, updating both sides of the relationship.

        The back_populates event removes the member from the previous team's
        collection and appends it to the new one without loading either
        collection from the database.
        """
        self.team = team

    def __repr__(self) -> str:
        """Return member summary for debugging."""
        return f"<Member(id={self.id}, username={self.username!r}, age={self.age})>"
