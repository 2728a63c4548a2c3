"""Pydantic schemas for the members feature."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MemberSearchCondition(BaseModel):
    """Optional search criteria for members.

    Every field is optional; an absent (or blank text) field adds no
    constraint, so ``MemberSearchCondition()`` matches every member.
    """

    model_config = ConfigDict(frozen=True)

    username: str | None = Field(default=None, description="Exact username")
    team_name: str | None = Field(default=None, description="Exact team name")
    age_goe: int | None = Field(default=None, description="Minimum age (inclusive)")
    age_loe: int | None = Field(default=None, description="Maximum age (inclusive)")


class MemberTeamDto(BaseModel):
    """Member joined with its (optional) team.

    Built from rows of a ``member LEFT OUTER JOIN team`` select whose columns
    are labelled with the field names below.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    member_id: int
    username: str
    age: int
    team_id: int | None = None
    team_name: str | None = None


class MemberDto(BaseModel):
    """Username and age only."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    username: str
    age: int
