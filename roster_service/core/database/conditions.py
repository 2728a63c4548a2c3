"""Composable optional WHERE conditions.

Search forms usually send a handful of optional criteria. Each helper here
turns one criterion into a SQLAlchemy boolean clause, or ``None`` when the
criterion is absent, so callers can assemble a conjunction of whatever is
present without repeating the absence checks.

Two styles share the same helpers:

Functional (pass straight into ``where``):
    stmt = select(Member).where(
        combine(
            eq_if_text(Member.username, condition.username),
            ge_if_present(Member.age, condition.age_goe),
        )
    )

Incremental builder:
    builder = ConditionBuilder()
    builder.and_(eq_if_text(Member.username, condition.username))
    if include_age:
        builder.and_(ge_if_present(Member.age, condition.age_goe))
    stmt = select(Member).where(builder.build())

With no criteria present both styles produce ``true()``, which matches
every row.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Self

from sqlalchemy import and_, or_, true

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement


def is_blank(value: str | None) -> bool:
    """Return True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def eq_if_text(column: ColumnElement[Any], value: str | None) -> ColumnElement[bool] | None:
    """Equality on a text criterion; blank values are treated as absent."""
    if is_blank(value):
        return None
    return column == value


def eq_if_present(column: ColumnElement[Any], value: Any | None) -> ColumnElement[bool] | None:
    """Equality on any criterion that is not None."""
    if value is None:
        return None
    return column == value


def ge_if_present(column: ColumnElement[Any], value: Any | None) -> ColumnElement[bool] | None:
    """Inclusive lower bound (``column >= value``) when value is not None."""
    if value is None:
        return None
    return column >= value


def le_if_present(column: ColumnElement[Any], value: Any | None) -> ColumnElement[bool] | None:
    """Inclusive upper bound (``column <= value``) when value is not None."""
    if value is None:
        return None
    return column <= value


def between_if_present(
    column: ColumnElement[Any],
    low: Any | None,
    high: Any | None,
) -> ColumnElement[bool] | None:
    """Inclusive range where either bound may be absent.

    Args:
        column: Column to constrain
        low: Inclusive lower bound, or None for open-ended
        high: Inclusive upper bound, or None for open-ended

    Returns:
        Conjunction of the present bounds, or None when both are absent
    """
    clauses = [c for c in (ge_if_present(column, low), le_if_present(column, high)) if c is not None]
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)


def combine(*clauses: ColumnElement[bool] | None) -> ColumnElement[bool]:
    """AND together the clauses that are present.

    Returns ``true()`` when every clause is None.
    """
    present = [clause for clause in clauses if clause is not None]
    if not present:
        return true()
    if len(present) == 1:
        return present[0]
    return and_(*present)


class ConditionBuilder:
    """Mutable accumulator for an optional conjunction.

    ``and_`` ignores None so helpers from this module can be chained without
    checks at the call site.

    Example:
        builder = ConditionBuilder()
        builder.and_(eq_if_text(Team.name, team_name)).and_(ge_if_present(Member.age, 18))
        stmt = select(Member).join(Member.team).where(builder.build())
    """

    __slots__ = ("_clause",)

    def __init__(self, initial: ColumnElement[bool] | None = None) -> None:
        """Initialize builder.

        Args:
            initial: Optional starting clause
        """
        self._clause: ColumnElement[bool] | None = initial

    @property
    def has_value(self) -> bool:
        """Whether any clause has been added."""
        return self._clause is not None

    def and_(self, clause: ColumnElement[bool] | None) -> Self:
        """Conjoin a clause; None is ignored."""
        if clause is None:
            return self
        self._clause = clause if self._clause is None else and_(self._clause, clause)
        return self

    def or_(self, clause: ColumnElement[bool] | None) -> Self:
        """Disjoin a clause with everything accumulated so far; None is ignored."""
        if clause is None:
            return self
        self._clause = clause if self._clause is None else or_(self._clause, clause)
        return self

    def extend(self, clauses: Iterable[ColumnElement[bool] | None]) -> Self:
        """Conjoin every present clause from an iterable."""
        for clause in clauses:
            self.and_(clause)
        return self

    def build(self) -> ColumnElement[bool]:
        """Return the accumulated clause, or ``true()`` when empty."""
        if self._clause is None:
            return true()
        return self._clause

    def __repr__(self) -> str:
        """Repr for debugging."""
        return f"ConditionBuilder(has_value={self.has_value})"


__all__ = [
    "ConditionBuilder",
    "between_if_present",
    "combine",
    "eq_if_present",
    "eq_if_text",
    "ge_if_present",
    "is_blank",
    "le_if_present",
]
