"""Statement filters for SQLAlchemy selects.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from roster_service.core.database.filters import LimitOffset, OrderBy, Where

    stmt = select(Member)
    stmt = Where(combine(...)).apply(stmt)
    stmt = OrderBy(Member.age, "desc").apply(stmt)
    stmt = LimitOffset(limit=20, offset=0).apply(stmt)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import Select

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from roster_service.core.pagination.page import PageRequest

SortOrder = Literal["asc", "desc"]
NullsPlacement = Literal["first", "last"]


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class Where(StatementFilter):
    """Apply a prebuilt boolean clause.

    Example:
        stmt = Where(combine(eq_if_text(Member.username, name))).apply(stmt)
    """

    def __init__(self, clause: ColumnElement[bool] | None):
        """Initialize where filter.

        Args:
            clause: Boolean clause; None leaves the statement untouched
        """
        self.clause = clause

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply the clause to statement."""
        if self.clause is None:
            return statement
        return statement.where(self.clause)


class OrderBy(StatementFilter):
    """Column ordering/sorting.

    Example:
        # Descending order
        stmt = OrderBy(Member.age, "desc").apply(stmt)

        # Multiple orderings, nulls sorted last
        stmt = OrderBy([Member.age, Member.username], ["desc", "asc"], nulls="last").apply(stmt)
    """

    def __init__(
        self,
        fields: ColumnElement[Any] | Sequence[ColumnElement[Any]],
        sort_order: SortOrder | Sequence[SortOrder] = "asc",
        *,
        nulls: NullsPlacement | None = None,
    ):
        """Initialize ordering filter.

        Args:
            fields: Single field or list of fields to order by
            sort_order: Sort direction(s) - 'asc' or 'desc'
            nulls: Where NULLs sort, or None for the database default

        Raises:
            ValueError: If sort_order length doesn't match fields length
        """
        self.fields = [fields] if not isinstance(fields, Sequence) else list(fields)
        self.nulls = nulls

        if isinstance(sort_order, str):
            self.sort_orders = [sort_order] * len(self.fields)
        else:
            self.sort_orders = list(sort_order)
            if len(self.sort_orders) != len(self.fields):
                msg = "sort_order length must match fields length"
                raise ValueError(msg)

    def clauses(self) -> list[ColumnElement[Any]]:
        """Return the ORDER BY expressions without applying them."""
        result = []
        for field, order in zip(self.fields, self.sort_orders, strict=True):
            clause = field.desc() if order == "desc" else field.asc()
            if self.nulls == "first":
                clause = clause.nulls_first()
            elif self.nulls == "last":
                clause = clause.nulls_last()
            result.append(clause)
        return result

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply ordering to statement."""
        return statement.order_by(*self.clauses())


class LimitOffset(StatementFilter):
    """Pagination using LIMIT and OFFSET.

    Example:
        # Page 1 (first 20 items)
        stmt = LimitOffset(limit=20, offset=0).apply(stmt)

        # From a page request
        stmt = LimitOffset.from_request(request).apply(stmt)
    """

    def __init__(self, limit: int, offset: int = 0):
        """Initialize pagination filter.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
        """
        self.limit = limit
        self.offset = offset

    @classmethod
    def from_request(cls, request: PageRequest) -> LimitOffset:
        """Build from a validated page request."""
        return cls(limit=request.limit, offset=request.offset)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply pagination to statement."""
        return statement.limit(self.limit).offset(self.offset)


__all__ = [
    "LimitOffset",
    "NullsPlacement",
    "OrderBy",
    "SortOrder",
    "StatementFilter",
    "Where",
]
