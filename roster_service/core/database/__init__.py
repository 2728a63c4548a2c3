"""Core database package: declarative base, repository, conditions and filters.

Base Classes and Mixins:
    - Base: Declarative base with auto table naming
    - IntegerPKMixin: Auto-increment integer primary key

Repository:
    - BaseRepository[T]: Generic CRUD, offset pagination and bulk statements

Conditions:
    - is_blank: Text presence rule for optional criteria
    - eq_if_text, eq_if_present, ge_if_present, le_if_present, between_if_present:
      One criterion to one clause (or None when absent)
    - combine: AND the present clauses, true() when none
    - ConditionBuilder: Incremental form of combine

Query Filters:
    - Where: Apply a prebuilt clause
    - OrderBy: Column sorting (asc/desc, nulls placement)
    - LimitOffset: Pagination helper

Exceptions:
    - RepositoryError: Base exception for repository operations
    - NotFoundError: Entity not found (404-like)
    - InvalidFilterError: Malformed filter or sort parameters
    - InvalidPageRequestError: Negative offset or non-positive limit

Example:
    from roster_service.core.database import BaseRepository, combine, eq_if_text

    stmt = select(Member).where(combine(eq_if_text(Member.username, name)))
    page = await BaseRepository(Member).paginate(session, stmt, PageRequest.of(0, 20))
"""

from roster_service.core.database.base import NAMING_CONVENTION, Base, IntegerPKMixin
from roster_service.core.database.conditions import (
    ConditionBuilder,
    between_if_present,
    combine,
    eq_if_present,
    eq_if_text,
    ge_if_present,
    is_blank,
    le_if_present,
)
from roster_service.core.database.exceptions import (
    InvalidFilterError,
    InvalidPageRequestError,
    NotFoundError,
    RepositoryError,
)
from roster_service.core.database.filters import LimitOffset, OrderBy, StatementFilter, Where
from roster_service.core.database.repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "ConditionBuilder",
    "IntegerPKMixin",
    "InvalidFilterError",
    "InvalidPageRequestError",
    "LimitOffset",
    "NotFoundError",
    "OrderBy",
    "RepositoryError",
    "StatementFilter",
    "Where",
    "between_if_present",
    "combine",
    "eq_if_present",
    "eq_if_text",
    "ge_if_present",
    "is_blank",
    "le_if_present",
]
