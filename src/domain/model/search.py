# domain/model/search.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from domain.model.account import Account, Gender


class SortField(str, Enum):
    """Fields a search may be ordered by (public names)."""
    FIRST_NAME = 'firstName'
    LAST_NAME = 'lastName'
    CREATED_AT = 'createdAt'
    LAST_LOGIN_AT = 'lastLoginAt'

    @property
    def attribute(self) -> str:
        return _SORT_ATTRIBUTES[self]


_SORT_ATTRIBUTES = {
    SortField.FIRST_NAME: 'first_name',
    SortField.LAST_NAME: 'last_name',
    SortField.CREATED_AT: 'created_at',
    SortField.LAST_LOGIN_AT: 'last_login_at',
}


class SortOrder(str, Enum):
    ASC = 'ASC'
    DESC = 'DESC'


class Operator(str, Enum):
    """Comparison applied by a Predicate."""
    EQ = 'eq'
    ICONTAINS = 'icontains'
    GTE = 'gte'
    LTE = 'lte'
    OVERLAPS = 'overlaps'


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class SearchCriteria:
    """Validated and defaulted account search request."""
    search: str | None = None
    city: str | None = None
    country: str | None = None
    gender: Gender | None = None
    min_age: int | None = None
    max_age: int | None = None
    interests: tuple[str, ...] = ()
    skills: tuple[str, ...] = ()
    joined_after: datetime | None = None
    joined_before: datetime | None = None
    last_active_after: datetime | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def log_extra(self) -> dict:
        """Non-empty filters for structured logging."""
        extra: dict[str, Any] = {}
        for name, value in self.__dict__.items():
            if value is None or value == ():
                continue
            extra[name] = value.value if isinstance(value, Enum) else (
                value.isoformat() if isinstance(value, datetime) else value
            )
        return extra


# ── Query descriptor ─────────────────────────────────────


@dataclass(frozen=True)
class Predicate:
    """One AND-ed clause. Multiple fields are OR-ed against the same value."""
    fields: tuple[str, ...]
    op: Operator
    value: Any


@dataclass(frozen=True)
class SearchQuery:
    """Store-independent query: predicates + single-key sort + offset page."""
    predicates: tuple[Predicate, ...]
    sort_field: str
    sort_order: SortOrder
    skip: int
    limit: int


@dataclass
class AccountPage:
    """One page of search results plus the unpaginated match count."""
    accounts: list[Account] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def compute(cls, page: int, limit: int, total: int) -> Pagination:
        total_pages = math.ceil(total / limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )
