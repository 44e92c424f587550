"""Render store-independent SearchQuery predicates into MongoDB filters."""

import re
from datetime import date, datetime, time, timezone
from typing import Any

import pymongo

from domain.model.search import Operator, Predicate, SearchQuery, SortOrder

# Domain attribute → document key, where they differ
FIELD_KEYS = {'id': '_id'}


def render_filter(predicates: tuple[Predicate, ...] | list[Predicate]) -> dict:
    """AND-combine rendered predicates into one filter document."""
    clauses = [render_predicate(p) for p in predicates]
    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {'$and': clauses}


def render_predicate(predicate: Predicate) -> dict:
    condition = _condition(predicate.op, predicate.value)
    keys = [FIELD_KEYS.get(f, f) for f in predicate.fields]
    if len(keys) == 1:
        return {keys[0]: condition}
    return {'$or': [{key: condition} for key in keys]}


def render_sort(query: SearchQuery) -> list[tuple[str, int]]:
    direction = pymongo.ASCENDING if query.sort_order == SortOrder.ASC else pymongo.DESCENDING
    return [(FIELD_KEYS.get(query.sort_field, query.sort_field), direction)]


def to_bson_value(value: Any) -> Any:
    """BSON has no date type: dates are stored as UTC midnight datetimes."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


def _condition(op: Operator, value: Any) -> Any:
    if op == Operator.EQ:
        return to_bson_value(value)
    if op == Operator.ICONTAINS:
        return {'$regex': re.escape(value), '$options': 'i'}
    if op == Operator.GTE:
        return {'$gte': to_bson_value(value)}
    if op == Operator.LTE:
        return {'$lte': to_bson_value(value)}
    if op == Operator.OVERLAPS:
        return {'$in': list(value)}
    raise ValueError(f"Unsupported operator: {op}")
