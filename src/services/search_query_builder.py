"""Search query builder — translates SearchCriteria into a SearchQuery.

Pure function over validated criteria; no store access. The resulting
predicate list is rendered by the store adapter (MongoDB filter) or evaluated
directly by the in-memory fake.
"""

from datetime import date, datetime, timezone

from domain.model.search import Operator, Predicate, SearchCriteria, SearchQuery

SEARCH_FIELDS = ('first_name', 'last_name', 'email')


def build_search_query(criteria: SearchCriteria, today: date | None = None) -> SearchQuery:
    """Build the predicate list, ordering and page slice for `criteria`.

    Every supplied filter adds one AND-ed predicate after the mandatory
    `is_active` clause. Age bounds become a birth-date window relative to
    `today` (UTC date when omitted).
    """
    today = today or datetime.now(timezone.utc).date()

    predicates = [Predicate(('is_active',), Operator.EQ, True)]

    if criteria.search:
        predicates.append(Predicate(SEARCH_FIELDS, Operator.ICONTAINS, criteria.search))

    if criteria.city:
        predicates.append(Predicate(('city',), Operator.ICONTAINS, criteria.city))

    if criteria.country:
        predicates.append(Predicate(('country',), Operator.ICONTAINS, criteria.country))

    if criteria.gender:
        predicates.append(Predicate(('gender',), Operator.EQ, criteria.gender.value))

    # Older people have earlier birth dates: max_age bounds from below.
    if criteria.max_age:
        predicates.append(Predicate(('date_of_birth',), Operator.GTE, years_before(today, criteria.max_age)))

    if criteria.min_age:
        predicates.append(Predicate(('date_of_birth',), Operator.LTE, years_before(today, criteria.min_age)))

    if criteria.interests:
        predicates.append(Predicate(('interests',), Operator.OVERLAPS, tuple(criteria.interests)))

    if criteria.skills:
        predicates.append(Predicate(('skills',), Operator.OVERLAPS, tuple(criteria.skills)))

    if criteria.joined_after:
        predicates.append(Predicate(('created_at',), Operator.GTE, criteria.joined_after))

    if criteria.joined_before:
        predicates.append(Predicate(('created_at',), Operator.LTE, criteria.joined_before))

    if criteria.last_active_after:
        predicates.append(Predicate(('last_login_at',), Operator.GTE, criteria.last_active_after))

    return SearchQuery(
        predicates=tuple(predicates),
        sort_field=criteria.sort_by.attribute,
        sort_order=criteria.sort_order,
        skip=(criteria.page - 1) * criteria.limit,
        limit=criteria.limit,
    )


def years_before(today: date, years: int) -> date:
    """Shift `today` back by whole years. Feb 29 rolls over to Mar 1."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return date(today.year - years, 3, 1)
