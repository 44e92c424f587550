"""Unit tests for search_query_builder module."""

import unittest
import sys
from datetime import date, datetime, timezone
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from domain.model.account import Gender
from domain.model.search import Operator, Predicate, SearchCriteria, SortField, SortOrder
from services.search_query_builder import SEARCH_FIELDS, build_search_query, years_before

TODAY = date(2024, 6, 15)
ACTIVE = Predicate(('is_active',), Operator.EQ, True)


class TestBuildSearchQuery(unittest.TestCase):
    """Test predicate list construction."""

    def test_no_filters_matches_active_accounts_only(self):
        query = build_search_query(SearchCriteria(), today=TODAY)

        self.assertEqual(query.predicates, (ACTIVE,))
        self.assertEqual(query.sort_field, 'created_at')
        self.assertEqual(query.sort_order, SortOrder.DESC)
        self.assertEqual(query.skip, 0)
        self.assertEqual(query.limit, 10)

    def test_search_term_ors_over_name_and_email(self):
        query = build_search_query(SearchCriteria(search='john'), today=TODAY)

        self.assertEqual(query.predicates[0], ACTIVE)
        self.assertEqual(query.predicates[1], Predicate(SEARCH_FIELDS, Operator.ICONTAINS, 'john'))
        self.assertEqual(SEARCH_FIELDS, ('first_name', 'last_name', 'email'))

    def test_location_and_gender_filters(self):
        criteria = SearchCriteria(city='Ber', country='germany', gender=Gender.FEMALE)
        query = build_search_query(criteria, today=TODAY)

        self.assertEqual(query.predicates, (
            ACTIVE,
            Predicate(('city',), Operator.ICONTAINS, 'Ber'),
            Predicate(('country',), Operator.ICONTAINS, 'germany'),
            Predicate(('gender',), Operator.EQ, 'female'),
        ))

    def test_age_window_becomes_birth_date_bounds(self):
        """maxAge bounds birth date from below, minAge from above."""
        query = build_search_query(SearchCriteria(min_age=25, max_age=35), today=TODAY)

        self.assertEqual(query.predicates, (
            ACTIVE,
            Predicate(('date_of_birth',), Operator.GTE, date(1989, 6, 15)),
            Predicate(('date_of_birth',), Operator.LTE, date(1999, 6, 15)),
        ))

    def test_age_bounds_are_independent(self):
        only_min = build_search_query(SearchCriteria(min_age=18), today=TODAY)
        only_max = build_search_query(SearchCriteria(max_age=30), today=TODAY)

        self.assertEqual(only_min.predicates[1], Predicate(('date_of_birth',), Operator.LTE, date(2006, 6, 15)))
        self.assertEqual(len(only_min.predicates), 2)
        self.assertEqual(only_max.predicates[1], Predicate(('date_of_birth',), Operator.GTE, date(1994, 6, 15)))
        self.assertEqual(len(only_max.predicates), 2)

    def test_interests_and_skills_use_overlap(self):
        criteria = SearchCriteria(interests=('music', 'art'), skills=('python',))
        query = build_search_query(criteria, today=TODAY)

        self.assertEqual(query.predicates[1:], (
            Predicate(('interests',), Operator.OVERLAPS, ('music', 'art')),
            Predicate(('skills',), Operator.OVERLAPS, ('python',)),
        ))

    def test_empty_lists_add_no_predicate(self):
        query = build_search_query(SearchCriteria(interests=(), skills=()), today=TODAY)
        self.assertEqual(query.predicates, (ACTIVE,))

    def test_date_range_filters(self):
        after = datetime(2024, 1, 1, tzinfo=timezone.utc)
        before = datetime(2024, 3, 1, tzinfo=timezone.utc)
        seen = datetime(2024, 5, 1, tzinfo=timezone.utc)
        criteria = SearchCriteria(joined_after=after, joined_before=before, last_active_after=seen)
        query = build_search_query(criteria, today=TODAY)

        self.assertEqual(query.predicates[1:], (
            Predicate(('created_at',), Operator.GTE, after),
            Predicate(('created_at',), Operator.LTE, before),
            Predicate(('last_login_at',), Operator.GTE, seen),
        ))

    def test_all_filters_keep_fixed_order(self):
        criteria = SearchCriteria(
            search='a', city='b', country='c', gender=Gender.OTHER,
            min_age=20, max_age=40, interests=('x',), skills=('y',),
            joined_after=datetime(2024, 1, 1, tzinfo=timezone.utc),
            joined_before=datetime(2024, 2, 1, tzinfo=timezone.utc),
            last_active_after=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
        query = build_search_query(criteria, today=TODAY)

        fields = [p.fields[0] for p in query.predicates]
        self.assertEqual(fields, [
            'is_active', 'first_name', 'city', 'country', 'gender',
            'date_of_birth', 'date_of_birth', 'interests', 'skills',
            'created_at', 'created_at', 'last_login_at',
        ])

    def test_sort_and_page_slice(self):
        criteria = SearchCriteria(sort_by=SortField.LAST_NAME, sort_order=SortOrder.ASC, page=3, limit=20)
        query = build_search_query(criteria, today=TODAY)

        self.assertEqual(query.sort_field, 'last_name')
        self.assertEqual(query.sort_order, SortOrder.ASC)
        self.assertEqual(query.skip, 40)
        self.assertEqual(query.limit, 20)

    def test_same_criteria_build_same_query(self):
        criteria = SearchCriteria(search='x', min_age=30, interests=('a',))
        self.assertEqual(
            build_search_query(criteria, today=TODAY),
            build_search_query(criteria, today=TODAY),
        )


class TestYearsBefore(unittest.TestCase):

    def test_regular_date(self):
        self.assertEqual(years_before(date(2024, 6, 15), 30), date(1994, 6, 15))

    def test_leap_day_to_non_leap_year_rolls_to_march_first(self):
        self.assertEqual(years_before(date(2024, 2, 29), 1), date(2023, 3, 1))

    def test_leap_day_to_leap_year_kept(self):
        self.assertEqual(years_before(date(2024, 2, 29), 4), date(2020, 2, 29))


if __name__ == '__main__':
    unittest.main()
