"""Tests for rendering search predicates into MongoDB filters."""

import re
import unittest
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pymongo

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from adapter.mongodb.query import render_filter, render_predicate, render_sort, to_bson_value
from domain.model.search import Operator, Predicate, SearchCriteria, SearchQuery, SortField, SortOrder
from services.search_query_builder import build_search_query


class TestRenderPredicate(unittest.TestCase):

    def test_eq(self):
        self.assertEqual(
            render_predicate(Predicate(('is_active',), Operator.EQ, True)),
            {'is_active': True},
        )

    def test_icontains_escapes_pattern(self):
        rendered = render_predicate(Predicate(('city',), Operator.ICONTAINS, 'St. Louis (MO)'))
        self.assertEqual(rendered, {'city': {'$regex': re.escape('St. Louis (MO)'), '$options': 'i'}})

    def test_multi_field_predicate_becomes_or(self):
        rendered = render_predicate(Predicate(('first_name', 'email'), Operator.ICONTAINS, 'jo'))
        self.assertEqual(rendered, {'$or': [
            {'first_name': {'$regex': 'jo', '$options': 'i'}},
            {'email': {'$regex': 'jo', '$options': 'i'}},
        ]})

    def test_date_bounds_render_as_utc_midnight(self):
        rendered = render_predicate(Predicate(('date_of_birth',), Operator.GTE, date(1990, 5, 1)))
        self.assertEqual(rendered, {'date_of_birth': {'$gte': datetime(1990, 5, 1, tzinfo=timezone.utc)}})

    def test_overlaps_renders_in(self):
        rendered = render_predicate(Predicate(('skills',), Operator.OVERLAPS, ('python', 'go')))
        self.assertEqual(rendered, {'skills': {'$in': ['python', 'go']}})

    def test_id_field_maps_to_document_key(self):
        self.assertEqual(render_predicate(Predicate(('id',), Operator.EQ, 'u1')), {'_id': 'u1'})


class TestRenderFilter(unittest.TestCase):

    def test_empty(self):
        self.assertEqual(render_filter([]), {})

    def test_single_clause_is_not_wrapped(self):
        query = build_search_query(SearchCriteria(), today=date(2024, 6, 15))
        self.assertEqual(render_filter(query.predicates), {'is_active': True})

    def test_clauses_are_anded_in_order(self):
        query = build_search_query(SearchCriteria(country='de', max_age=30), today=date(2024, 6, 15))

        self.assertEqual(render_filter(query.predicates), {'$and': [
            {'is_active': True},
            {'country': {'$regex': 'de', '$options': 'i'}},
            {'date_of_birth': {'$gte': datetime(1994, 6, 15, tzinfo=timezone.utc)}},
        ]})


class TestRenderSort(unittest.TestCase):

    def test_descending(self):
        query = build_search_query(SearchCriteria(), today=date(2024, 6, 15))
        self.assertEqual(render_sort(query), [('created_at', pymongo.DESCENDING)])

    def test_ascending(self):
        query = SearchQuery(predicates=(), sort_field=SortField.LAST_NAME.attribute,
                            sort_order=SortOrder.ASC, skip=0, limit=10)
        self.assertEqual(render_sort(query), [('last_name', pymongo.ASCENDING)])


class TestToBsonValue(unittest.TestCase):

    def test_naive_datetime_assumed_utc(self):
        self.assertEqual(
            to_bson_value(datetime(2024, 1, 1, 8, 0)),
            datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc),
        )

    def test_other_values_pass_through(self):
        self.assertEqual(to_bson_value('x'), 'x')
        self.assertIs(to_bson_value(True), True)


if __name__ == '__main__':
    unittest.main()
