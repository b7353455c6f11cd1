"""
Unit tests for catalog filtering.

Each predicate is independent, so the result set must not depend on the
order in which predicates are applied.
"""

import itertools
import unittest

from mytimetable.model import FilterCriteria, Lecture
from mytimetable.search import (
    PREDICATES,
    active_predicates,
    all_majors,
    filter_lectures,
    matches_credits,
    matches_query,
    sorted_times,
)

CS201 = Lecture(id="CS201", title="Data Structures", credits="3", grade=2, major="CS", schedule="Mon1~2(101)")
BIO101 = Lecture(id="BIO101", title="Biology", credits="2(1)", grade=1, major="Biology", schedule="Wed3~4(202)")
CS310 = Lecture(
    id="CS310",
    title="Operating Systems",
    credits="3",
    grade=3,
    major="CS",
    schedule="Tue5~6(301)<p>Thu5~6(301)",
)
ART100 = Lecture(id="ART100", title="Drawing", credits="1", grade=1, major="Art", schedule="")

CATALOG = [CS201, BIO101, CS310, ART100]


def ids(lectures):
    return [lec.id for lec in lectures]


class TestFilterLectures(unittest.TestCase):
    def test_empty_criteria_keeps_everything_in_order(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria())), ["CS201", "BIO101", "CS310", "ART100"])

    def test_query_matches_id_case_insensitive(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG[:2], FilterCriteria(query="cs"))), ["CS201"])

    def test_query_matches_title(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria(query="SYSTEMS"))), ["CS310"])

    def test_day_filter(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG[:2], FilterCriteria(days=["Wed"]))), ["BIO101"])

    def test_day_filter_uses_every_fragment(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria(days=["Thu"]))), ["CS310"])

    def test_time_filter_intersects_range(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria(times=[2, 6]))), ["CS201", "CS310"])

    def test_empty_schedule_fails_day_and_time_filters(self) -> None:
        self.assertNotIn("ART100", ids(filter_lectures(CATALOG, FilterCriteria(days=["Mon", "Tue", "Wed"]))))
        self.assertNotIn("ART100", ids(filter_lectures(CATALOG, FilterCriteria(times=range(1, 25)))))

    def test_grade_and_major_combined(self) -> None:
        self.assertEqual(filter_lectures(CATALOG[:2], FilterCriteria(grades=[2], majors=["Biology"])), [])
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria(grades=[1], majors=["Biology", "Art"]))), ["BIO101", "ART100"])

    def test_credits_prefix(self) -> None:
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria(credits=3))), ["CS201", "CS310"])
        self.assertEqual(ids(filter_lectures(CATALOG, FilterCriteria(credits=2))), ["BIO101"])

    def test_zero_credits_means_unset(self) -> None:
        self.assertIsNone(FilterCriteria(credits=0).credits)
        self.assertTrue(matches_credits(ART100, FilterCriteria(credits=0)))

    def test_empty_query_matches_all(self) -> None:
        self.assertTrue(all(matches_query(lec, FilterCriteria()) for lec in CATALOG))

    def test_predicate_order_does_not_matter(self) -> None:
        criteria = FilterCriteria(query="s", grades=[2, 3], majors=["CS"], credits=3, days=["Mon", "Tue"], times=[1, 5])
        expected = filter_lectures(CATALOG, criteria, PREDICATES)
        self.assertEqual(ids(expected), ["CS201", "CS310"])
        for order in itertools.permutations(PREDICATES):
            self.assertEqual(filter_lectures(CATALOG, criteria, order), expected)

    def test_input_is_not_mutated(self) -> None:
        catalog = list(CATALOG)
        filter_lectures(catalog, FilterCriteria(query="cs"))
        self.assertEqual(catalog, CATALOG)


class TestHelpers(unittest.TestCase):
    def test_active_predicates_skip_empty_criteria(self) -> None:
        self.assertEqual(active_predicates(FilterCriteria()), [])
        self.assertEqual(len(active_predicates(FilterCriteria(query="x", days=["Mon"]))), 2)

    def test_all_majors_first_seen_order(self) -> None:
        self.assertEqual(all_majors(CATALOG), ["CS", "Biology", "Art"])

    def test_bare_string_criteria_is_one_value(self) -> None:
        criteria = FilterCriteria(days="Wed", majors="Biology")
        self.assertEqual(criteria.days, frozenset({"Wed"}))
        self.assertEqual(criteria.majors, frozenset({"Biology"}))
        self.assertEqual(ids(filter_lectures(CATALOG, criteria)), ["BIO101"])

    def test_sorted_times(self) -> None:
        self.assertEqual(sorted_times(FilterCriteria(times=[12, 3, 7])), [3, 7, 12])


if __name__ == "__main__":
    unittest.main()
