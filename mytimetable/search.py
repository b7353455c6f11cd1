"""
Lecture catalog filtering.

Each predicate looks at one criterion only, so predicates are independent:
applying them in any order yields the same lectures. The order in PREDICATES
puts the cheap field comparisons first and the two that need the schedule
descriptor parsed last.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from mytimetable.model import FilterCriteria, Lecture
from mytimetable.parse import parse_schedule

Predicate = Callable[[Lecture, FilterCriteria], bool]


def matches_query(lecture: Lecture, criteria: FilterCriteria) -> bool:
    query = criteria.query.lower()
    return query in lecture.title.lower() or query in lecture.id.lower()


def matches_grade(lecture: Lecture, criteria: FilterCriteria) -> bool:
    return not criteria.grades or lecture.grade in criteria.grades


def matches_major(lecture: Lecture, criteria: FilterCriteria) -> bool:
    return not criteria.majors or lecture.major in criteria.majors


def matches_credits(lecture: Lecture, criteria: FilterCriteria) -> bool:
    # "3" also matches annotated values such as "3(2)"
    return not criteria.credits or lecture.credits.startswith(str(criteria.credits))


def matches_day(lecture: Lecture, criteria: FilterCriteria) -> bool:
    if not criteria.days:
        return True
    return any(f.day in criteria.days for f in parse_schedule(lecture.schedule))


def matches_time(lecture: Lecture, criteria: FilterCriteria) -> bool:
    if not criteria.times:
        return True
    return any(not criteria.times.isdisjoint(f.range) for f in parse_schedule(lecture.schedule))


PREDICATES: tuple[Predicate, ...] = (
    matches_query,
    matches_grade,
    matches_major,
    matches_credits,
    matches_day,
    matches_time,
)


def active_predicates(criteria: FilterCriteria) -> list[Predicate]:
    """
    Only the predicates whose criterion actually restricts something.
    """
    inactive: set[Predicate] = set()
    if not criteria.query:
        inactive.add(matches_query)
    if not criteria.grades:
        inactive.add(matches_grade)
    if not criteria.majors:
        inactive.add(matches_major)
    if not criteria.credits:
        inactive.add(matches_credits)
    if not criteria.days:
        inactive.add(matches_day)
    if not criteria.times:
        inactive.add(matches_time)
    return [p for p in PREDICATES if p not in inactive]


def filter_lectures(
    lectures: Iterable[Lecture],
    criteria: FilterCriteria,
    predicates: Optional[Sequence[Predicate]] = None,
) -> list[Lecture]:
    """
    Return the lectures passing every predicate, in catalog order.
    """
    checks = active_predicates(criteria) if predicates is None else list(predicates)
    return [lec for lec in lectures if all(check(lec, criteria) for check in checks)]


def all_majors(lectures: Iterable[Lecture]) -> list[str]:
    """
    Unique majors in first-seen order (choices for the major filter).
    """
    return list(dict.fromkeys(lec.major for lec in lectures))


def sorted_times(criteria: FilterCriteria) -> list[int]:
    return sorted(criteria.times)
