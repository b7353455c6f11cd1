"""
Central data model definitions used across the project.

This module defines the canonical structure of lectures, schedule entries,
drag identifiers, filter criteria and operation outcomes so that:
- all modules share the same field names
- state updates can be checked cheaply by object identity
- callers branch on typed conditions instead of reading log output

All records are frozen dataclasses. A timetable collection is a plain dict
mapping table id -> tuple of ScheduleEntry; operations always build a new
dict and never mutate one they received.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Iterable, Mapping, Optional


@dataclass(frozen=True)
class Lecture:
    """
    Represents one catalog lecture as stored in the schedules-*.json files.
    """

    id: str
    title: str
    credits: str
    grade: int
    major: str
    schedule: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Lecture":
        try:
            grade = int(data.get("grade", 0))
        except (TypeError, ValueError):
            grade = 0
        return cls(
            id=str(data.get("id", "") or ""),
            title=str(data.get("title", "") or ""),
            credits=str(data.get("credits", "") or ""),
            grade=grade,
            major=str(data.get("major", "") or ""),
            schedule=str(data.get("schedule", "") or ""),
        )


@dataclass(frozen=True)
class ScheduleFragment:
    """
    One `day + contiguous time range + room` piece of a raw schedule descriptor.
    """

    day: str
    range: tuple[int, ...]
    room: str = ""


@dataclass(frozen=True)
class ScheduleEntry:
    """
    One block placed on a timetable. The lecture is shared, never copied.
    """

    day: str
    range: tuple[int, ...]
    room: str
    lecture: Lecture

    @classmethod
    def from_fragment(cls, fragment: ScheduleFragment, lecture: Lecture) -> "ScheduleEntry":
        return cls(day=fragment.day, range=tuple(fragment.range), room=fragment.room, lecture=lecture)

    def moved(self, day: str, time_range: Iterable[int]) -> "ScheduleEntry":
        return replace(self, day=day, range=tuple(time_range))

    def covers(self, day: str, time: int) -> bool:
        return self.day == day and time in self.range


Table = tuple[ScheduleEntry, ...]
Collection = Mapping[str, Table]


@dataclass(frozen=True)
class DragId:
    """
    Identifies a dragged block: which table, and which position in it.

    The pair travels as-is through the code; only the drag library needs the
    "<table_id>:<index>" string form (see encode/decode).
    """

    table_id: str
    index: int

    SEPARATOR = ":"

    def encode(self) -> str:
        return f"{self.table_id}{self.SEPARATOR}{self.index}"

    @classmethod
    def decode(cls, raw: Any) -> Optional["DragId"]:
        """
        Parse a boundary string. Returns None for anything malformed.
        """
        if not isinstance(raw, str):
            return None
        table_id, sep, index_str = raw.rpartition(cls.SEPARATOR)
        if not sep or not table_id:
            return None
        index_str = index_str.strip()
        if not index_str.isdecimal():
            return None
        return cls(table_id=table_id, index=int(index_str))


def _frozen(values: Optional[Iterable[Any]]) -> frozenset:
    if not values:
        return frozenset()
    # a bare string is one value, not a set of characters
    if isinstance(values, str):
        return frozenset((values,))
    return frozenset(values)


@dataclass(frozen=True)
class FilterCriteria:
    """
    Current search predicates. Empty sets (and an empty query) restrict nothing.
    """

    query: str = ""
    grades: frozenset = field(default_factory=frozenset)
    days: frozenset = field(default_factory=frozenset)
    times: frozenset = field(default_factory=frozenset)
    majors: frozenset = field(default_factory=frozenset)
    credits: Optional[int] = None

    def __post_init__(self) -> None:
        # accept lists/tuples from callers, store hashable sets
        object.__setattr__(self, "query", self.query or "")
        object.__setattr__(self, "grades", _frozen(self.grades))
        object.__setattr__(self, "days", _frozen(self.days))
        object.__setattr__(self, "times", _frozen(self.times))
        object.__setattr__(self, "majors", _frozen(self.majors))
        object.__setattr__(self, "credits", self.credits or None)

    def changed(self, **fields: Any) -> "FilterCriteria":
        return replace(self, **fields)


# ---------------------------------------------------------------------------
# Operation outcomes
# ---------------------------------------------------------------------------


class Condition(str, Enum):
    MALFORMED_REFERENCE = "malformed_reference"
    INVALID_DAY_VALUE = "invalid_day_value"
    DAY_OUT_OF_BOUNDS = "day_out_of_bounds"
    TIME_OUT_OF_BOUNDS = "time_out_of_bounds"
    EMPTY_TARGET_TABLE = "empty_target_table"


class Status(str, Enum):
    COMMITTED = "committed"
    NOOP = "noop"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Outcome:
    """
    Result of a collection operation.

    `collection` is always usable as the next state: on NOOP and REJECTED it
    is the very object that was passed in.
    """

    collection: Collection
    status: Status
    condition: Optional[Condition] = None
    detail: str = ""

    @property
    def changed(self) -> bool:
        return self.status is Status.COMMITTED

    @property
    def rejected(self) -> bool:
        return self.status is Status.REJECTED


def committed(collection: Collection) -> Outcome:
    return Outcome(collection, Status.COMMITTED)


def noop(collection: Collection) -> Outcome:
    return Outcome(collection, Status.NOOP)


def rejected(collection: Collection, condition: Condition, detail: str = "") -> Outcome:
    return Outcome(collection, Status.REJECTED, condition, detail)
