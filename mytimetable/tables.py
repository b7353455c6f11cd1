"""
Operations over the table collection (table id -> tuple of ScheduleEntry).

Every operation takes the current collection and returns an Outcome whose
collection is a new dict in which only the affected table changed. Tables
that were not touched keep their exact object, so consumers can compare by
identity to find out what to redraw.

Targeting a table id that does not exist is rejected with
EMPTY_TARGET_TABLE and returns the input collection unchanged.
"""

from __future__ import annotations

import copy
import logging
import time
from typing import Callable, Iterable, Optional

from mytimetable.model import (
    Collection,
    Condition,
    Lecture,
    Outcome,
    ScheduleEntry,
    committed,
    noop,
    rejected,
)
from mytimetable.parse import parse_schedule

logger = logging.getLogger(__name__)

TABLE_ID_PREFIX = "schedule-"


def initial_collection() -> dict[str, tuple[ScheduleEntry, ...]]:
    return {f"{TABLE_ID_PREFIX}1": ()}


def new_table_id(existing: Iterable[str], now_ms: Optional[int] = None) -> str:
    """
    A table id based on the current time in milliseconds, bumped until unused.
    """
    taken = set(existing)
    stamp = int(time.time() * 1000) if now_ms is None else now_ms
    while f"{TABLE_ID_PREFIX}{stamp}" in taken:
        stamp += 1
    return f"{TABLE_ID_PREFIX}{stamp}"


def _missing(collection: Collection, table_id: str, op: str) -> Outcome:
    logger.warning("%s: no table %r", op, table_id)
    return rejected(collection, Condition.EMPTY_TARGET_TABLE, f"{op}: no table {table_id!r}")


def duplicate(collection: Collection, table_id: str, new_id: Optional[str] = None) -> Outcome:
    """
    Add a copy of `table_id` under a fresh key (appended last).

    `new_id` is only used if no table has it yet; otherwise a generated id is
    taken, so an existing table is never overwritten.
    """
    source = collection.get(table_id)
    if source is None:
        return _missing(collection, table_id, "duplicate")

    if new_id and new_id in collection:
        logger.info("duplicate: id %r already taken, generating a new one", new_id)
        new_id = None
    key = new_id or new_table_id(collection.keys())
    # entries are copied one by one; the lecture they point to stays shared
    copied = tuple(copy.copy(entry) for entry in source)
    return committed({**collection, key: copied})


def can_remove(collection: Collection) -> bool:
    """
    Guard for callers: the last remaining table must not be removed.
    """
    return len(collection) > 1


def remove(collection: Collection, table_id: str) -> Outcome:
    if table_id not in collection:
        return _missing(collection, table_id, "remove")
    return committed({k: v for k, v in collection.items() if k != table_id})


def add_from_lecture(collection: Collection, table_id: str, lecture: Lecture) -> Outcome:
    """
    Append one entry per parsed schedule fragment of `lecture` to the table.
    """
    target = collection.get(table_id)
    if target is None:
        return _missing(collection, table_id, "add")

    entries = tuple(ScheduleEntry.from_fragment(f, lecture) for f in parse_schedule(lecture.schedule))
    if not entries:
        logger.info("add: lecture %s has no schedule to place", lecture.id)
        return noop(collection)

    return committed({**collection, table_id: target + entries})


def remove_at(collection: Collection, table_id: str, day: str, time: int) -> Outcome:
    """
    Drop every entry of the table that sits on `day` and covers slot `time`.
    """
    target = collection.get(table_id)
    if target is None:
        return _missing(collection, table_id, "remove_at")

    kept = tuple(entry for entry in target if not entry.covers(day, time))
    if len(kept) == len(target):
        return noop(collection)

    return committed({**collection, table_id: kept})


# ---------------------------------------------------------------------------
# Reducers for ScheduleStore.dispatch
# ---------------------------------------------------------------------------


def duplicate_reducer(table_id: str) -> Callable[[Collection], Outcome]:
    return lambda collection: duplicate(collection, table_id)


def remove_reducer(table_id: str) -> Callable[[Collection], Outcome]:
    return lambda collection: remove(collection, table_id)


def add_reducer(table_id: str, lecture: Lecture) -> Callable[[Collection], Outcome]:
    return lambda collection: add_from_lecture(collection, table_id, lecture)


def remove_at_reducer(table_id: str, day: str, time: int) -> Callable[[Collection], Outcome]:
    return lambda collection: remove_at(collection, table_id, day, time)
