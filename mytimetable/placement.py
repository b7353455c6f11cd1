"""
Drag commit: turn the net pixel delta of a dropped block into a new
(day, time range) for that block.

commit_drag runs as one synchronous reducer:
    zero delta            -> NOOP
    bad identifier/index  -> REJECTED (MALFORMED_REFERENCE)
    unknown stored day    -> REJECTED (INVALID_DAY_VALUE)
    no cell crossed       -> NOOP
    day off the grid      -> REJECTED (DAY_OUT_OF_BOUNDS)
    time off the grid     -> REJECTED (TIME_OUT_OF_BOUNDS)
    otherwise             -> COMMITTED

Overlap with other blocks is not checked.
"""

from __future__ import annotations

import logging
from typing import Callable, Union

from mytimetable.config import DEFAULT_GRID, GridConfig
from mytimetable.coords import Delta, cell_delta
from mytimetable.model import (
    Collection,
    Condition,
    DragId,
    Outcome,
    committed,
    noop,
    rejected,
)

logger = logging.getLogger(__name__)


def _reject(collection: Collection, condition: Condition, detail: str) -> Outcome:
    logger.warning("drag rejected (%s): %s", condition.value, detail)
    return rejected(collection, condition, detail)


def commit_drag(
    drag_id: Union[DragId, str],
    delta: Delta,
    collection: Collection,
    grid: GridConfig = DEFAULT_GRID,
) -> Outcome:
    """
    Move one schedule entry by the cells `delta` crosses.

    `drag_id` is either the DragId pair or, straight from the drag library,
    its encoded string. On success only the target entry and the target
    table are new objects; every other entry and table is shared with the
    input collection.
    """
    dx, dy = delta
    if dx == 0 and dy == 0:
        return noop(collection)

    target = DragId.decode(drag_id) if not isinstance(drag_id, DragId) else drag_id
    if target is None:
        return _reject(collection, Condition.MALFORMED_REFERENCE, f"cannot decode drag id {drag_id!r}")

    schedules = collection.get(target.table_id)
    if schedules is None or not (0 <= target.index < len(schedules)):
        return _reject(
            collection,
            Condition.MALFORMED_REFERENCE,
            f"no schedule {target.index} in table {target.table_id!r}",
        )

    entry = schedules[target.index]
    current_day_index = grid.day_index(entry.day)
    if current_day_index is None:
        return _reject(collection, Condition.INVALID_DAY_VALUE, f"unknown day {entry.day!r}")

    move_days, move_times = cell_delta(Delta(dx, dy), grid)
    if move_days == 0 and move_times == 0:
        return noop(collection)

    new_day_index = current_day_index + move_days
    if not (0 <= new_day_index < grid.day_count):
        return _reject(collection, Condition.DAY_OUT_OF_BOUNDS, f"day index {new_day_index}")

    new_range = tuple(time + move_times for time in entry.range)
    if not all(grid.time_in_bounds(time) for time in new_range):
        return _reject(collection, Condition.TIME_OUT_OF_BOUNDS, f"time range {list(new_range)}")

    moved = entry.moved(grid.day_labels[new_day_index], new_range)
    updated = schedules[: target.index] + (moved,) + schedules[target.index + 1 :]

    logger.debug("moved %s to %s %s", target.encode(), moved.day, list(moved.range))
    return committed({**collection, target.table_id: updated})


def drag_reducer(
    drag_id: Union[DragId, str],
    delta: Delta,
    grid: GridConfig = DEFAULT_GRID,
) -> Callable[[Collection], Outcome]:
    """
    Bind a drag-end event so it can be dispatched to a ScheduleStore.
    """

    def reduce(collection: Collection) -> Outcome:
        return commit_drag(drag_id, delta, collection, grid)

    return reduce
