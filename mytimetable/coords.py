"""
Pixel <-> grid cell conversions for dragged blocks.

Pure functions only; they are recomputed on every drag frame.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import NamedTuple, Optional

from mytimetable.config import DEFAULT_GRID, GridConfig


@dataclass(frozen=True)
class Rect:
    left: float = 0
    top: float = 0
    right: float = 0
    bottom: float = 0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class Transform:
    x: float = 0
    y: float = 0
    scale_x: float = 1
    scale_y: float = 1


class Delta(NamedTuple):
    x: float
    y: float


_EMPTY_RECT = Rect()


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; the drag host rounds .5 upwards
    return math.floor(value + 0.5)


def _snap(value: float, step: int) -> float:
    return _round_half_up(value / step) * step


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def snap_transform(
    transform: Transform,
    container: Optional[Rect],
    dragging: Optional[Rect],
    grid: GridConfig = DEFAULT_GRID,
) -> Transform:
    """
    Snap a drag transform to whole cells and keep the block inside the grid.

    The lower bounds keep the block off the header row and the row-label
    column; the upper bounds keep its far edge inside the container.
    Missing rects are treated as all zeros.
    """
    c = container or _EMPTY_RECT
    d = dragging or _EMPTY_RECT
    header = grid.header

    min_x = c.left - d.left + header.left + header.border
    min_y = c.top - d.top + header.top + header.border
    max_x = c.right - d.right
    max_y = c.bottom - d.bottom

    return replace(
        transform,
        x=_clamp(_snap(transform.x, grid.cell.width), min_x, max_x),
        y=_clamp(_snap(transform.y, grid.cell.height), min_y, max_y),
    )


def cell_delta(delta: Delta, grid: GridConfig = DEFAULT_GRID) -> tuple[int, int]:
    """
    Convert a pixel displacement to (day columns, time rows), flooring each axis.
    """
    x, y = delta
    return math.floor(x / grid.cell.width), math.floor(y / grid.cell.height)
