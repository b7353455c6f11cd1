"""
Grid geometry and catalog source settings.

Everything here is a plain constant or a frozen dataclass. Components receive
a GridConfig explicitly (default: DEFAULT_GRID) instead of reading shared
mutable state, so tests can build their own grid without patching anything.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------

DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri")

MIN_TIME_SLOT = 1
MAX_TIME_SLOT = 24


@dataclass(frozen=True)
class CellSize:
    """Pixel size of one grid cell (one day column x one time slot row)."""

    width: int = 80
    height: int = 30


@dataclass(frozen=True)
class HeaderOffset:
    """Row-label column width, header row height and the border between them."""

    left: int = 120
    top: int = 40
    border: int = 1


@dataclass(frozen=True)
class GridConfig:
    day_labels: tuple[str, ...] = DAY_LABELS
    cell: CellSize = field(default_factory=CellSize)
    header: HeaderOffset = field(default_factory=HeaderOffset)
    min_time: int = MIN_TIME_SLOT
    max_time: int = MAX_TIME_SLOT

    @property
    def day_count(self) -> int:
        return len(self.day_labels)

    def day_index(self, day: str) -> Optional[int]:
        """
        Position of `day` in the fixed day ordering, or None if it is not a label.
        """
        try:
            return self.day_labels.index(day)
        except ValueError:
            return None

    def time_in_bounds(self, slot: int) -> bool:
        return self.min_time <= slot <= self.max_time


DEFAULT_GRID = GridConfig()


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

PAGE_SIZE = 100

# seconds between opening the search view and attaching the sentinel observer
OBSERVER_SETUP_DELAY = 0.3


# ---------------------------------------------------------------------------
# Catalog source
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_DIR = PACKAGE_DIR / "data"

MAJORS_FILE = "schedules-majors.json"
LIBERAL_ARTS_FILE = "schedules-liberal-arts.json"

# concatenation order of the catalog
PARTITIONS = (MAJORS_FILE, LIBERAL_ARTS_FILE)

REQUEST_TIMEOUT = 30
