"""
Terminal rendering of timetables and search results (rich tables).
"""

from __future__ import annotations

from typing import Iterable, Sequence

from rich import box
from rich.markup import escape
from rich.table import Table

from mytimetable.config import DEFAULT_GRID, GridConfig
from mytimetable.model import Lecture, ScheduleEntry
from mytimetable.parse import fill2, time_slot_label

COLORS = ("red", "yellow", "cyan", "blue", "magenta", "green")


def lecture_colors(entries: Iterable[ScheduleEntry]) -> dict[str, str]:
    """
    One color per lecture id, stable for a given set of lectures.
    """
    ids = sorted({e.lecture.id for e in entries})
    return {lid: COLORS[i % len(COLORS)] for i, lid in enumerate(ids)}


def _cell_map(entries: Sequence[ScheduleEntry]) -> dict[tuple[str, int], tuple[int, ScheduleEntry]]:
    # (day, slot) -> (index, entry); later entries win when blocks overlap
    cells: dict[tuple[str, int], tuple[int, ScheduleEntry]] = {}
    for index, entry in enumerate(entries):
        for slot in entry.range:
            cells[(entry.day, slot)] = (index, entry)
    return cells


def render_table(
    title: str,
    entries: Sequence[ScheduleEntry],
    grid: GridConfig = DEFAULT_GRID,
) -> Table:
    """
    Week grid: one row per time slot, one column per day.

    A block shows "#index title (room)" on its first slot and a bar below.
    """
    colors = lecture_colors(entries)
    cells = _cell_map(entries)

    table = Table(title=title, box=box.SIMPLE, show_lines=False)
    table.add_column("Slot", justify="right", no_wrap=True)
    for day in grid.day_labels:
        table.add_column(day, overflow="ellipsis", no_wrap=True)

    for slot in range(grid.min_time, grid.max_time + 1):
        row = [f"{fill2(slot)} ({time_slot_label(slot)})"]
        for day in grid.day_labels:
            hit = cells.get((day, slot))
            if hit is None:
                row.append("")
                continue
            index, entry = hit
            color = colors[entry.lecture.id]
            if slot == entry.range[0]:
                room = f" ({escape(entry.room)})" if entry.room else ""
                row.append(f"[{color}]#{index} {escape(entry.lecture.title)}{room}[/]")
            else:
                row.append(f"[{color}]│[/]")
        table.add_row(*row)

    return table


def render_lectures(lectures: Sequence[Lecture], title: str = "Search results", numbered: bool = False) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    if numbered:
        table.add_column("#", justify="right")
    table.add_column("Code", style="bold cyan", no_wrap=True)
    table.add_column("Grade", justify="right")
    table.add_column("Title")
    table.add_column("Credits", justify="right")
    table.add_column("Major", style="green")
    table.add_column("Schedule")

    for i, lec in enumerate(lectures, start=1):
        schedule = lec.schedule.replace("<p>", " ")
        row = [escape(x) for x in (lec.id, str(lec.grade), lec.title, lec.credits, lec.major, schedule)]
        if numbered:
            row.insert(0, str(i))
        table.add_row(*row)

    return table
