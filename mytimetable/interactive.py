from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console

from mytimetable.config import DEFAULT_GRID
from mytimetable.coords import Delta
from mytimetable.model import DragId, Lecture, Outcome
from mytimetable.placement import drag_reducer
from mytimetable.render import render_lectures, render_table
from mytimetable.session import SearchSession
from mytimetable.store import ScheduleStore
from mytimetable.tables import can_remove, duplicate_reducer, remove_at_reducer, remove_reducer

console = Console()


def _println(msg: str = "") -> None:
    console.print(msg, markup=False)


def _prompt(msg: str) -> str:
    return console.input(msg, markup=False)


def _ask_int(msg: str) -> Optional[int]:
    raw = _prompt(msg).strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        _println("Not a number.")
        return None


def _report(outcome: Outcome, done_msg: str) -> None:
    if outcome.changed:
        _println(done_msg)
    elif outcome.rejected:
        assert outcome.condition is not None
        _println(f"Not applied: {outcome.condition.value} ({outcome.detail})")
    else:
        _println("Nothing changed.")


def run_interactive(lectures: Sequence[Lecture], store: Optional[ScheduleStore] = None) -> None:
    """
    Interactive menu loop over an in-memory set of timetables.
    """
    store = store or ScheduleStore()
    session = SearchSession(store, lectures)

    while True:
        _println(f"\n=== MyTimetable (interactive) ===")
        _println(f"Lectures in catalog: {len(session.lectures)} | Tables: {len(store.state)}")

        choice = _prompt(
            "\n[1] Show tables\n"
            "[2] Search + add lecture\n"
            "[3] Move a block\n"
            "[4] Delete blocks at day/time\n"
            "[5] Duplicate a table\n"
            "[6] Remove a table\n"
            "[0] Exit\n"
            "Select: "
        ).strip()

        if choice == "0":
            _println("Bye.")
            return

        if choice == "1":
            _flow_show(store)
        elif choice == "2":
            _flow_search_add(store, session)
        elif choice == "3":
            _flow_move(store)
        elif choice == "4":
            _flow_delete_at(store)
        elif choice == "5":
            _flow_duplicate(store)
        elif choice == "6":
            _flow_remove(store)
        else:
            _println("Invalid choice.")


def _pick_table(store: ScheduleStore) -> Optional[str]:
    ids = list(store.state)
    if len(ids) == 1:
        return ids[0]

    for i, tid in enumerate(ids, start=1):
        _println(f"{i}) Table {i} ({tid}, {len(store.state[tid])} blocks)")
    pick = _ask_int("Table number [blank = back]: ")
    if pick is None:
        return None
    if not (1 <= pick <= len(ids)):
        _println("Out of range.")
        return None
    return ids[pick - 1]


def _flow_show(store: ScheduleStore) -> None:
    for i, (tid, entries) in enumerate(store.state.items(), start=1):
        console.print(render_table(f"Table {i} ({tid})", entries))


def _apply_filter_command(session: SearchSession, line: str) -> bool:
    """
    Handle one filter command such as "q data", "g 1 2", "d Mon", "t 3 4",
    "m CS", "c 3" or "clear". Returns False if the line is not a filter command.
    """
    key, _, rest = line.partition(" ")
    values = rest.split()

    try:
        if key == "q":
            session.change(query=rest.strip())
        elif key == "g":
            session.change(grades=[int(v) for v in values])
        elif key == "d":
            session.change(days=values)
        elif key == "t":
            session.change(times=[int(v) for v in values])
        elif key == "m":
            session.change(majors=[rest.strip()] if rest.strip() else [])
        elif key == "c":
            session.change(credits=int(values[0]) if values else None)
        elif key == "clear":
            session.change(query="", grades=(), days=(), times=(), majors=(), credits=None)
        else:
            return False
    except ValueError:
        _println("Numbers expected.")
    return True


def _flow_search_add(store: ScheduleStore, session: SearchSession) -> None:
    """
    Open the search view for one table (optionally pre-filtered by a
    day/time cell), refine filters, reveal more pages and add a lecture.
    """
    table_id = _pick_table(store)
    if table_id is None:
        return

    day = _prompt(f"Day cell {list(DEFAULT_GRID.day_labels)} [blank = any]: ").strip() or None
    time = _ask_int("Time slot 1-24 [blank = any]: ")
    session.open(table_id, day, time)

    try:
        while session.is_open:
            visible = session.visible
            if visible:
                console.print(render_lectures(visible, numbered=True))
            _println(
                f"Results: {len(session.filtered)} (showing {len(visible)}, page {session.page}/{session.last_page})"
            )

            line = _prompt(
                "Filter (q text | g grades | d days | t times | m major | c credits | clear), "
                "'more', number to add [blank = back]: "
            ).strip()
            if not line:
                return
            if line == "more":
                if not session.on_sentinel_visible():
                    _println("No more results.")
                continue
            if line.isdigit():
                i = int(line)
                if not (1 <= i <= len(visible)):
                    _println("Out of range.")
                    continue
                lecture = visible[i - 1]
                _report(session.add(lecture), f"Added: {lecture.id} {lecture.title}")
                return
            if not _apply_filter_command(session, line):
                _println("Unknown command.")
    finally:
        session.close()


def _flow_move(store: ScheduleStore) -> None:
    table_id = _pick_table(store)
    if table_id is None:
        return
    _flow_show_one(store, table_id)

    index = _ask_int("Block # to move [blank = back]: ")
    if index is None:
        return
    days = _ask_int("Move by days (e.g. 2 or -1) [blank = 0]: ") or 0
    slots = _ask_int("Move by time slots (e.g. 1 or -2) [blank = 0]: ") or 0

    # simulate the drag library: encoded id plus a pixel delta
    cell = DEFAULT_GRID.cell
    drag_id = DragId(table_id, index).encode()
    outcome = store.dispatch(drag_reducer(drag_id, Delta(days * cell.width, slots * cell.height)))
    _report(outcome, "Moved.")


def _flow_show_one(store: ScheduleStore, table_id: str) -> None:
    console.print(render_table(table_id, store.state[table_id]))


def _flow_delete_at(store: ScheduleStore) -> None:
    table_id = _pick_table(store)
    if table_id is None:
        return

    day = _prompt("Day: ").strip()
    time = _ask_int("Time slot: ")
    if not day or time is None:
        return
    _report(store.dispatch(remove_at_reducer(table_id, day, time)), "Deleted.")


def _flow_duplicate(store: ScheduleStore) -> None:
    table_id = _pick_table(store)
    if table_id is None:
        return
    _report(store.dispatch(duplicate_reducer(table_id)), "Duplicated.")


def _flow_remove(store: ScheduleStore) -> None:
    if not can_remove(store.state):
        _println("The last table cannot be removed.")
        return
    table_id = _pick_table(store)
    if table_id is None:
        return
    _report(store.dispatch(remove_reducer(table_id)), "Removed.")
