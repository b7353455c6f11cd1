"""
Parsing (raw schedule descriptor -> structured fragments) and time slot labels.

A lecture's `schedule` field is a compact string such as

    Mon1~2(101)<p>Wed3~4(Science Hall 202)

- fragments are separated by <p> markup
- each fragment is: day label, first slot, optional "~last slot", optional "(room)"
- the range is filled in, ascending: "1~3" -> (1, 2, 3)

Unparsable fragments are skipped, and so are fragments whose slots fall
outside 1-24. An empty descriptor yields no fragments.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional

from bs4 import BeautifulSoup

from mytimetable.config import MAX_TIME_SLOT, MIN_TIME_SLOT
from mytimetable.model import ScheduleFragment


# ---------------------------------------------------------------------------
# Descriptor parsing
# ---------------------------------------------------------------------------

FRAGMENT_RE = re.compile(
    r"^\s*(?P<day>[^\d\s(]+)\s*"
    r"(?P<start>\d+)(?:\s*~\s*(?P<end>\d+))?\s*"
    r"(?:\((?P<room>.*)\))?\s*$"
)


def _split_fragments(raw: str) -> list[str]:
    """
    Split a descriptor on its <p> markup into plain-text fragment strings.
    """
    if "<" not in raw:
        return [raw]
    soup = BeautifulSoup(raw, "html.parser")
    return soup.get_text("\n").splitlines()


def parse_fragment(text: str) -> Optional[ScheduleFragment]:
    """
    Parses exactly one fragment, e.g. "Tue3~4(101)".
    """
    m = FRAGMENT_RE.match(text or "")
    if not m:
        return None

    start = int(m.group("start"))
    end = int(m.group("end")) if m.group("end") else start
    if end < start:
        return None
    # blocks must fit the grid
    if start < MIN_TIME_SLOT or end > MAX_TIME_SLOT:
        return None

    return ScheduleFragment(
        day=m.group("day"),
        range=tuple(range(start, end + 1)),
        room=(m.group("room") or "").strip(),
    )


@lru_cache(maxsize=4096)
def parse_schedule(raw: Optional[str]) -> tuple[ScheduleFragment, ...]:
    """
    Parses a whole descriptor into its fragments, in descriptor order.

    Cached: descriptors are immutable strings and the search view parses
    the same catalog over and over while filters change.
    """
    if not raw or not raw.strip():
        return ()

    fragments: list[ScheduleFragment] = []
    for text in _split_fragments(raw):
        if not text.strip():
            continue
        fragment = parse_fragment(text)
        if fragment:
            fragments.append(fragment)
    return tuple(fragments)


# ---------------------------------------------------------------------------
# Time slot labels
# ---------------------------------------------------------------------------

DAY_START_MINUTES = 9 * 60

# slots 1-18: 30 minute periods from 09:00
DAYTIME_SLOTS = 18
DAYTIME_MINUTES = 30

# slots 19-24: 50 minute periods, one every 55 minutes from 18:00
EVENING_STEP_MINUTES = 55
EVENING_LENGTH_MINUTES = 50


def fill2(n: int) -> str:
    return f"{n:02d}"


def _hhmm(minutes: int) -> str:
    return f"{fill2(minutes // 60)}:{fill2(minutes % 60)}"


def time_slot_label(slot: int) -> str:
    """
    Wall-clock span of a time slot, e.g. 1 -> "09:00~09:30", 19 -> "18:00~18:50".
    """
    if not MIN_TIME_SLOT <= slot <= MAX_TIME_SLOT:
        raise ValueError(f"time slot out of range: {slot}")

    if slot <= DAYTIME_SLOTS:
        start = DAY_START_MINUTES + (slot - 1) * DAYTIME_MINUTES
        return f"{_hhmm(start)}~{_hhmm(start + DAYTIME_MINUTES)}"

    evening_start = DAY_START_MINUTES + DAYTIME_SLOTS * DAYTIME_MINUTES
    start = evening_start + (slot - DAYTIME_SLOTS - 1) * EVENING_STEP_MINUTES
    return f"{_hhmm(start)}~{_hhmm(start + EVENING_LENGTH_MINUTES)}"


TIME_SLOT_LABELS = tuple(time_slot_label(s) for s in range(MIN_TIME_SLOT, MAX_TIME_SLOT + 1))
