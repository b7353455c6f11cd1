"""
Search view state: criteria, filtered lectures, the growing result window
and the target table that a picked lecture is added to.

Lifecycle:
- open(table_id, day, time)  -> day/time filters come from the clicked cell,
                                page back to 1, observer armed after a delay
- change(**criteria)         -> refilter, page back to 1, observer re-armed
- on_sentinel_visible()      -> one more page (no-op on the last page)
- add(lecture)               -> lecture placed on the target table, view closed
- close()                    -> pending setup timer cancelled, observer disconnected
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional, Sequence

from mytimetable.config import OBSERVER_SETUP_DELAY, PAGE_SIZE
from mytimetable.model import Condition, FilterCriteria, Lecture, Outcome, rejected
from mytimetable.pagination import Paginator, Scheduler, SentinelObserver, TimerHandle, run_immediately
from mytimetable.search import all_majors, filter_lectures
from mytimetable.store import ScheduleStore
from mytimetable.tables import add_reducer

logger = logging.getLogger(__name__)


class SearchSession:
    def __init__(
        self,
        store: ScheduleStore,
        lectures: Iterable[Lecture] = (),
        scheduler: Scheduler = run_immediately,
        page_size: int = PAGE_SIZE,
        setup_delay: float = OBSERVER_SETUP_DELAY,
    ) -> None:
        self._store = store
        self._scheduler = scheduler
        self._setup_delay = setup_delay

        self._lectures: tuple[Lecture, ...] = tuple(lectures)
        self._majors = all_majors(self._lectures)
        self._criteria = FilterCriteria()
        self._filtered = filter_lectures(self._lectures, self._criteria)
        self._paginator: Paginator[Lecture] = Paginator(self._filtered, page_size)

        self._is_open = False
        self._table_id: Optional[str] = None
        self._observer: Optional[SentinelObserver] = None
        self._pending: Optional[TimerHandle] = None

    # -- read-only view -----------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def table_id(self) -> Optional[str]:
        return self._table_id

    @property
    def criteria(self) -> FilterCriteria:
        return self._criteria

    @property
    def lectures(self) -> tuple[Lecture, ...]:
        return self._lectures

    @property
    def majors(self) -> list[str]:
        return self._majors

    @property
    def filtered(self) -> list[Lecture]:
        return self._filtered

    @property
    def visible(self) -> Sequence[Lecture]:
        return self._paginator.visible

    @property
    def page(self) -> int:
        return self._paginator.page

    @property
    def last_page(self) -> int:
        return self._paginator.last_page

    @property
    def observer(self) -> Optional[SentinelObserver]:
        return self._observer

    @property
    def observing(self) -> bool:
        return self._observer is not None and self._observer.connected

    # -- transitions --------------------------------------------------------

    def open(self, table_id: str, day: Optional[str] = None, time: Optional[int] = None) -> None:
        self._table_id = table_id
        self._is_open = True
        self._criteria = self._criteria.changed(
            days=[day] if day else (),
            times=[time] if time else (),
        )
        self._refilter()

    def close(self) -> None:
        self._is_open = False
        self._teardown()

    def change(self, **fields: Any) -> None:
        """
        Update one or more criteria (query, grades, days, times, majors, credits).
        """
        self._criteria = self._criteria.changed(**fields)
        self._refilter()

    def set_lectures(self, lectures: Iterable[Lecture]) -> None:
        """
        Replace the catalog, e.g. once both partitions have been fetched.
        """
        self._lectures = tuple(lectures)
        self._majors = all_majors(self._lectures)
        self._refilter()

    def on_sentinel_visible(self) -> bool:
        """
        Visibility trigger of the result list sentinel. Returns whether a page was revealed.
        """
        if self._observer is None:
            return False
        before = self._paginator.page
        self._observer.notify(True)
        return self._paginator.page != before

    def add(self, lecture: Lecture) -> Outcome:
        """
        Place `lecture` on the target table and close the view.
        """
        if not self._table_id:
            logger.warning("add: search view has no target table")
            return rejected(self._store.state, Condition.EMPTY_TARGET_TABLE, "no target table")

        outcome = self._store.dispatch(add_reducer(self._table_id, lecture))
        self.close()
        return outcome

    # -- internals ----------------------------------------------------------

    def _refilter(self) -> None:
        self._filtered = filter_lectures(self._lectures, self._criteria)
        self._paginator.reset(self._filtered)
        if self._is_open:
            self._arm()

    def _arm(self) -> None:
        self._teardown()
        handle = self._scheduler(self._setup_delay, self._attach)
        if self._observer is None:
            self._pending = handle

    def _attach(self) -> None:
        self._pending = None
        if not self._is_open:
            return
        observer = SentinelObserver(self._paginator.advance)
        observer.connect()
        self._observer = observer

    def _teardown(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None
