"""
Single source of truth for the table collection.

The store is an ordinary object handed to whoever needs it (search session,
interactive UI, tests). It never mutates a collection; a reducer returns an
Outcome and the store swaps in the new collection only when it is a
different object, then notifies subscribers.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from mytimetable.model import Collection, Outcome
from mytimetable.tables import initial_collection

logger = logging.getLogger(__name__)

Reducer = Callable[[Collection], Outcome]
Listener = Callable[[Collection, Collection], None]


class ScheduleStore:
    def __init__(self, initial: Optional[Collection] = None) -> None:
        self._state: Collection = initial if initial is not None else initial_collection()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> Collection:
        return self._state

    def dispatch(self, reducer: Reducer) -> Outcome:
        """
        Run `reducer` on the current state and commit its result.
        """
        previous = self._state
        outcome = reducer(previous)
        if outcome.collection is previous:
            return outcome

        self._state = outcome.collection
        logger.debug("state committed (%s)", outcome.status.value)
        for listener in list(self._listeners):
            listener(previous, self._state)
        return outcome

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(previous, current)` after every commit. Returns an unsubscribe function.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
