"""
Incremental reveal of search results.

Paginator keeps a window `items[0 : page * page_size]` that only grows, one
page per visibility trigger, and never past the last page.

SentinelObserver is the hook for the host's "sentinel element scrolled into
view" notification. Once disconnected it ignores late notifications, so a
window that has been discarded can no longer be advanced.
"""

from __future__ import annotations

import math
from typing import Callable, Generic, Optional, Protocol, Sequence, TypeVar

from mytimetable.config import PAGE_SIZE

T = TypeVar("T")


class Paginator(Generic[T]):
    def __init__(self, items: Sequence[T] = (), page_size: int = PAGE_SIZE) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._items = items
        self._page_size = page_size
        self._page = 1

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total(self) -> int:
        return len(self._items)

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(len(self._items) / self._page_size))

    @property
    def visible(self) -> Sequence[T]:
        return self._items[: self._page * self._page_size]

    @property
    def has_more(self) -> bool:
        return self._page < self.last_page

    def advance(self) -> bool:
        """
        Reveal one more page. Returns False (and changes nothing) on the last page.
        """
        if not self.has_more:
            return False
        self._page += 1
        return True

    def reset(self, items: Optional[Sequence[T]] = None) -> None:
        if items is not None:
            self._items = items
        self._page = 1


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


# (delay_seconds, callback) -> handle; asyncio's loop.call_later fits this shape
Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class _FiredHandle:
    def cancel(self) -> None:
        pass


def run_immediately(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """
    Synchronous scheduler: ignores the delay and runs `callback` now.
    """
    callback()
    return _FiredHandle()


class SentinelObserver:
    def __init__(self, on_visible: Callable[[], None]) -> None:
        self._on_visible = on_visible
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self._connected = False

    def notify(self, is_visible: bool = True) -> bool:
        """
        Deliver one visibility change. Returns whether the callback ran.
        """
        if not self._connected or not is_visible:
            return False
        self._on_visible()
        return True
