"""
construction_tracker.db.live

Table-level change notification and live (continuously updated) queries.

Responsibilities:
- Track which tables each live query depends on.
- Fan out one invalidation per committed write to every affected subscriber.
- Re-run invalidated queries and push fresh snapshots to their consumers.

Usage:

    async with dao.observe_by_project("p1") as snapshots:
        async for rows in snapshots:
            ...

Leaving the `async with` block (or closing the iterator) releases the
subscription immediately.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator, AsyncIterator, Awaitable, Callable, Iterable
from typing import Any, Generic, TypeVar

from construction_tracker.observability.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class Subscription:
    """A registration for change events on a fixed set of tables."""

    __slots__ = ("tables", "_event")

    def __init__(self, tables: frozenset[str]) -> None:
        self.tables = tables
        self._event = asyncio.Event()

    def invalidate(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        # Several writes between two waits collapse into a single wake-up.
        await self._event.wait()
        self._event.clear()


class InvalidationTracker:
    def __init__(self) -> None:
        self._subscriptions: set[Subscription] = set()

    def subscribe(self, tables: Iterable[str]) -> Subscription:
        sub = Subscription(frozenset(tables))
        self._subscriptions.add(sub)
        log.debug("live_query_subscribed", tables=sorted(sub.tables))
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.discard(sub)
            log.debug("live_query_released", tables=sorted(sub.tables))

    def notify(self, tables: Iterable[str]) -> None:
        """Called once per committed write with every table it touched."""

        changed = frozenset(tables)
        for sub in list(self._subscriptions):
            if sub.tables & changed:
                sub.invalidate()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)


class LiveQuery(Generic[T]):
    """
    A query that yields its current result, then a new result every time a
    write to one of `tables` changes it. Infinite; not restartable once closed
    (enter the same `LiveQuery` again to start a fresh subscription).
    """

    def __init__(
        self,
        tracker: InvalidationTracker,
        tables: Iterable[str],
        fetch: Callable[[], Awaitable[T]],
    ) -> None:
        self._tracker = tracker
        self._tables = frozenset(tables)
        self._fetch = fetch
        # Open `async with` scopes, per task, innermost last.
        self._active: dict[asyncio.Task[Any] | None, list[AsyncGenerator[T, None]]] = {}

    def map(self, fn: Callable[[T], U]) -> LiveQuery[U]:
        """Same subscription semantics, each snapshot transformed by `fn`."""

        fetch = self._fetch

        async def _mapped() -> U:
            return fn(await fetch())

        return LiveQuery(self._tracker, self._tables, _mapped)

    async def first(self) -> T:
        """Single-shot read of the current result, without subscribing."""

        return await self._fetch()

    async def __aenter__(self) -> AsyncIterator[T]:
        iterator = self._snapshots()
        self._active.setdefault(asyncio.current_task(), []).append(iterator)
        return iterator

    async def __aexit__(self, *exc_info: Any) -> None:
        task = asyncio.current_task()
        scopes = self._active[task]
        iterator = scopes.pop()
        if not scopes:
            del self._active[task]
        await iterator.aclose()

    def __aiter__(self) -> AsyncGenerator[T, None]:
        return self._snapshots()

    async def _snapshots(self) -> AsyncGenerator[T, None]:
        # Subscribed on the first step, before the first read: an iterator that
        # is never started holds no subscription.
        sub = self._tracker.subscribe(self._tables)
        sentinel: Any = object()
        last: Any = sentinel
        try:
            while True:
                snapshot = await self._fetch()
                if last is sentinel or snapshot != last:
                    last = snapshot
                    yield snapshot
                await sub.wait()
        finally:
            self._tracker.unsubscribe(sub)


# --- Module Notes -----------------------------------------------------------
# Notifications are table-granular, like SQLite's own change hooks; the
# equality check in `_snapshots` drops wake-ups that did not change the result.
