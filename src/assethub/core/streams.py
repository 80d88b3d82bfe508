"""Stream-to-batch adaptation for backend listings.

Some backends emit listing entries one at a time (a push stream with
separate completion and error signals, or a paginated async iterator).
The StorageProvider contract returns one completed list, so listings are
accumulated here and resolved only when the stream completes.

Usage:
    collector: ListingCollector[str] = ListingCollector()
    collector.push("a.png")
    collector.complete()
    entries = await collector.result()

    # Or drive it from an async iterator
    entries = await collect_listing(iter_keys())
"""

import asyncio
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

T = TypeVar("T")


class ListingCollector(Generic[T]):
    """Accumulate pushed entries until the stream completes or fails.

    State is owned by the call that created the collector. The first
    terminal signal wins: entries pushed after completion or failure are
    ignored, and a failure discards everything buffered so far.

    Must be created inside a running event loop. Producers on other
    threads deliver signals with loop.call_soon_threadsafe.
    """

    def __init__(self) -> None:
        self._entries: list[T] = []
        self._future: asyncio.Future[list[T]] = asyncio.get_running_loop().create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def push(self, entry: T) -> None:
        if self._future.done():
            return
        self._entries.append(entry)

    def fail(self, exc: BaseException) -> None:
        if self._future.done():
            return
        self._entries.clear()
        self._future.set_exception(exc)

    def complete(self) -> None:
        if self._future.done():
            return
        entries, self._entries = self._entries, []
        self._future.set_result(entries)

    async def result(self) -> list[T]:
        """Wait for the stream to finish.

        Returns:
            Every entry pushed before completion, in push order

        Raises:
            The first error the stream reported
        """
        return await self._future


async def collect_listing(stream: AsyncIterator[T]) -> list[T]:
    """Drain an async iterator into a list through a ListingCollector."""
    collector: ListingCollector[T] = ListingCollector()
    try:
        async for entry in stream:
            collector.push(entry)
    except Exception as exc:
        collector.fail(exc)
    else:
        collector.complete()
    return await collector.result()
