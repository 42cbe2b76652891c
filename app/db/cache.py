"""
In-memory query cache.

The console keeps no durable state: every collection it shows is a
read-through copy of what the connectors returned, stored here under a
stable key. A successful mutation invalidates exactly the keys it
affects, so the next read of those keys goes back to the connector.
Reads never invalidate anything.

Entries have no expiry unless a refetch interval is given when reading.
The pages read connector collections with the configured collection
interval (0 by default, so each render polls the connector again) and
health results every 30 seconds. Concurrent reads of the same key share a
single remote call.

Usage example:
    >>> cache = QueryCache()
    >>> assets = await cache.fetch(ASSETS, client.get_assets)
    >>> cache.invalidate(ASSETS)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# Collection keys
# ------------------------------------------------------------------------------

ASSETS = "assets"
POLICIES = "policies"
CONTRACT_DEFINITIONS = "contract-definitions"
CONTRACT_NEGOTIATIONS = "contract-negotiations"
TRANSFER_PROCESSES = "transfer-processes"
PROVIDER_HEALTH = "provider-health"
CONSUMER_HEALTH = "consumer-health"


@dataclass
class CacheEntry:
    data: Any
    fetched_at: float
    stale: bool = False


class QueryCache:
    """
    Keyed store of the last known value of each remote collection.

    Args:
        clock (Callable[[], float]): Monotonic clock, replaceable in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, asyncio.Future] = {}
        self._generations: Dict[str, int] = {}

    async def fetch(
        self,
        key: str,
        fetcher: Callable[[], Awaitable[Any]],
        refetch_interval: Optional[float] = None,
    ) -> Any:
        """
        Returns the cached value of `key`, calling `fetcher` when needed.

        The fetcher runs when the key has never been read, was invalidated,
        or is older than `refetch_interval` seconds. A failed fetch leaves the
        previous entry in place and propagates the error.

        Args:
            key (str): Collection key.
            fetcher (Callable): Coroutine function performing the remote read.
            refetch_interval (float, optional): Maximum age of a fresh entry.

        Returns:
            Any: The collection as returned by the fetcher.
        """

        entry = self._entries.get(key)
        if entry is not None and self._is_fresh(entry, refetch_interval):
            return entry.data

        inflight = self._inflight.get(key)
        if inflight is not None:
            return await asyncio.shield(inflight)

        generation = self._generations.get(key, 0)
        future = asyncio.ensure_future(fetcher())
        self._inflight[key] = future
        # settles even when every waiting caller has been cancelled
        future.add_done_callback(lambda done: self._settle(key, done, generation))
        return await asyncio.shield(future)

    def _settle(self, key: str, future: asyncio.Future, generation: int) -> None:
        if self._inflight.get(key) is future:
            del self._inflight[key]
        if future.cancelled():
            return

        error = future.exception()
        if error is not None:
            logger.debug("Fetching %s failed: %r", key, error)
            return

        # an invalidation that raced this read keeps the fresh data marked stale
        stale = self._generations.get(key, 0) != generation
        self._entries[key] = CacheEntry(data=future.result(), fetched_at=self._clock(), stale=stale)
        logger.debug("Fetched %s", key)

    def _is_fresh(self, entry: CacheEntry, refetch_interval: Optional[float]) -> bool:
        if entry.stale:
            return False
        if refetch_interval is None:
            return True
        return self._clock() - entry.fetched_at < refetch_interval

    def invalidate(self, key: str) -> None:
        """
        Marks `key` stale so the next read refetches it.

        The last known value stays readable through `peek`.
        """

        self._generations[key] = self._generations.get(key, 0) + 1
        entry = self._entries.get(key)
        if entry is not None:
            entry.stale = True
        logger.debug("Invalidated %s", key)

    def peek(self, key: str, default: Any = None) -> Any:
        """Last known value of `key`, without any remote call."""

        entry = self._entries.get(key)
        return entry.data if entry is not None else default

    def is_stale(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def is_fetching(self, key: str) -> bool:
        return key in self._inflight

    def clear(self) -> None:
        self._entries.clear()
        self._generations.clear()
