"""In-memory country-code cache with lazy, read-time expiry.

One :class:`CountryCache` lives for the whole process, owned by the
:class:`~src.services.geo_resolver.GeoResolver`.  Nothing is persisted.

Expiry is lazy: an entry older than the TTL is deleted only when that same
address is read.  There is no sweeper task, and ``stats()`` reports expired
entries as-is.  The mapping is unbounded; its size tracks the number of
distinct public addresses seen within the process lifetime.
"""

from __future__ import annotations

import time
from typing import Callable

import structlog

from src.models.geo import CacheEntry, CacheEntryStats, CacheStats

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_TTL_SECONDS: float = 24 * 60 * 60


class CountryCache:
    """Address → country-code mapping with a fixed time-to-live.

    Parameters
    ----------
    ttl_seconds:
        Maximum entry age.  An entry is valid while ``now - inserted_at < ttl``.
    clock:
        Returns the current time in seconds.  Injected by tests.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, address: str) -> str | None:
        """Return the cached code for *address*, purging it if expired."""
        entry = self._entries.get(address)
        if entry is None:
            return None

        if self._clock() - entry.inserted_at < self._ttl:
            return entry.country_code

        del self._entries[address]
        logger.debug("geoip_cache_expired", address=address)
        return None

    def put(self, address: str, country_code: str) -> None:
        """Store *country_code* for *address*, replacing any existing entry."""
        self._entries[address] = CacheEntry(
            address=address,
            country_code=country_code,
            inserted_at=self._clock(),
        )

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> CacheStats:
        """Snapshot of size and per-entry age.  Does not expire anything."""
        now = self._clock()
        return CacheStats(
            size=len(self._entries),
            entries=[
                CacheEntryStats(
                    address=entry.address,
                    country_code=entry.country_code,
                    age_ms=max(0, int((now - entry.inserted_at) * 1000)),
                )
                for entry in self._entries.values()
            ],
        )

    def __len__(self) -> int:
        return len(self._entries)
