"""Geolocation cache and diagnostics models.

Defines Pydantic v2 models for cache entries, cache statistics snapshots,
and provider failure records.  All models use frozen config: a cache refresh
replaces the entry rather than mutating it.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class CacheEntry(BaseModel):
    """One resolved address held by :class:`~src.providers.cache.memory_cache.CountryCache`.

    ``inserted_at`` is in seconds on the cache's own clock (``time.time`` by
    default), so it is only comparable with values from that same clock.
    """

    model_config = ConfigDict(frozen=True)

    address: str
    country_code: str
    inserted_at: float


class CacheEntryStats(BaseModel):
    """Read-only view of a cache entry, with its age at snapshot time."""

    model_config = ConfigDict(frozen=True)

    address: str
    country_code: str
    age_ms: int = Field(ge=0)


class CacheStats(BaseModel):
    """Snapshot returned by ``CountryCache.stats()``.

    Expired-but-unread entries are included; the snapshot never purges.
    """

    model_config = ConfigDict(frozen=True)

    size: int = Field(ge=0)
    entries: list[CacheEntryStats] = Field(default_factory=list)


class ProviderFailure(BaseModel):
    """A provider error swallowed by the provider chain, kept for diagnostics."""

    model_config = ConfigDict(frozen=True)

    provider: str
    address: str
    error: str
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=timezone.utc)  # noqa: UP017
    )
