"""Pydantic response schemas for the geoip diagnostics router.

Cache snapshots reuse :class:`~src.models.geo.CacheStats` directly; the
models here wrap lookup results and failure listings.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.models.geo import ProviderFailure


class CountryLookupResponse(BaseModel):
    """Result of resolving one address.  ``country_code`` is null when unresolved."""

    address: str | None
    country_code: str | None = None


class ProviderStatusResponse(BaseModel):
    """Configured providers in chain order, plus recent swallowed failures."""

    providers: list[str]
    recent_failures: list[ProviderFailure] = Field(default_factory=list)


class CacheClearedResponse(BaseModel):
    cleared: bool = True
