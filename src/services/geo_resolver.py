"""IP-to-country resolution service.

Combines the three building blocks in a fixed order:

    1. ``is_non_routable``  -- private / loopback / link-local → ``None``
    2. ``CountryCache``     -- fresh hit → cached code
    3. ``ProviderChain``    -- walk providers; cache and return a code

Absence is never cached.  An address that no provider could resolve is
retried against every provider on its next lookup, so a transient outage
is never remembered for 24 hours.

Concurrency: by default two concurrent lookups of the same uncached address
each walk the chain, and the later cache write wins.  With ``coalesce=True``
they share one in-flight walk instead.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping

import httpx

from src.models.geo import CacheStats, ProviderFailure
from src.providers.cache.memory_cache import CountryCache
from src.services.provider_chain import ProviderChain
from src.utils.address import extract_client_address, is_non_routable
from src.utils.logging import get_logger


class GeoResolver:
    """Resolve client addresses to two-letter country codes.

    Parameters
    ----------
    cache:
        The process-wide result cache.  Owned by this resolver.
    chain:
        Ordered providers consulted on a cache miss.
    coalesce:
        Share one provider walk between concurrent lookups of the same
        address.
    http_client:
        Shared client used by the providers, closed by :meth:`aclose`.
    """

    def __init__(
        self,
        cache: CountryCache,
        chain: ProviderChain,
        *,
        coalesce: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cache = cache
        self._chain = chain
        self._coalesce = coalesce
        self._http_client = http_client
        self._inflight: dict[str, asyncio.Future[str | None]] = {}
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def resolve(self, address: str | None) -> str | None:
        """Return the country code for *address*, or ``None``.

        Never raises for provider problems; those are logged and
        surface as ``None``.
        """
        if is_non_routable(address):
            self._logger.debug("geoip_address_non_routable", address=address)
            return None

        cached = self._cache.get(address)
        if cached is not None:
            self._logger.info("geoip_cache_hit", address=address, country_code=cached)
            return cached

        if not self._coalesce:
            return await self._lookup(address)

        pending = self._inflight.get(address)
        if pending is None:
            pending = asyncio.ensure_future(self._lookup(address))
            self._inflight[address] = pending
            pending.add_done_callback(lambda _: self._inflight.pop(address, None))
        else:
            self._logger.debug("geoip_lookup_coalesced", address=address)
        # shield: a cancelled waiter must not cancel the walk others share.
        return await asyncio.shield(pending)

    async def resolve_request(
        self,
        headers: Mapping[str, str],
        connection_address: str | None = None,
    ) -> str | None:
        """Extract the client address from proxy headers and resolve it."""
        return await self.resolve(extract_client_address(headers, connection_address))

    def clear_cache(self) -> None:
        self._cache.clear()
        self._logger.info("geoip_cache_cleared")

    def get_cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def recent_failures(self) -> list[ProviderFailure]:
        return self._chain.recent_failures()

    def provider_names(self) -> list[str]:
        return self._chain.provider_names()

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()

    async def __aenter__(self) -> GeoResolver:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _lookup(self, address: str) -> str | None:
        country_code = await self._chain.resolve(address)
        if country_code is None:
            self._logger.warning("geoip_all_providers_failed", address=address)
            return None

        self._cache.put(address, country_code)
        self._logger.info("geoip_resolved", address=address, country_code=country_code)
        return country_code
