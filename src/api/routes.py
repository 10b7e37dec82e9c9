"""Mountable FastAPI router exposing the resolver for diagnostics.

# Endpoint                      Method  Description
# ──────────────────────────────────────────────────────────────────
# /geoip/me                     GET     Country of the calling client
# /geoip/lookup/{address}       GET     Country of an arbitrary address
# /geoip/cache                  GET     Cache size and per-entry age
# /geoip/cache                  DELETE  Empty the cache
# /geoip/providers              GET     Chain order and recent failures

Mounted by :func:`src.main.attach_geoip`.  Lookups never fail with 5xx for
provider problems; an unresolved address answers 200 with a null code.
"""

from __future__ import annotations

from fastapi import APIRouter

from src.api.dependencies import ClientAddressDep, ResolverDep
from src.api.schemas import CacheClearedResponse, CountryLookupResponse, ProviderStatusResponse
from src.models.geo import CacheStats

router = APIRouter(prefix="/geoip", tags=["geoip"])


@router.get("/me", response_model=CountryLookupResponse)
async def lookup_client(resolver: ResolverDep, address: ClientAddressDep) -> CountryLookupResponse:
    country_code = await resolver.resolve(address)
    return CountryLookupResponse(address=address, country_code=country_code)


@router.get("/lookup/{address}", response_model=CountryLookupResponse)
async def lookup_address(address: str, resolver: ResolverDep) -> CountryLookupResponse:
    country_code = await resolver.resolve(address)
    return CountryLookupResponse(address=address, country_code=country_code)


@router.get("/cache", response_model=CacheStats)
async def cache_stats(resolver: ResolverDep) -> CacheStats:
    return resolver.get_cache_stats()


@router.delete("/cache", response_model=CacheClearedResponse)
async def clear_cache(resolver: ResolverDep) -> CacheClearedResponse:
    resolver.clear_cache()
    return CacheClearedResponse()


@router.get("/providers", response_model=ProviderStatusResponse)
async def provider_status(resolver: ResolverDep) -> ProviderStatusResponse:
    return ProviderStatusResponse(
        providers=resolver.provider_names(),
        recent_failures=resolver.recent_failures(),
    )
