"""ipcountry composition root.

Wires settings, the shared HTTP client, providers, cache and resolver into
one :class:`~src.services.geo_resolver.GeoResolver`.  The library has no
listener of its own: a hosting FastAPI application calls
:func:`attach_geoip` during startup to expose the resolver to its routes
and dependencies.

Typical host usage::

    resolver = build_resolver()
    attach_geoip(app, resolver)
    ...
    await resolver.aclose()   # on shutdown
"""

from __future__ import annotations

import httpx
import structlog
from fastapi import FastAPI

from src.config.loader import load_settings
from src.config.settings import Settings
from src.interfaces.geo_provider import IGeoProvider
from src.providers.cache.memory_cache import CountryCache
from src.providers.geo.ip_api_provider import IpApiProvider
from src.providers.geo.ipgeolocation_provider import IpGeolocationProvider
from src.providers.geo.ipinfo_provider import IpInfoProvider
from src.services.geo_resolver import GeoResolver
from src.services.provider_chain import ProviderChain
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

_USER_AGENT = "ipcountry/0.1"


def build_provider_chain(app_settings: Settings, http_client: httpx.AsyncClient) -> ProviderChain:
    """Assemble providers in preference order: free sources before keyed ones."""
    timeout = app_settings.geoip_timeout_seconds
    providers: list[IGeoProvider] = [
        IpApiProvider(
            http_client=http_client,
            base_url=app_settings.ip_api_base_url,
            timeout=timeout,
        ),
        IpInfoProvider(
            http_client=http_client,
            token=app_settings.ipinfo_token,
            base_url=app_settings.ipinfo_base_url,
            timeout=timeout,
        ),
        # Without a key this provider reports itself unavailable and the
        # chain skips it before any request is made.
        IpGeolocationProvider(
            api_key=app_settings.ipgeolocation_api_key,
            http_client=http_client,
            base_url=app_settings.ipgeolocation_base_url,
            timeout=timeout,
        ),
    ]
    return ProviderChain(providers)


def build_resolver(
    app_settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> GeoResolver:
    """Construct a ready-to-use resolver.

    When *http_client* is omitted a client is created here and closed by
    ``GeoResolver.aclose()``; a caller-supplied client stays caller-owned.
    """
    app_settings = app_settings or load_settings()

    owned_client: httpx.AsyncClient | None = None
    if http_client is None:
        owned_client = httpx.AsyncClient(
            timeout=httpx.Timeout(app_settings.geoip_timeout_seconds),
            headers={"User-Agent": _USER_AGENT},
        )
        http_client = owned_client

    chain = build_provider_chain(app_settings, http_client)
    cache = CountryCache(ttl_seconds=app_settings.geoip_cache_ttl_seconds)

    _logger.info(
        "geoip_resolver_built",
        providers=chain.provider_names(),
        cache_ttl_seconds=app_settings.geoip_cache_ttl_seconds,
        coalesce=app_settings.geoip_coalesce_lookups,
    )
    return GeoResolver(
        cache=cache,
        chain=chain,
        coalesce=app_settings.geoip_coalesce_lookups,
        http_client=owned_client,
    )


def attach_geoip(app: FastAPI, resolver: GeoResolver, *, include_routes: bool = True) -> None:
    """Expose *resolver* to a host FastAPI app.

    Stores it on ``app.state.geo_resolver`` (read by the dependencies in
    :mod:`src.api.dependencies`) and, unless disabled, mounts the
    diagnostics router under ``/geoip``.
    """
    from src.api.routes import router as geoip_router

    app.state.geo_resolver = resolver
    if include_routes:
        app.include_router(geoip_router)
