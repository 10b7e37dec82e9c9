"""Tests for the composition-root factories in src.main."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI

from src.config.settings import Settings
from src.main import attach_geoip, build_provider_chain, build_resolver
from src.services.geo_resolver import GeoResolver


def _settings(**overrides) -> Settings:
    defaults = {
        "ipinfo_token": "",
        "ipgeolocation_api_key": "",
        "geoip_timeout_seconds": 3.0,
        "geoip_cache_ttl_seconds": 86400,
        "geoip_coalesce_lookups": False,
    }
    defaults.update(overrides)
    return Settings(**defaults)


class TestBuildProviderChain:
    def test_default_order_without_key(self) -> None:
        chain = build_provider_chain(_settings(), AsyncMock())
        assert chain.provider_names() == ["ip-api", "ipinfo"]

    def test_keyed_provider_last(self) -> None:
        chain = build_provider_chain(_settings(ipgeolocation_api_key="k"), AsyncMock())
        assert chain.provider_names() == ["ip-api", "ipinfo", "ipgeolocation"]

    @pytest.mark.asyncio
    async def test_settings_flow_into_providers(self) -> None:
        client = AsyncMock()
        client.get.side_effect = RuntimeError("stop")
        chain = build_provider_chain(
            _settings(ipinfo_token="tok", geoip_timeout_seconds=1.0, ip_api_base_url="http://x"),
            client,
        )

        await chain.resolve("8.8.8.8")

        urls = [call.args[0] for call in client.get.await_args_list]
        assert urls == [
            "http://x/json/8.8.8.8?fields=countryCode,status",
            "https://ipinfo.io/8.8.8.8/country?token=tok",
        ]
        assert all(call.kwargs["timeout"] == 1.0 for call in client.get.await_args_list)


class TestBuildResolver:
    @pytest.mark.asyncio
    async def test_shared_client_is_not_closed(self) -> None:
        client = AsyncMock()
        resolver = build_resolver(_settings(), http_client=client)
        assert isinstance(resolver, GeoResolver)

        await resolver.aclose()
        client.aclose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self) -> None:
        async with build_resolver(_settings(geoip_coalesce_lookups=True)) as resolver:
            assert resolver.provider_names() == ["ip-api", "ipinfo"]
            assert resolver.get_cache_stats().size == 0


class TestAttachGeoip:
    def test_stores_resolver_and_mounts_routes(self) -> None:
        app = FastAPI()
        resolver = build_resolver(_settings(), http_client=AsyncMock())

        attach_geoip(app, resolver)

        assert app.state.geo_resolver is resolver
        paths = app.openapi()["paths"]
        assert "/geoip/cache" in paths
        assert "/geoip/lookup/{address}" in paths

    def test_routes_optional(self) -> None:
        app = FastAPI()
        attach_geoip(app, build_resolver(_settings(), http_client=AsyncMock()), include_routes=False)
        assert not any(path.startswith("/geoip") for path in app.openapi()["paths"])
