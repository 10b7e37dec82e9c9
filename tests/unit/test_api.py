"""Tests for the FastAPI dependencies and the /geoip router."""

from __future__ import annotations

from typing import Callable
from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import ClientCountryDep
from src.main import attach_geoip
from src.services.geo_resolver import GeoResolver
from src.utils.errors import ProviderUnavailableError

MakeProvider = Callable[..., MagicMock]
MakeResolver = Callable[..., GeoResolver]


@pytest.fixture
def primary(make_geo_provider: MakeProvider) -> MagicMock:
    return make_geo_provider("ip-api", result="US")


@pytest.fixture
def client(primary: MagicMock, make_resolver: MakeResolver) -> TestClient:
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(country: ClientCountryDep) -> dict:
        return {"country": country}

    attach_geoip(app, make_resolver(primary))
    return TestClient(app)


class TestGeoipRoutes:
    def test_lookup_address(self, client: TestClient) -> None:
        response = client.get("/geoip/lookup/8.8.8.8")
        assert response.status_code == 200
        assert response.json() == {"address": "8.8.8.8", "country_code": "US"}

    def test_lookup_private_address_is_null(self, client: TestClient, primary: MagicMock) -> None:
        response = client.get("/geoip/lookup/192.168.1.1")
        assert response.status_code == 200
        assert response.json()["country_code"] is None
        primary.lookup_country.assert_not_awaited()

    def test_me_uses_forwarded_header(self, client: TestClient, primary: MagicMock) -> None:
        response = client.get("/geoip/me", headers={"X-Forwarded-For": "1.2.3.4, 5.6.6.6"})
        assert response.json() == {"address": "1.2.3.4", "country_code": "US"}
        primary.lookup_country.assert_awaited_once_with("1.2.3.4")

    def test_cache_stats_and_clear(self, client: TestClient) -> None:
        client.get("/geoip/lookup/8.8.8.8")

        stats = client.get("/geoip/cache").json()
        assert stats["size"] == 1
        assert stats["entries"][0]["address"] == "8.8.8.8"
        assert stats["entries"][0]["country_code"] == "US"

        assert client.delete("/geoip/cache").json() == {"cleared": True}
        assert client.get("/geoip/cache").json() == {"size": 0, "entries": []}

    def test_provider_status_lists_failures(
        self, client: TestClient, primary: MagicMock
    ) -> None:
        primary.lookup_country.side_effect = ProviderUnavailableError("down", provider_name="ip-api")

        assert client.get("/geoip/lookup/8.8.8.8").json()["country_code"] is None

        body = client.get("/geoip/providers").json()
        assert body["providers"] == ["ip-api"]
        assert body["recent_failures"][0]["provider"] == "ip-api"
        assert body["recent_failures"][0]["address"] == "8.8.8.8"


class TestDependencies:
    def test_client_country_dependency(self, client: TestClient) -> None:
        response = client.get("/whoami", headers={"X-Real-IP": "81.2.69.142"})
        assert response.json() == {"country": "US"}

    def test_missing_resolver_is_503(self) -> None:
        app = FastAPI()

        @app.get("/whoami")
        async def whoami(country: ClientCountryDep) -> dict:
            return {"country": country}

        response = TestClient(app).get("/whoami")
        assert response.status_code == 503
