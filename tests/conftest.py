"""Shared pytest fixtures for the ipcountry test suite."""

from __future__ import annotations

import logging
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
import structlog

from src.interfaces.geo_provider import IGeoProvider
from src.providers.cache.memory_cache import CountryCache
from src.services.geo_resolver import GeoResolver
from src.services.provider_chain import ProviderChain
from src.utils.logging import HANDLER_NAME

ONE_DAY = 24 * 60 * 60


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _make_geo_provider(
    name: str,
    *,
    result: str | None = None,
    error: BaseException | None = None,
    available: bool = True,
) -> MagicMock:
    provider = MagicMock(spec=IGeoProvider)
    provider.get_provider_name.return_value = name
    provider.is_available.return_value = available
    provider.lookup_country = AsyncMock(return_value=result, side_effect=error)
    return provider


@pytest.fixture
def make_geo_provider() -> Callable[..., MagicMock]:
    """Factory for mock providers: ``make_geo_provider("ip-api", result="US")``."""
    return _make_geo_provider


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CountryCache:
    return CountryCache(ttl_seconds=ONE_DAY, clock=clock)


@pytest.fixture
def make_resolver(cache: CountryCache) -> Callable[..., GeoResolver]:
    """Build a resolver over the shared fake-clock cache and the given providers."""

    def _build(*providers: IGeoProvider, coalesce: bool = False) -> GeoResolver:
        return GeoResolver(cache=cache, chain=ProviderChain(list(providers)), coalesce=coalesce)

    return _build


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo per-test logging setup (e.g. the CLI's configure_logging call)."""
    root = logging.getLogger()
    level = root.level
    yield
    structlog.reset_defaults()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
    root.setLevel(level)
