"""Ordered fallback chain over IP geolocation providers.

Providers are tried in the order supplied at construction time.  The first
one that returns a country code wins.  The order encodes cost and quota
preference (free public sources before keyed ones) and is never shuffled.

Provider failures are non-fatal: every exception is logged, recorded in a
bounded ring of :class:`~src.models.geo.ProviderFailure` entries for
diagnostics, and the chain moves on.  ``resolve`` therefore never raises;
its worst case is ``None``.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from src.interfaces.geo_provider import IGeoProvider
from src.models.geo import ProviderFailure
from src.utils.logging import get_logger

_DEFAULT_FAILURE_HISTORY = 50


class ProviderChain:
    """Try each configured :class:`IGeoProvider` until one yields a code."""

    def __init__(
        self,
        providers: Sequence[IGeoProvider],
        failure_history: int = _DEFAULT_FAILURE_HISTORY,
    ) -> None:
        self._providers = tuple(providers)
        self._failures: deque[ProviderFailure] = deque(maxlen=failure_history)
        self._logger = get_logger(__name__)

    async def resolve(self, address: str) -> str | None:
        """Return the first country code any provider finds for *address*."""
        for provider in self._providers:
            name = provider.get_provider_name()

            # Unconfigured providers are skipped before any request and
            # are not counted as failures.
            if not provider.is_available():
                self._logger.debug("geoip_provider_skipped", provider=name, address=address)
                continue

            try:
                country_code = await provider.lookup_country(address)
            except Exception as exc:
                self._failures.append(
                    ProviderFailure(provider=name, address=address, error=str(exc))
                )
                self._logger.warning(
                    "geoip_provider_failed",
                    provider=name,
                    address=address,
                    error=str(exc),
                )
                continue

            if country_code:
                self._logger.debug(
                    "geoip_provider_resolved",
                    provider=name,
                    address=address,
                    country_code=country_code,
                )
                return country_code

            self._logger.debug("geoip_provider_no_result", provider=name, address=address)

        return None

    def provider_names(self) -> list[str]:
        """Names of the providers that will actually be tried, in order."""
        return [p.get_provider_name() for p in self._providers if p.is_available()]

    def recent_failures(self) -> list[ProviderFailure]:
        """Most recent swallowed provider failures, oldest first."""
        return list(self._failures)
