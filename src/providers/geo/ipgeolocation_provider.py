"""ipgeolocation.io provider implementing IGeoProvider.

The tertiary, keyed source.  Without ``IPGEOLOCATION_API_KEY`` the provider
reports itself unavailable and the chain never calls it.
"""

from __future__ import annotations

import httpx
import structlog

from src.interfaces.geo_provider import IGeoProvider
from src.providers.geo.http import DEFAULT_TIMEOUT_SECONDS, build_client, fetch
from src.utils.errors import ProviderResponseError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "https://api.ipgeolocation.io"


class IpGeolocationProvider(IGeoProvider):
    """Country lookup against ipgeolocation.io's ``/ipgeo`` endpoint.

    Only the ``country_code2`` field is requested and read.
    """

    def __init__(
        self,
        api_key: str,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = http_client or build_client()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def build_url(self, address: str) -> str:
        return (
            f"{self._base_url}/ipgeo?apiKey={self._api_key}"
            f"&ip={address}&fields=country_code2"
        )

    async def lookup_country(self, address: str) -> str | None:
        """Return ``country_code2`` for *address*, or ``None``.

        The chain already skips this provider when :meth:`is_available` is
        false; the key check here guards direct callers, which get ``None``
        without a request being sent.
        """
        if not self._api_key:
            return None

        response = await fetch(
            self._client,
            self.build_url(address),
            timeout=self._timeout,
            provider_name=self.get_provider_name(),
            address=address,
        )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderResponseError(
                message=f"Invalid JSON for {address}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not isinstance(data, dict):
            logger.debug("ipgeolocation_no_result", address=address)
            return None
        return data.get("country_code2") or None

    def get_provider_name(self) -> str:
        return "ipgeolocation"

    def is_available(self) -> bool:
        return bool(self._api_key)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
