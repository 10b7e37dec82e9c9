"""ip-api.com provider implementing IGeoProvider.

The primary source: free, unauthenticated, plain HTTP.  The JSON endpoint
is asked for just two fields, ``countryCode`` and ``status``.
"""

from __future__ import annotations

import httpx
import structlog

from src.interfaces.geo_provider import IGeoProvider
from src.providers.geo.http import DEFAULT_TIMEOUT_SECONDS, build_client, fetch
from src.utils.errors import ProviderResponseError

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "http://ip-api.com"


class IpApiProvider(IGeoProvider):
    """Country lookup against ip-api.com's ``/json/{ip}`` endpoint.

    A result is returned only when the body reports ``"status": "success"``
    and carries a non-empty ``countryCode``.  ``"status": "fail"`` (reserved
    range, invalid query, ...) is "no result", not an error.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or build_client()
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def build_url(self, address: str) -> str:
        return f"{self._base_url}/json/{address}?fields=countryCode,status"

    async def lookup_country(self, address: str) -> str | None:
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

        if not isinstance(data, dict) or data.get("status") != "success":
            logger.debug("ip_api_no_result", address=address)
            return None

        return data.get("countryCode") or None

    def get_provider_name(self) -> str:
        return "ip-api"

    def is_available(self) -> bool:
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
