"""ipinfo.io provider implementing IGeoProvider.

The secondary source.  ``/{ip}/country`` answers with a bare country code
as plain text.  A token is optional; without one the free anonymous quota
applies.
"""

from __future__ import annotations

import httpx
import structlog

from src.interfaces.geo_provider import IGeoProvider
from src.providers.geo.http import DEFAULT_TIMEOUT_SECONDS, build_client, fetch

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_BASE_URL = "https://ipinfo.io"


class IpInfoProvider(IGeoProvider):
    """Country lookup against ipinfo.io's plain-text country endpoint.

    The trimmed body counts as a result only when it is exactly two
    characters long; anything else (error pages, ``"undefined"``) is
    "no result".
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        token: str = "",
        base_url: str = _DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or build_client()
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    def build_url(self, address: str) -> str:
        url = f"{self._base_url}/{address}/country"
        if self._token:
            url = f"{url}?token={self._token}"
        return url

    async def lookup_country(self, address: str) -> str | None:
        response = await fetch(
            self._client,
            self.build_url(address),
            timeout=self._timeout,
            provider_name=self.get_provider_name(),
            address=address,
        )

        country_code = (response.text or "").strip()
        if len(country_code) != 2:
            logger.debug("ipinfo_no_result", address=address, body_length=len(country_code))
            return None
        return country_code

    def get_provider_name(self) -> str:
        return "ipinfo"

    def is_available(self) -> bool:
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
