"""Shared HTTP helper for geolocation providers.

Maps httpx failures onto the library's error hierarchy so the provider chain
sees one of two exception types regardless of which source failed.
"""

from __future__ import annotations

import httpx

from src.utils.errors import ProviderUnavailableError

DEFAULT_TIMEOUT_SECONDS = 3.0


async def fetch(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float,
    provider_name: str,
    address: str,
) -> httpx.Response:
    """GET *url* with a per-call *timeout* and return the 2xx response."""
    try:
        response = await client.get(url, timeout=timeout)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        raise ProviderUnavailableError(
            message=f"Timeout looking up {address}: {exc}",
            provider_name=provider_name,
        ) from exc
    except httpx.HTTPStatusError as exc:
        raise ProviderUnavailableError(
            message=f"HTTP {exc.response.status_code} looking up {address}",
            provider_name=provider_name,
        ) from exc
    except httpx.HTTPError as exc:
        raise ProviderUnavailableError(
            message=f"HTTP error looking up {address}: {exc}",
            provider_name=provider_name,
        ) from exc
    return response


def build_client() -> httpx.AsyncClient:
    """Client used when a provider is constructed without a shared one."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(DEFAULT_TIMEOUT_SECONDS),
        headers={"User-Agent": "ipcountry/0.1", "Accept": "application/json, text/plain"},
    )
