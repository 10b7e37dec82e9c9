"""Custom exception hierarchy for ipcountry.

All library exceptions inherit from :class:`GeoIPError`, which carries an
optional ``provider_name`` so log handlers can tell which geolocation
source (e.g. "ip-api", "ipinfo", "ipgeolocation") caused the failure.

    GeoIPError  (base -- catch-all for any ipcountry error)
    +-- ProviderUnavailableError (timeout, connection error, HTTP error status)
    +-- ProviderResponseError    (payload could not be decoded)
    +-- ConfigurationError       (startup / invalid config)

Provider errors never escape :class:`~src.services.provider_chain.ProviderChain`;
the chain logs them and moves on to the next provider.  Only
``ConfigurationError`` reaches the host application, at startup.
"""


class GeoIPError(Exception):
    """Base exception for all ipcountry errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[ipinfo] Timeout looking up 8.8.8.8``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------

class ProviderUnavailableError(GeoIPError):
    """Raised when a geolocation provider times out or cannot be reached.

    Also covers non-2xx HTTP responses.  The provider chain catches this and
    tries the next provider in the configured order.
    """

    def __init__(
        self,
        message: str = "Geolocation provider is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ProviderResponseError(GeoIPError):
    """Raised when a provider answers with a payload that cannot be decoded."""

    def __init__(
        self,
        message: str = "Malformed geolocation provider response",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(GeoIPError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
