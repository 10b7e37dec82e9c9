"""Abstract base class for IP geolocation providers.

Defines the single capability every external geolocation source offers:
turn an address into a two-letter country code, or report "no result".
Implementations wrap ip-api.com, ipinfo.io, ipgeolocation.io, or any other
HTTP lookup service; the provider chain stays agnostic about which exist.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementations: IpApiProvider, IpInfoProvider,
# IpGeolocationProvider (src/providers/geo/)
class IGeoProvider(ABC):
    """Contract for one external IP-to-country lookup source."""

    @abstractmethod
    async def lookup_country(self, address: str) -> str | None:
        """Look up the country of *address*.

        Parameters
        ----------
        address:
            A public IP address.  Callers filter out non-routable addresses
            before reaching a provider.

        Returns
        -------
        str or None
            The two-letter country code, or ``None`` when the provider
            answered but had no usable result (e.g. ``status: fail``).

        Raises
        ------
        src.utils.errors.ProviderUnavailableError
            On timeout, connection failure or an HTTP error status.
        src.utils.errors.ProviderResponseError
            If the response body cannot be decoded.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier, e.g. ``"ip-api"`` or ``"ipinfo"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured.

        Providers that need credentials return ``False`` when none are set,
        and the chain skips them without issuing a request.
        """
