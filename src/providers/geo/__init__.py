"""IP geolocation provider implementations.

Chain order, as assembled by ``src.main.build_provider_chain``:

1. ``IpApiProvider``        -- free, no key
2. ``IpInfoProvider``       -- free tier, optional token
3. ``IpGeolocationProvider`` -- keyed; skipped by the chain when no API key is set
"""

from src.providers.geo.ip_api_provider import IpApiProvider
from src.providers.geo.ipgeolocation_provider import IpGeolocationProvider
from src.providers.geo.ipinfo_provider import IpInfoProvider

__all__ = ["IpApiProvider", "IpGeolocationProvider", "IpInfoProvider"]
