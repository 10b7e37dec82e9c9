"""Utility modules for ipcountry.

- **address** -- non-routable address filtering and proxy-aware client
  address extraction.
- **errors** -- exception hierarchy rooted at GeoIPError.
- **logging** -- lazy module loggers plus opt-in structlog setup for hosts
  and the CLI (console in development, JSON in production).
"""

from src.utils.address import extract_client_address, is_non_routable
from src.utils.errors import (
    ConfigurationError,
    GeoIPError,
    ProviderResponseError,
    ProviderUnavailableError,
)
from src.utils.logging import configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "GeoIPError",
    "ProviderResponseError",
    "ProviderUnavailableError",
    "configure_logging",
    "extract_client_address",
    "get_logger",
    "is_non_routable",
]
