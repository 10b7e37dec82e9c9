"""Application settings loaded from environment variables via pydantic-settings.

Values are read from two sources, in priority order:

  1. Environment variables, e.g. ``IPINFO_TOKEN=abc123``
  2. A ``.env`` file in the working directory (local development)

Field names map to upper-cased environment variables: ``ipinfo_token`` is
read from ``IPINFO_TOKEN``.  Defaults apply when neither source sets a field.
See :func:`src.config.loader.load_settings` for the additional YAML layer.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """ipcountry settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    # Unrelated keys in a shared .env (DATABASE_URL, ...) are ignored.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Provider credentials ===
    # Empty string = "not configured".  A missing ipinfo token only drops the
    # ``token`` query parameter; a missing ipgeolocation key removes that
    # provider from the chain entirely.
    ipinfo_token: str = ""
    ipgeolocation_api_key: str = ""

    # === Provider endpoints ===
    ip_api_base_url: str = "http://ip-api.com"
    ipinfo_base_url: str = "https://ipinfo.io"
    ipgeolocation_base_url: str = "https://api.ipgeolocation.io"

    # === Resolution behaviour ===
    geoip_timeout_seconds: float = Field(default=3.0, gt=0)
    geoip_cache_ttl_seconds: float = Field(default=24 * 60 * 60, gt=0)
    geoip_coalesce_lookups: bool = False

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_geo_providers(self) -> list[str]:
        """Return provider names in chain order, omitting unconfigured ones."""
        providers = ["ip-api", "ipinfo"]
        if self.ipgeolocation_api_key:
            providers.append("ipgeolocation")
        return providers
