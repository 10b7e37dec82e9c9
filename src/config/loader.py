"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. Field defaults on :class:`~src.config.settings.Settings`
  2. ``config/config.yaml`` -- static, non-secret defaults (``geoip:`` section)
  3. ``.env`` file and environment variables set at deploy time

Only environment values that are actually set override YAML, so an operator
can tune e.g. ``geoip_timeout_seconds`` in YAML without it being clobbered by
the field default.  Provider credentials belong in the environment, not YAML.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.config.settings import Settings
from src.utils.errors import ConfigurationError


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Build :class:`Settings` from YAML defaults plus environment overrides.

    Args:
        path: Path to the YAML configuration file.  A missing file is not an
              error; environment variables and field defaults still apply.

    Returns:
        Fully resolved settings.

    Raises:
        ConfigurationError: The YAML is unreadable, the ``geoip`` section is
            not a mapping, names an unknown key, or a value fails validation.
            Unrelated environment and ``.env`` keys are ignored.
    """
    yaml_values = _read_geoip_section(Path(path))

    try:
        env_settings = Settings()
        env_values = env_settings.model_dump(include=env_settings.model_fields_set)
        return Settings(**{**yaml_values, **env_values})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid geoip configuration: {exc}") from exc


def _read_geoip_section(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse {config_path}: {exc}") from exc

    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"{config_path} must contain a mapping at the top level")

    section = yaml_config.get("geoip") or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'geoip' section in {config_path} must be a mapping")

    unknown = sorted(set(section) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(
            f"Invalid geoip configuration: unknown key(s) in {config_path}: {', '.join(unknown)}"
        )
    return section
