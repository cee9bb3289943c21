import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from hubspot_mapper.errors import ConfigError
from hubspot_mapper.transport.quota import DEFAULT_QUOTA_INTERVAL
from hubspot_mapper.transport.rest import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT

DEFAULT_CONFIG_PATH = Path("hubspot.config.yaml")

API_KEY_ENV = "HUBSPOT_API_KEY"
ACCESS_TOKEN_ENV = "HUBSPOT_ACCESS_TOKEN"


class ClientSettings(BaseModel):
    """Settings used to build a RestClient."""

    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    access_token: Optional[str] = None
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    quota_interval_seconds: float = Field(default=DEFAULT_QUOTA_INTERVAL, ge=0)
    user_agent: str = DEFAULT_USER_AGENT


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load client configuration from a YAML file.

    Expected layout::

        hubspot:
          base_url: https://api.hubapi.com/
          access_token: pat-...
          timeout_seconds: 30
          quota_interval_seconds: 1.05

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigError: If the file is not a YAML mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Config file {cfg_path} must contain a mapping")
    return config


def get_client_settings(
    config: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ClientSettings:
    """
    Resolve client settings from the ``hubspot`` section of a config dict.

    Credentials from the environment (HUBSPOT_API_KEY, HUBSPOT_ACCESS_TOKEN)
    take precedence over the file.
    """
    environ = os.environ if environ is None else environ
    section = (config or {}).get("hubspot") or {}
    if not isinstance(section, Mapping):
        raise ConfigError("'hubspot' config section must be a mapping")

    values = dict(section)
    if environ.get(API_KEY_ENV):
        values["api_key"] = environ[API_KEY_ENV]
    if environ.get(ACCESS_TOKEN_ENV):
        values["access_token"] = environ[ACCESS_TOKEN_ENV]

    try:
        return ClientSettings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid hubspot config: {e}") from e
