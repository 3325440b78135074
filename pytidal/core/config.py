"""
Configuration management for pytidal.

This module loads the account and API settings used to log in, from an
optional config.yaml and from environment variables. A .env file in the
working directory is read first (python-dotenv), so secrets can stay out of
the YAML file.

Precedence (highest first):
    1. Environment variables (PYTIDAL_APP_TOKEN, PYTIDAL_USERNAME,
       PYTIDAL_PASSWORD, PYTIDAL_API_URL)
    2. config.yaml
    3. Built-in defaults

Example config.yaml:
    tidal:
      token: "token captured from the desktop client"
      username: "me@example.com"
      password: "secret"

    api:
      url: "https://api.tidalhifi.com/v1"
      timeout: 30

How to get an Application Token:
    Using a debug proxy (Charles or Fiddler) open the TIDAL desktop
    application, look for requests to api.tidal.com and copy the value of
    the X-Tidal-Token header.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from pytidal.core.exceptions import ConfigError


# Default configuration file name (looked up in the current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_API_URL = "https://api.tidalhifi.com/v1"
DEFAULT_TIMEOUT = 30.0

ENV_TOKEN = "PYTIDAL_APP_TOKEN"
ENV_USERNAME = "PYTIDAL_USERNAME"
ENV_PASSWORD = "PYTIDAL_PASSWORD"
ENV_API_URL = "PYTIDAL_API_URL"


@dataclass(frozen=True)
class AccountConfig:
    """
    Application token and user credentials.

    Attributes:
        token: The application token (X-Tidal-Token). Always non-empty.
        username: TIDAL account e-mail, empty if not configured.
        password: TIDAL account password, empty if not configured.
    """
    token: str
    username: str = ""
    password: str = ""

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks
        return f"AccountConfig(token='***', username={self.username!r}, password='***')"


@dataclass(frozen=True)
class ApiConfig:
    """
    HTTP settings.

    Attributes:
        url: Base URL of the REST API, without trailing slash.
        timeout: Total timeout per request, in seconds.
    """
    url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class Config:
    """
    Complete client configuration, created by load_config().

    Attributes:
        account: Token and user credentials.
        api: HTTP settings.
    """
    account: AccountConfig
    api: ApiConfig

    @property
    def has_user_credentials(self) -> bool:
        """True when both username and password are available for login."""
        return bool(self.account.username and self.account.password)


def load_config(config_path: Path | None = None, use_dotenv: bool = True) -> Config:
    """
    Load and validate configuration from config.yaml and the environment.

    Args:
        config_path: Optional explicit path to a YAML file. It must exist.
                     If None, config.yaml in the current working directory is
                     used when present and skipped otherwise.
        use_dotenv: Whether to load a .env file into the environment first.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If the explicit file is missing, the YAML is invalid,
                     a section has the wrong type, the timeout is not a
                     positive number, or no application token is available.

    Example:
        try:
            config = load_config()
        except ConfigError as e:
            print(f"Configuration error: {e.message}")
            sys.exit(1)
    """
    if use_dotenv:
        load_dotenv(Path.cwd() / ".env")

    raw_config = _read_config_file(config_path)

    tidal_section = _get_section(raw_config, "tidal")
    api_section = _get_section(raw_config, "api")

    account = _parse_account_config(tidal_section)
    api = _parse_api_config(api_section)

    return Config(account=account, api=api)


def _read_config_file(config_path: Path | None) -> dict[str, Any]:
    """
    Read the YAML file, returning an empty dict when there is nothing to read.

    Raises:
        ConfigError: If an explicit path is missing or the content is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return {}
    else:
        config_path = Path(config_path).expanduser()
        if not config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file parses to None
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return raw_config


def _get_section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _string_setting(
    section: dict[str, Any],
    key: str,
    env_var: str,
    field: str,
    strip: bool = True
) -> str:
    """
    Return the env override if set, else the file value.

    Blank values count as unset. With strip=False a set value is returned
    exactly as given (passwords may start or end with spaces).
    """
    env_value = os.environ.get(env_var)
    if env_value is not None and env_value.strip():
        return env_value.strip() if strip else env_value

    value = section.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(
            f"'{field}' must be a string",
            details={"field": field}
        )
    if not value.strip():
        return ""
    return value.strip() if strip else value


def _parse_account_config(tidal_section: dict[str, Any]) -> AccountConfig:
    """
    Parse the 'tidal' section, applying environment overrides.

    Raises:
        ConfigError: If no token is available from either source.
    """
    token = _string_setting(tidal_section, "token", ENV_TOKEN, "tidal.token")
    username = _string_setting(tidal_section, "username", ENV_USERNAME, "tidal.username")
    password = _string_setting(
        tidal_section, "password", ENV_PASSWORD, "tidal.password", strip=False
    )

    if not token:
        raise ConfigError(
            f"An application token is required: set 'tidal.token' or {ENV_TOKEN}",
            details={"field": "tidal.token", "env": ENV_TOKEN}
        )

    return AccountConfig(token=token, username=username, password=password)


def _parse_api_config(api_section: dict[str, Any]) -> ApiConfig:
    """
    Parse the 'api' section, applying defaults.

    Raises:
        ConfigError: If url is empty or timeout is not a positive number.
    """
    url = _string_setting(api_section, "url", ENV_API_URL, "api.url") or DEFAULT_API_URL

    timeout = DEFAULT_TIMEOUT
    raw_timeout = api_section.get("timeout")
    if raw_timeout is not None:
        # bool is an int subclass, reject it explicitly
        if isinstance(raw_timeout, bool) or not isinstance(raw_timeout, (int, float)) or raw_timeout <= 0:
            raise ConfigError(
                "'api.timeout' must be a positive number",
                details={"field": "api.timeout", "value": raw_timeout}
            )
        timeout = float(raw_timeout)

    return ApiConfig(url=url.rstrip("/"), timeout=timeout)
