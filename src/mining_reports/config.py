"""
Configuration loading for the mining report system.

This module loads report configuration from YAML files (JSON files load
too, being valid YAML) and lets API keys be overridden from a .env file
or the process environment.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values

from mining_reports.models import DEFAULT_POOL_URL, ReportConfig


# Default paths for configuration files
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"

# Environment variable -> config field
ENV_KEYS = {
    "POOL_API_KEY": "api_key",
    "SENDGRID_API_KEY": "sendgrid_api_key",
}

REQUIRED_FIELDS = ["coin", "api_key"]

OPTIONAL_FIELDS = [
    "sendgrid_api_key",
    "crypto_id",
    "crypto_symbol",
    "local_currency",
    "crypto_rate_url",
    "fiat_rate_url",
    "from_name",
    "from_email",
    "to_name",
    "to_email",
    "subject",
    "log_path",
]

URL_PLACEHOLDERS = ("{coin}", "{action}", "{api_key}")

# Fields each URL template may reference
TEMPLATE_FIELDS = {
    "url": {"coin": "coin", "action": "action", "api_key": "api_key"},
    "crypto_rate_url": {"crypto_id": "crypto_id"},
    "fiat_rate_url": {"currency": "currency"},
}


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


def load_api_keys(env_file: str | Path | None = None) -> dict[str, str]:
    """
    Load API keys from the .env file and the environment.

    Sources are checked in this order (later sources override earlier):
    1. .env file in project root
    2. Environment variables

    Args:
        env_file: Path to .env file (defaults to project root .env)

    Returns:
        Dictionary keyed by config field name (api_key, sendgrid_api_key)
    """
    api_keys: dict[str, str] = {}

    env_path = Path(env_file) if env_file else DEFAULT_ENV_FILE
    if env_path.exists():
        env_values = dotenv_values(env_path)
        for env_name, field_name in ENV_KEYS.items():
            if env_values.get(env_name):
                api_keys[field_name] = str(env_values[env_name])

    for env_name, field_name in ENV_KEYS.items():
        if os.environ.get(env_name):
            api_keys[field_name] = os.environ[env_name]

    return api_keys


def load_config_from_file(
    config_path: str | Path,
    env_file: str | Path | None = None,
) -> ReportConfig:
    """
    Load report configuration from a YAML file.

    API keys found in the .env file or environment take precedence over
    the values in the file.

    Args:
        config_path: Path to the YAML configuration file
        env_file: Optional .env file used for key overrides

    Returns:
        Immutable ReportConfig

    Raises:
        ConfigurationError: If the file cannot be loaded or is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping: {config_path}"
        )

    raw_config.update(load_api_keys(env_file))
    return parse_config(raw_config)


def _check_template(name: str, template: str) -> None:
    """
    Format a URL template with placeholder values to catch bad fields early.

    Raises:
        ConfigurationError: If the template uses unknown or positional
            fields, or has unbalanced braces
    """
    try:
        template.format(**TEMPLATE_FIELDS[name])
    except KeyError as e:
        raise ConfigurationError(
            f"{name} template uses unknown placeholder {{{e.args[0]}}}; "
            f"allowed: {', '.join('{' + f + '}' for f in TEMPLATE_FIELDS[name])}"
        ) from e
    except (AttributeError, IndexError, ValueError) as e:
        raise ConfigurationError(f"Invalid {name} template: {e}") from e


def parse_config(raw: dict[str, Any]) -> ReportConfig:
    """
    Parse and validate a raw configuration dictionary.

    Args:
        raw: Dictionary loaded from YAML

    Returns:
        Validated ReportConfig

    Raises:
        ConfigurationError: If required fields are missing or invalid
    """
    for name in REQUIRED_FIELDS:
        if name not in raw or raw[name] in (None, ""):
            raise ConfigurationError(f"Missing required configuration field: {name}")

    url = str(raw.get("url") or DEFAULT_POOL_URL)
    missing = [p for p in URL_PLACEHOLDERS if p not in url]
    if missing:
        raise ConfigurationError(
            f"url template is missing placeholders: {', '.join(missing)}"
        )
    _check_template("url", url)

    values = {
        "coin": str(raw["coin"]),
        "api_key": str(raw["api_key"]),
        "url": url,
    }
    for name in OPTIONAL_FIELDS:
        if raw.get(name) is not None:
            values[name] = str(raw[name])

    if "local_currency" in values:
        values["local_currency"] = values["local_currency"].upper()

    for name in ("crypto_rate_url", "fiat_rate_url"):
        if name in values:
            _check_template(name, values[name])

    return ReportConfig(**values)
