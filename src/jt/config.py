"""Local configuration for jt.

Settings come from ``~/.jt/config.yaml`` (or the file named by
``JT_CONFIG``) and from ``JT_*`` environment variables, which take
precedence over the file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from jt.exceptions import ConfigError

DEFAULT_CONFIG_PATH = "~/.jt/config.yaml"
DEFAULT_TICKETS_DIR = "~/.jt/tickets"
DEFAULT_FETCH_TIMEOUT_S = 15.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "jt/0.1 (+https://github.com/erickhilda/jt)"

JT_CONFIG = os.getenv("JT_CONFIG", DEFAULT_CONFIG_PATH)
JT_FETCH_TIMEOUT_S = float(os.getenv("JT_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
JT_FETCH_MAX_RETRIES = int(os.getenv("JT_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
JT_FETCH_BACKOFF_S = float(os.getenv("JT_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
JT_USER_AGENT = os.getenv("JT_USER_AGENT", DEFAULT_USER_AGENT)

# config.yaml key -> environment variable overriding it
_FILE_KEYS = {
    "instance": "JT_INSTANCE",
    "email": "JT_EMAIL",
    "tickets_dir": "JT_TICKETS_DIR",
}


class JiraSettings(BaseModel):
    """Connection settings for a Jira Cloud site.

    Attributes:
        instance: Base URL of the Jira site, e.g. https://myorg.atlassian.net.
        email: Account email used for basic auth.
        api_token: Atlassian API token paired with the email.
        tickets_dir: Directory holding the saved ``<KEY>.md`` files.
    """

    instance: str
    email: str
    api_token: str
    tickets_dir: str = DEFAULT_TICKETS_DIR

    @field_validator("instance")
    @classmethod
    def validate_instance(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("instance is required")
        if not value.startswith("https://"):
            raise ValueError("instance must start with https://")
        return value.rstrip("/")

    @field_validator("email", "api_token")
    @classmethod
    def validate_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("value is required")
        return value


def load_config_file(path: str | Path) -> dict[str, str]:
    """Read the YAML config file.

    A missing file is an empty config. Only the known keys are returned,
    and null values are dropped.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_path = Path(path).expanduser()
    if not config_path.exists():
        return {}

    try:
        with config_path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"parsing config {config_path}: {exc}") from exc

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"parsing config {config_path}: expected a mapping")
    return {
        str(key): str(value)
        for key, value in content.items()
        if key in _FILE_KEYS and value is not None
    }


def _config_values(env: Mapping[str, str], config_path: str | Path | None) -> dict[str, str]:
    values = load_config_file(config_path or env.get("JT_CONFIG") or JT_CONFIG)
    for key, env_name in _FILE_KEYS.items():
        if env.get(env_name):
            values[key] = env[env_name]
    return values


def load_tickets_dir(
    env: Mapping[str, str] | None = None, config_path: str | Path | None = None
) -> str:
    """Resolve the tickets directory without requiring credentials."""
    source = os.environ if env is None else env
    return _config_values(source, config_path).get("tickets_dir") or DEFAULT_TICKETS_DIR


def load_settings(
    env: Mapping[str, str] | None = None, config_path: str | Path | None = None
) -> JiraSettings:
    """Build JiraSettings from the config file and environment variables.

    Args:
        env: Mapping to read from. Defaults to ``os.environ``.
        config_path: YAML config file. Defaults to ``JT_CONFIG``.

    Returns:
        Validated settings.

    Raises:
        ConfigError: If a required value is missing or invalid.
    """
    source = os.environ if env is None else env
    values = _config_values(source, config_path)
    try:
        return JiraSettings(
            instance=values.get("instance", ""),
            email=values.get("email", ""),
            api_token=source.get("JT_API_TOKEN", ""),
            tickets_dir=values.get("tickets_dir") or DEFAULT_TICKETS_DIR,
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(
            f"invalid config: {problems} (set JT_INSTANCE, JT_EMAIL and JT_API_TOKEN)"
        ) from exc
