"""YAML configuration loading and overrides for runtime tunables.

Kept out of mvnreleases.py to keep the entrypoint slim. Values from the
configuration file are applied onto ``Constants``; CLI flags still win.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file exists but cannot be used."""


def resolve_config_path(cli_path: Optional[str] = None) -> Optional[str]:
    """Pick the config path from the CLI flag, then the MVNRELEASES_CONFIG variable."""
    if cli_path:
        return cli_path
    env_path = os.environ.get(Constants.CONFIG_ENV)
    if env_path and env_path.strip():
        return env_path.strip()
    return None


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the configuration mapping from a YAML file.

    Args:
        config_path: Path to a YAML config file, or None.

    Returns:
        The parsed mapping; empty when no path is given or the file is missing.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping")
    return data


def apply_config_overrides(config: Dict[str, Any]) -> None:
    """Apply recognised config keys onto ``Constants``.

    Recognised keys: ``repositories`` (list of URLs), ``request_timeout``
    (seconds) and ``primary_hosts`` (list of host names).
    """
    repositories = config.get("repositories")
    if repositories is not None:
        if not isinstance(repositories, list) or not all(isinstance(r, str) for r in repositories):
            raise ConfigError("'repositories' must be a list of URLs")
        Constants.DEFAULT_REPOSITORY_URLS = list(repositories)

    timeout = config.get("request_timeout")
    if timeout is not None:
        try:
            Constants.REQUEST_TIMEOUT = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"'request_timeout' must be a number, got {timeout!r}") from e

    hosts = config.get("primary_hosts")
    if hosts is not None:
        if not isinstance(hosts, list):
            raise ConfigError("'primary_hosts' must be a list of host names")
        Constants.PRIMARY_REPOSITORY_HOSTS = tuple(str(h).lower() for h in hosts)
