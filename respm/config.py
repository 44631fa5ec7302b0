"""
CLI configuration file utilities.

Handles loading and saving configuration from ~/.respm/config.yaml.
Environment variables take precedence over the file, and command line
options take precedence over both.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_ID = 1

DEFAULT_CONFIG = {
    "server": DEFAULT_SERVER,
    "timeout": DEFAULT_TIMEOUT,
    "user_id": DEFAULT_USER_ID,
}

# Keys that may be changed through `respm config set`
SETTABLE_KEYS = ("server", "timeout", "user_id")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path from RESPM_CONFIG_DIR, or ~/.respm
    """
    override = os.environ.get("RESPM_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".respm"


def get_config_path() -> Path:
    """Get the configuration file path."""
    return get_config_dir() / "config.yaml"


def load_config() -> Dict[str, Any]:
    """Load configuration from file.

    If the file doesn't exist or cannot be parsed, returns the defaults.
    """
    config_path = get_config_path()
    config = DEFAULT_CONFIG.copy()

    if not config_path.exists():
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config from %s: %s", config_path, e)
        return config

    if not isinstance(user_config, dict):
        logger.warning("Ignoring config file %s: not a mapping", config_path)
        return config

    config.update(user_config)
    return config


def save_config(config: Dict[str, Any]) -> None:
    """Save configuration to file, creating the directory if needed."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config, f, default_flow_style=False, allow_unicode=True)


def get_server(config: Optional[Dict[str, Any]] = None) -> str:
    """Get API server URL (env RESPM_SERVER, then config file)."""
    env_server = os.environ.get("RESPM_SERVER")
    if env_server:
        return env_server
    if config is None:
        config = load_config()
    return config.get("server") or DEFAULT_SERVER


def get_timeout(config: Optional[Dict[str, Any]] = None) -> Optional[float]:
    """Get request timeout in seconds; None disables the timeout."""
    value = os.environ.get("RESPM_TIMEOUT")
    if value is None:
        if config is None:
            config = load_config()
        value = config.get("timeout", DEFAULT_TIMEOUT)
    return parse_timeout(value)


def parse_timeout(value: Any) -> Optional[float]:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid timeout: {value!r}")
    if timeout < 0:
        raise ValueError(f"Invalid timeout: {value!r}")
    return timeout or None


def get_user_id(config: Optional[Dict[str, Any]] = None) -> int:
    """Get the user whose summary the dashboard shows."""
    value = os.environ.get("RESPM_USER_ID")
    if value is None:
        if config is None:
            config = load_config()
        value = config.get("user_id", DEFAULT_USER_ID)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid user id: {value!r}")


def coerce_value(key: str, value: str) -> Any:
    """Convert a `config set` string value to the type stored in the file."""
    if key not in SETTABLE_KEYS:
        raise ValueError(
            f"Unknown config key: {key}. Valid keys: {', '.join(SETTABLE_KEYS)}"
        )
    if key == "timeout":
        parse_timeout(value)
        return float(value)
    if key == "user_id":
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"Invalid user id: {value!r}")
    return value.rstrip("/")
