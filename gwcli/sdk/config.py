"""Configuration for gwcli.

A single flat YAML mapping, by default ``~/.config/gwcli/config.yaml``.
Today it only records ``active_account``. Account tokens live next to it,
see ``gwcli.sdk.accounts``.
"""

import os
import yaml
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def get_config_dir() -> Path:
    """Config directory: $GWCLI_CONFIG_DIR or ~/.config/gwcli."""
    env_path = os.getenv("GWCLI_CONFIG_DIR")
    return Path(env_path) if env_path else Path.home() / ".config" / "gwcli"


def get_config_file_path() -> Path:
    """Config file: $GWCLI_CONFIG_FILE or config.yaml in the config directory."""
    env_path = os.getenv("GWCLI_CONFIG_FILE")
    return Path(env_path) if env_path else get_config_dir() / "config.yaml"


def load_config() -> dict:
    """
    Read the config file.

    A missing, empty or unparsable file reads as an empty mapping, so a
    broken config never stops commands that pass --account explicitly.
    """
    config_file = get_config_file_path()
    if not config_file.exists():
        return {}

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Ignoring unreadable config file {config_file}: {e}")
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def get_config_value(key: str, default: Any = None) -> Any:
    return load_config().get(key, default)


def set_config_value(key: str, value: Any):
    """Set one key and write the file back, creating its directory if needed."""
    config_data = load_config()
    config_data[key] = value

    config_file = get_config_file_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    with open(config_file, 'w') as f:
        yaml.safe_dump(config_data, f, default_flow_style=False)
    logger.debug(f"Set '{key}' in {config_file}")
