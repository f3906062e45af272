from __future__ import annotations

"""
Configuration Domain Management.

Handles the persistent user settings file and the default runtime
configuration. Settings are stored as JSON in the user data directory.
"""

import json
import logging
import os
from typing import Any, Dict, List

from aiask.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"
DEFAULT_INCLUDE_EXTENSIONS: List[str] = ["ts", "html", "json"]
DEFAULT_MODEL = "gpt-4o"

# Keys accepted from the settings file under a different spelling
_KEY_ALIASES: Dict[str, str] = {
    "includeFileExtensions": "include_file_extensions",
    "detectCycles": "detect_cycles",
    "targetModel": "target_model",
    "countTokens": "count_tokens",
}


def get_config_file() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "include_file_extensions": list(DEFAULT_INCLUDE_EXTENSIONS),
        "detect_cycles": False,
        "target_model": DEFAULT_MODEL,
        "count_tokens": True,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(config_file: str = "") -> Dict[str, Any]:
    """
    Load user settings from disk merged over the defaults.

    A missing file yields the defaults silently; a corrupt or unreadable
    file yields the defaults with a warning.

    Args:
        config_file: Optional explicit settings path.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    path = config_file or get_config_file()
    config = get_default_config()

    if not os.path.exists(path):
        logger.debug(f"Config file not found at {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config from {path}: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    for key, value in data.items():
        config[_KEY_ALIASES.get(key, key)] = value

    logger.debug(f"Configuration loaded from {path}")
    return config
