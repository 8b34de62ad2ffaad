"""
Configuration loading for TextSearch.

A JSON file is merged over the built-in defaults. A missing or broken file
is not fatal, the defaults are used instead.
"""
import copy
import json
import os
from typing import Any, Dict, Optional

from loguru import logger

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")

DEFAULT_CONFIG = {
    "preprocessing": {
        "stop_words": {
            "use": True,
            "language": "both",
            "file": None
        }
    },
    "search": {
        "max_results": 10
    },
    "documents": {
        "encoding": "utf-8"
    },
    "logging": {
        "level": "WARNING"
    }
}


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge ``override`` into a copy of ``base``.

    Args:
        base: Configuration with default values
        override: Values read from a configuration file

    Returns:
        New merged configuration dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a JSON file, falling back to defaults.

    Args:
        config_path: Path to the configuration file (defaults to the packaged config.json)

    Returns:
        Configuration dictionary
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not os.path.exists(path):
        if config_path:
            logger.warning("Config file {} not found, using default settings", path)
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        with open(path, "r", encoding="utf-8") as f:
            user_config = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load config {}: {}, using default settings", path, e)
        return copy.deepcopy(DEFAULT_CONFIG)

    if not isinstance(user_config, dict):
        logger.warning("Config {} is not a JSON object, using default settings", path)
        return copy.deepcopy(DEFAULT_CONFIG)

    logger.debug("Loaded configuration from {}", path)
    return merge_config(DEFAULT_CONFIG, user_config)
