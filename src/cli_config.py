"""Configuration file support for the CLI.

A config file (YAML or JSON) provides defaults for options not given on the
command line. Precedence: CLI flag > config file > built-in default.

Example::

    depinspect:
      lang: ruby
      registry: registries/ruby.json
      output_dir: reports
      recursive: true
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

# config key -> (args attribute, built-in default)
_DEFAULTS = {
    "lang": ("LANG", None),
    "registry": ("REGISTRY", Constants.DEFAULT_REGISTRY_FILE),
    "grep": ("GREP", ""),
    "recursive": ("RECURSIVE", False),
    "log_level": ("LOG_LEVEL", None),
}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """Load the configuration file.

    Args:
        config_path: Path to a YAML/JSON config file, or None.

    Returns:
        The ``depinspect`` section if present, otherwise the whole document;
        an empty dict when no usable config is available.
    """
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        logger.error("Failed to load config %s: %s", config_path, e)
        return {}

    if not isinstance(data, dict):
        logger.error("Config %s must contain a mapping, ignoring it", config_path)
        return {}
    section = data.get(Constants.CONFIG_SECTION, data)
    return section if isinstance(section, dict) else {}


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0", "")


def _coerce_log_level(value: Any) -> Optional[str]:
    """Log level name from a config value, or None if it is not a known level."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        value = logging.getLevelName(value)
    if isinstance(value, str) and value.upper() in _LOG_LEVELS:
        return value.upper()
    logger.warning("Ignoring invalid log_level in config: %r", value)
    return None


def _coerce_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    elif isinstance(value, int):
        return value != 0
    logger.warning("Ignoring invalid %s in config: %r", key, value)
    return False


def apply_config(args, config: Dict[str, Any]) -> None:
    """Fill options left unset on the command line from ``config``, then defaults."""
    for key, (attr, default) in _DEFAULTS.items():
        if not hasattr(args, attr):
            continue
        if getattr(args, attr) is not None:
            continue
        value = config.get(key, default)
        if key == "lang" and isinstance(value, str):
            value = value.lower()
        elif key == "log_level":
            value = _coerce_log_level(value)
        elif key == "recursive":
            value = _coerce_bool(key, value)
        setattr(args, attr, value)

    if getattr(args, "OUTPUT_DIR", None) is None:
        default_dir = (
            Constants.REMOTES_OUTPUT_DIR if getattr(args, "action", None) == "remotes"
            else Constants.ANALYZE_OUTPUT_DIR
        )
        args.OUTPUT_DIR = config.get("output_dir", default_dir)
