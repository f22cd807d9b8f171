from __future__ import annotations

"""
Configuration Domain Management.

Provides the default generation settings and loads optional JSON
configuration files that are layered between the defaults and the
command-line overrides.
"""

import json
import logging
import os
from typing import Any, Dict, List

from protocrate.domain.constants import DEFAULT_PKG_VERSION, DEFAULT_PLUGINS, DEFAULT_PROTOC
from protocrate.domain.errors import ConfigError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_KEYS: List[str] = [
    "roots",
    "output_dir",
    "cargo_toml_template",
    "pkg_name",
    "pkg_version",
    "pkg_authors",
    "disable_rustfmt",
    "protoc",
    "plugins",
    "overwrite",
]


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the generation engine.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Inputs
        "roots": [],
        "protoc": os.environ.get("PROTOC") or DEFAULT_PROTOC,
        "plugins": list(DEFAULT_PLUGINS),

        # Output crate
        "output_dir": "",
        "cargo_toml_template": "",
        "pkg_name": "",
        "pkg_version": DEFAULT_PKG_VERSION,
        "pkg_authors": [],

        # Post-processing and safety
        "disable_rustfmt": False,
        "overwrite": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: str) -> Dict[str, Any]:
    """
    Load a JSON configuration file and merge it over the defaults.

    Unknown keys are dropped so that stale files cannot pollute the schema.

    Args:
        path: Location of the JSON document.

    Returns:
        Dict[str, Any]: Defaults updated with the file values.

    Raises:
        ConfigError: If the file is unreadable or not a JSON object.
    """
    config = get_default_config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file '{path}': {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Corrupted configuration file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file '{path}' must contain a JSON object.")

    for key, value in data.items():
        if key not in CONFIG_KEYS:
            logger.debug(f"Ignoring unknown configuration key: {key}")
            continue
        config[key] = value

    logger.debug(f"Configuration loaded from {path}")
    return config
