from __future__ import annotations

"""
Configuration Validation Service.

Ensures the configuration dictionary conforms to the expected schema before
the engine runs. Handles type coercion, default value injection and the
check of the values a run cannot do without.
"""

import logging
from typing import Any, Dict, List, Tuple

from protocrate.domain.config import get_default_config
from protocrate.domain.errors import ConfigError

logger = logging.getLogger(__name__)

STRING_FIELDS = ["output_dir", "cargo_toml_template", "pkg_name", "pkg_version", "protoc"]
BOOL_FIELDS = ["disable_rustfmt", "overwrite"]
LIST_FIELDS = ["roots", "pkg_authors", "plugins"]
REQUIRED_FIELDS = ["pkg_name", "output_dir", "roots"]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (JSON file, CLI) into strictly typed values and
    fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise TypeError on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in STRING_FIELDS:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in BOOL_FIELDS:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in LIST_FIELDS:
        merged[field] = _as_list_str(merged.get(field), defaults[field], field, warnings, strict)

    if not merged["plugins"]:
        warnings.append("No generator plugin configured. Using defaults.")
        merged["plugins"] = defaults["plugins"]

    return merged, warnings


def require_fields(config: Dict[str, Any]) -> None:
    """
    Ensure the values a generation run cannot default are present.

    Raises:
        ConfigError: Listing every missing field.
    """
    missing = [f for f in REQUIRED_FIELDS if not config.get(f)]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}")


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce common truthy/falsy spellings into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "yes", "y", "on"):
            return True
        if v in ("0", "false", "no", "n", "off"):
            return False

    msg = f"Invalid field '{field}': expected bool, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(
        value: Any,
        fallback: List[str],
        field: str,
        warnings: List[str],
        strict: bool
) -> List[str]:
    """Accept a list of strings or a comma-separated string."""
    if value is None:
        return list(fallback)
    if isinstance(value, str):
        return [x.strip() for x in value.split(",") if x.strip()]
    if isinstance(value, (list, tuple)):
        if all(isinstance(x, str) for x in value):
            return [x.strip() for x in value if x.strip()]

    msg = f"Invalid field '{field}': expected list of str."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)
