"""Configuration utilities for dokumentovac."""

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..exceptions import ConfigurationError
from .constants import DEFAULT_CONFIG_DIR, DEFAULT_TIMEOUT_SECONDS, ENV_VAR_DEFINITIONS


def get_config_dir() -> Path:
    """Get the config directory, respecting DOKUMENTOVAC_CONFIG_DIR.

    Tests point DOKUMENTOVAC_CONFIG_DIR at a temp directory so they never
    touch the real session or UI config.
    """
    override = os.environ.get("DOKUMENTOVAC_CONFIG_DIR")
    config_dir = Path(override) if override else DEFAULT_CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS:
        return True, None

    if value is None:
        return True, None

    if name == "DOKUMENTOVAC_TIMEOUT":
        try:
            if float(value) <= 0:
                raise ValueError
        except ValueError:
            return False, f"Invalid value '{value}' for {name}. Expected a positive number"
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if valid_values is None:
        return True, None

    if value.upper() not in [v.upper() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all Dokumentovač environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid and error:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error or "Invalid setting", setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_api_base_url() -> str:
    """Base URL of the document service, without a trailing slash."""
    url = get_env_var("DOKUMENTOVAC_API_URL") or ""
    return url.rstrip("/")


def get_timeout() -> float:
    """Request timeout in seconds."""
    value = get_env_var("DOKUMENTOVAC_TIMEOUT")
    return float(value) if value else DEFAULT_TIMEOUT_SECONDS


def get_env_info() -> Dict[str, Dict]:
    """Get information about all Dokumentovač environment variables.

    Sensitive values are masked.
    """
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)

        display_value = value
        if value and definition.get("sensitive"):
            display_value = value[:4] + "..." if len(value) > 4 else "***"

        info[name] = {
            "description": definition.get("description", ""),
            "value": display_value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
            "sensitive": definition.get("sensitive", False),
        }
    return info
