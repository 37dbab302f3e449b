"""Configuration management for seriestrim."""

import logging
import os
import tomllib

from enum import Enum
from pathlib import Path
from typing import Any

import tomli_w

from seriestrim.constants import DEFAULT_CONFIG_FILE
from seriestrim.types import ConfigurationError, OptimizerConfig, build_optimizer_config

logger = logging.getLogger(__name__)

OPTIMIZER_SECTION = "optimizer"


def get_config_path() -> Path:
    """
    Get the path to the configuration file.

    Returns:
        Path to ~/.seriestrim/config.toml
    """
    return Path.home() / ".seriestrim" / DEFAULT_CONFIG_FILE


def load_config() -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Returns:
        Configuration dictionary. Returns empty dict if file doesn't exist
        or is corrupted.
    """
    config_path = get_config_path()

    if not config_path.exists():
        return {}

    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Treating config as empty. Fix or delete the file to resolve.")
        return {}


def save_config(config: dict[str, Any]) -> None:
    """
    Save configuration to TOML file using atomic write.

    Creates the parent directory if it doesn't exist.
    Uses temp file + rename for atomic operation.

    Args:
        config: Configuration dictionary to save

    Raises:
        PermissionError: If directory cannot be created or file cannot be written
    """
    config_path = get_config_path()

    config_dir = config_path.parent
    try:
        os.makedirs(config_dir, exist_ok=True)
    except PermissionError as e:
        raise PermissionError(
            f"Cannot create config directory {config_dir}: {e}"
        ) from e

    temp_path = config_path.with_suffix(".toml.tmp")

    try:
        with open(temp_path, "wb") as f:
            tomli_w.dump(config, f)

        os.replace(temp_path, config_path)

    except Exception:
        if temp_path.exists():
            temp_path.unlink()
        raise


def get_optimizer_defaults() -> dict[str, Any]:
    """
    Get persisted optimizer defaults.

    Returns:
        Contents of the [optimizer] section, or empty dict if not set
    """
    section = load_config().get(OPTIMIZER_SECTION, {})
    if not isinstance(section, dict):
        logger.warning(f"Ignoring non-table [{OPTIMIZER_SECTION}] config section")
        return {}
    return section


def load_optimizer_config(**overrides: Any) -> OptimizerConfig:
    """
    Build an OptimizerConfig from persisted defaults and explicit overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given fall back to the config file and then to built-in defaults.

    Args:
        **overrides: OptimizerConfig fields taking precedence over the file

    Returns:
        Validated OptimizerConfig

    Raises:
        ConfigurationError: If the merged options are invalid
    """
    merged = dict(get_optimizer_defaults())
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return build_optimizer_config(**merged)


def _to_toml_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


def set_optimizer_default(key: str, value: Any) -> OptimizerConfig:
    """
    Persist one optimizer default.

    The value is validated together with the other persisted defaults before
    anything is written.

    Args:
        key: OptimizerConfig field name
        value: New value (strings are coerced by validation)

    Returns:
        The validated configuration that the file now describes

    Raises:
        ConfigurationError: If the key is unknown or the value is invalid
    """
    if key not in OptimizerConfig.model_fields:
        raise ConfigurationError(f"Unknown optimizer setting: '{key}'")

    defaults = get_optimizer_defaults()
    candidate = {**defaults, key: value}
    validated = build_optimizer_config(**candidate)

    config = load_config()
    config[OPTIMIZER_SECTION] = {
        name: _to_toml_value(getattr(validated, name)) for name in candidate
    }
    save_config(config)
    return validated


def unset_optimizer_default(key: str) -> bool:
    """
    Remove one optimizer default.

    If this was the only setting in the optimizer section, removes the section.
    If config becomes empty, deletes the config file.

    Args:
        key: OptimizerConfig field name

    Returns:
        True if a value was removed
    """
    config = load_config()
    section = config.get(OPTIMIZER_SECTION)

    if not isinstance(section, dict) or key not in section:
        return False

    del section[key]
    if not section:
        del config[OPTIMIZER_SECTION]

    if not config:
        config_path = get_config_path()
        if config_path.exists():
            config_path.unlink()
    else:
        save_config(config)
    return True
