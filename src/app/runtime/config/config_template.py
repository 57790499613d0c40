"""Configuration template substitution utilities."""

import os
import re
from pathlib import Path

import yaml
from loguru import logger
from pydantic import ValidationError

from src.app.runtime.config.config_data import ConfigData

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """

    def replacer(match: re.Match[str]) -> str:
        var_expr = match.group(1)

        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)

        if ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = os.getenv(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        value = os.getenv(var_expr)
        if value is None:
            raise ValueError(f"Required environment variable {var_expr} not set")
        return value

    return _PLACEHOLDER.sub(replacer, text)


def apply_environment_overrides(env_mode: str) -> list[str]:
    """Copy ``<ENV>_NAME`` variables onto ``NAME`` for the active environment.

    Returns the names of the variables that were set.
    """
    prefix = f"{env_mode.upper()}_"
    applied = []
    for var_name, var_value in list(os.environ.items()):
        if var_name.startswith(prefix):
            target = var_name[len(prefix):]
            os.environ[target] = var_value
            applied.append(target)
            logger.debug("Set environment variable {} from {}", target, var_name)
    return applied


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed configuration with environment variables substituted

    Raises:
        ValueError: If required environment variables are missing or the file is invalid
        FileNotFoundError: If the YAML file doesn't exist
    """
    with open(file_path) as f:
        content = f.read()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)

    overrides = apply_environment_overrides(env_mode)
    if overrides:
        logger.info("Applied environment-specific overrides: {}", overrides)

    substituted_content = substitute_env_vars(content)

    try:
        loaded = yaml.safe_load(substituted_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e
    if not loaded:
        raise ValueError("Failed to parse YAML")

    try:
        return ConfigData(**(loaded.get("config") or {}))
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e


def load_config(file_path: Path) -> ConfigData:
    """Load configuration from ``file_path``, falling back to defaults if it is absent."""
    if not file_path.exists():
        logger.warning("{} not found; using default configuration", file_path)
        return ConfigData()
    return load_templated_yaml(file_path)
