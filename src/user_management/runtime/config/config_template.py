"""Configuration template substitution utilities."""

import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from loguru import logger
from pydantic_core import ValidationError

from src.user_management.runtime.config.config_data import ConfigData


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """
    Substitute environment variable placeholders in text.

    Supports formats:
    - ${VAR_NAME} - required variable (raises error if missing)
    - ${VAR_NAME:-default} - optional with default value
    - ${VAR_NAME:?error_message} - required with custom error message
    """
    env = os.environ if environ is None else environ

    def replacer(match):
        var_expr = match.group(1)

        # Handle default values: ${VAR:-default}
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return env.get(var_name, default)

        # Handle error messages: ${VAR:?message}
        elif ":?" in var_expr:
            var_name, error_msg = var_expr.split(":?", 1)
            value = env.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name}: {error_msg}")
            return value

        # Handle required variables: ${VAR}
        else:
            var_name = var_expr
            value = env.get(var_name)
            if value is None:
                raise ValueError(f"Required environment variable {var_name} not set")
            return value

    pattern = r"\$\{([^}]+)\}"
    return re.sub(pattern, replacer, text)


def environment_overrides(env_mode: str) -> dict[str, str]:
    """Return the process environment with ``<ENV_MODE>_`` prefixed variables unprefixed.

    ``TEST_DATABASE_URL`` therefore wins over ``DATABASE_URL`` when running
    with ``APP_ENVIRONMENT=test``.
    """
    prefix = f"{env_mode.upper()}_"
    merged = dict(os.environ)
    for var_name, var_value in os.environ.items():
        if var_name.startswith(prefix):
            merged[var_name[len(prefix):]] = var_value
            logger.debug("Using {} for {}", var_name, var_name[len(prefix):])
    return merged


def load_templated_yaml(file_path: Path) -> ConfigData:
    """
    Load a YAML file with environment variable substitution.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed configuration with environment variables substituted. Defaults
        are returned when the file does not exist.

    Raises:
        ValueError: If required environment variables are missing or the
            configuration is invalid
    """
    if not file_path.exists():
        logger.warning("Configuration file {} not found; using defaults", file_path)
        return ConfigData()

    content = file_path.read_text()

    env_mode = os.getenv("APP_ENVIRONMENT", "development")
    logger.info("Loading configuration for environment: {}", env_mode)

    substituted_content = substitute_env_vars(content, environment_overrides(env_mode))

    try:
        loaded = yaml.safe_load(substituted_content)
        if not loaded:
            raise ValueError("Failed to parse YAML")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML: {e}") from e

    try:
        # Extract the 'config' section from the YAML structure
        config_data = loaded.get("config", {})
        return ConfigData(**config_data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
