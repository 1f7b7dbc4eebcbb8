"""Type coercion and validation utilities for configuration loading.

This module provides utilities for loading environment variables according
to the ConfigSchema, including automatic type coercion and validation.

Errors are raised with clear messages to help users fix configuration issues.
"""

import os
from typing import Any

from switchboard.core.config.schema import ConfigSchema, EnvVarSpec


class ConfigError(Exception):
    """Configuration validation error.

    Attributes:
        env_var: The environment variable name
        value: The raw value that failed validation
        message: Human-readable error message
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value}: {message}")


def _parse_bool(value: str) -> bool:
    """True if value is "true", "1", "yes", or "on" (case-insensitive)."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_tuple(value: str) -> tuple[str, ...]:
    """Parse comma-separated string to a tuple of non-empty, lowercased items."""
    if not value:
        return ()
    parts = [part.strip().lower() for part in value.split(",")]
    return tuple(part for part in parts if part)


def load_env_var(spec: EnvVarSpec) -> Any:
    """Load and validate a single environment variable.

    This function:
    1. Reads the environment variable
    2. Uses the default if not set
    3. Coerces the string value to the target type
    4. Runs custom validation if provided

    Raises:
        ConfigError: If validation fails or type conversion is impossible
    """
    raw_value = os.environ.get(spec.name)

    if raw_value is None or raw_value == "":
        return spec.default

    try:
        if spec.coerce is not None:
            value = spec.coerce(raw_value)
        elif spec.type_hint is bool:
            value = _parse_bool(raw_value)
        elif spec.type_hint is int:
            value = int(raw_value)
        elif spec.type_hint is float:
            value = float(raw_value)
        elif spec.type_hint is tuple:
            value = _parse_tuple(raw_value)
        else:
            value = raw_value
    except (ValueError, TypeError) as e:
        raise ConfigError(
            spec.name,
            raw_value,
            f"Cannot convert to {spec.type_hint.__name__}: {e}",
        ) from e

    if spec.validator is not None:
        try:
            valid = spec.validator(value)
        except TypeError as e:
            raise ConfigError(spec.name, raw_value, f"Validation error: {e}") from e
        if not valid:
            raise ConfigError(
                spec.name,
                raw_value,
                f"Validation failed for type {spec.type_hint.__name__}",
            )

    return value


def load_all_specs() -> dict[str, Any]:
    """Load all environment variables according to schema.

    Values that failed validation are returned as ConfigError instances so
    that every problem can be reported at once.
    """
    result: dict[str, Any] = {}
    for name, spec in ConfigSchema.all_specs().items():
        try:
            result[name] = load_env_var(spec)
        except ConfigError as e:
            result[name] = e
    return result


def validate_all() -> list[ConfigError]:
    """Validate all environment variables and return any errors.

    Example:
        errors = validate_all()
        if errors:
            for error in errors:
                print(f"Configuration error: {error}")
            sys.exit(1)
    """
    return [value for value in load_all_specs().values() if isinstance(value, ConfigError)]
