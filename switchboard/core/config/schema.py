"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including automatic type coercion, validation, and documentation generation.

Per-provider variables ({PROVIDER}_API_KEY, {PROVIDER}_BASE_URL,
{PROVIDER}_CUSTOM_HEADER_*) are dynamic and read by ProviderConfigLoader,
so they are not listed here.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from switchboard.core.models.cache import StalePolicy


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type for validation (int, str, float, bool, tuple)
        description: Human-readable description for docs
        validator: Optional custom validation function
        coerce: Optional function to convert string to target type
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], bool] | None = None
    coerce: Callable[[str], Any] | None = None


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Server Settings ===

    HOST = EnvVarSpec(
        name="HOST",
        default="0.0.0.0",
        type_hint=str,
        description="Server host address to bind to",
    )

    PORT = EnvVarSpec(
        name="PORT",
        default=8000,
        type_hint=int,
        description="Server port number",
        validator=lambda x: 1 <= x <= 65535,
    )

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown values mean INFO",
    )

    # === Catalog Cache Settings ===

    CACHE_TTL_SECONDS = EnvVarSpec(
        name="CACHE_TTL_SECONDS",
        default=3600.0,
        type_hint=float,
        description="Seconds the aggregated model catalog is considered fresh",
        validator=lambda x: x > 0,
    )

    CATALOG_STALE_POLICY = EnvVarSpec(
        name="CATALOG_STALE_POLICY",
        default=StalePolicy.SERVE,
        type_hint=StalePolicy,
        description="What a non-forced load does with a stale catalog: 'serve' or 'refresh'",
        coerce=lambda x: StalePolicy(x.strip().lower()),
    )

    CATALOG_REFRESH_INTERVAL_SECONDS = EnvVarSpec(
        name="CATALOG_REFRESH_INTERVAL_SECONDS",
        default=0.0,
        type_hint=float,
        description="Interval for background forced catalog refreshes (0 = disabled)",
        validator=lambda x: x >= 0,
    )

    # === Provider Settings ===

    SWITCHBOARD_PROVIDERS = EnvVarSpec(
        name="SWITCHBOARD_PROVIDERS",
        default=("openai", "anthropic", "google", "alibaba"),
        type_hint=tuple,
        description="Comma-separated providers to register, in registration order",
        validator=lambda x: len(x) > 0,
    )

    DEFAULT_PROVIDER = EnvVarSpec(
        name="DEFAULT_PROVIDER",
        default=None,
        type_hint=str,
        description="Provider whose default model is preferred when picking a default",
    )

    # === Timeout Settings ===

    REQUEST_TIMEOUT = EnvVarSpec(
        name="REQUEST_TIMEOUT",
        default=30.0,
        type_hint=float,
        description="Timeout in seconds for catalog and generation calls",
        validator=lambda x: x > 0,
    )

    HEALTH_CHECK_TIMEOUT = EnvVarSpec(
        name="HEALTH_CHECK_TIMEOUT",
        default=5.0,
        type_hint=float,
        description="Timeout in seconds for a provider health probe",
        validator=lambda x: x > 0,
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }

    @classmethod
    def get_spec(cls, name: str) -> EnvVarSpec | None:
        """Get specification for a specific env var by name."""
        for spec in cls.all_specs().values():
            if spec.name == name:
                return spec
        return None

    @classmethod
    def generate_markdown_docs(cls) -> str:
        """Generate Markdown documentation for all environment variables."""
        lines = [
            "# Configuration Options\n\n",
            "This document is auto-generated from `ConfigSchema`.\n\n",
            "## Environment Variables\n\n",
        ]

        for _name, spec in sorted(cls.all_specs().items()):
            default = spec.default.value if isinstance(spec.default, StalePolicy) else spec.default
            default_repr = f"`{default}`" if default is not None else "None"
            lines.extend(
                [
                    f"### `{spec.name}`\n\n",
                    f"- **Type**: `{spec.type_hint.__name__}`\n",
                    f"- **Default**: {default_repr}\n",
                    f"- **Description**: {spec.description}\n\n",
                ]
            )

        return "\n".join(lines)
