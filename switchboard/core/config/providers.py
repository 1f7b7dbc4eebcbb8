"""Provider configuration module.

Holds the settings shared by every provider: which providers to register
and in what order, the preferred default provider, and call timeouts.
Per-provider credentials are read by ProviderConfigLoader.
"""

from dataclasses import dataclass

from switchboard.core.config.schema import ConfigSchema
from switchboard.core.config.validation import load_env_var


@dataclass(frozen=True)
class ProvidersConfig:
    """Configuration shared across providers.

    Attributes:
        provider_names: Providers to register, in registration order
        default_provider: Provider whose default model is preferred, if any
        request_timeout: Seconds allowed for catalog and generation calls
        health_check_timeout: Seconds allowed for one health probe
    """

    provider_names: tuple[str, ...]
    default_provider: str | None
    request_timeout: float
    health_check_timeout: float


class ProviderSettings:
    """Loads shared provider configuration from environment variables."""

    @staticmethod
    def load() -> ProvidersConfig:
        default_provider = load_env_var(ConfigSchema.DEFAULT_PROVIDER)
        return ProvidersConfig(
            provider_names=load_env_var(ConfigSchema.SWITCHBOARD_PROVIDERS),
            default_provider=default_provider.strip().lower() if default_provider else None,
            request_timeout=load_env_var(ConfigSchema.REQUEST_TIMEOUT),
            health_check_timeout=load_env_var(ConfigSchema.HEALTH_CHECK_TIMEOUT),
        )
