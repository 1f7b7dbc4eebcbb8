"""Configuration facade for Switchboard.

Configuration is organized into focused modules:
- server: Server settings (host, port, log level)
- cache: Catalog cache settings (TTL, stale policy, refresh interval)
- providers: Shared provider settings (registration order, default provider, timeouts)

There is no module-level instance. The composition root (``create_app`` or a
CLI command) constructs one Config and passes it down.
"""

from switchboard.core.config.cache import CacheConfig, CacheSettings
from switchboard.core.config.providers import ProviderSettings, ProvidersConfig
from switchboard.core.config.server import ServerConfig, ServerSettings
from switchboard.core.models.cache import StalePolicy
from switchboard.core.provider.provider_config_loader import (
    ProviderConfigLoader,
    ProviderLoadResult,
)
from switchboard.core.provider_config import ProviderConfig


class Config:
    """Direct property access to every setting.

    All values are loaded at construction time from environment variables
    using schema-based validation, so a bad value fails here with ConfigError.
    """

    def __init__(self) -> None:
        self._server: ServerConfig = ServerSettings.load()
        self._cache: CacheConfig = CacheSettings.load()
        self._providers: ProvidersConfig = ProviderSettings.load()
        self._load_results: list[ProviderLoadResult] = []

    # Server settings
    @property
    def host(self) -> str:
        return self._server.host

    @property
    def port(self) -> int:
        return self._server.port

    @property
    def log_level(self) -> str:
        return self._server.log_level

    # Cache settings
    @property
    def cache_ttl_seconds(self) -> float:
        return self._cache.ttl_seconds

    @property
    def stale_policy(self) -> StalePolicy:
        return self._cache.stale_policy

    @property
    def refresh_interval_seconds(self) -> float:
        return self._cache.refresh_interval_seconds

    # Provider settings
    @property
    def provider_names(self) -> tuple[str, ...]:
        return self._providers.provider_names

    @property
    def default_provider(self) -> str | None:
        return self._providers.default_provider

    @property
    def request_timeout(self) -> float:
        return self._providers.request_timeout

    @property
    def health_check_timeout(self) -> float:
        return self._providers.health_check_timeout

    def load_provider_configs(self) -> list[ProviderConfig]:
        """Read per-provider credentials for every provider in registration order."""
        loader = ProviderConfigLoader(
            timeout=self.request_timeout,
            health_timeout=self.health_check_timeout,
        )
        configs = loader.load_all(self.provider_names)
        self._load_results = loader.results
        return configs

    @property
    def provider_load_results(self) -> list[ProviderLoadResult]:
        """Results of the last ``load_provider_configs()`` call."""
        return list(self._load_results)
