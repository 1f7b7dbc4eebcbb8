"""Catalog cache configuration module.

This module handles:
- The single TTL shared by the cached model catalog
- The policy applied to a stale catalog on non-forced loads
- The optional background refresh interval
"""

from dataclasses import dataclass

from switchboard.core.config.schema import ConfigSchema
from switchboard.core.config.validation import load_env_var
from switchboard.core.models.cache import StalePolicy


@dataclass(frozen=True)
class CacheConfig:
    """Configuration for the model catalog cache.

    Attributes:
        ttl_seconds: Seconds a loaded catalog is considered fresh
        stale_policy: Whether a stale catalog is served or refetched on a non-forced load
        refresh_interval_seconds: Period of background forced refreshes, 0 disables them
    """

    ttl_seconds: float
    stale_policy: StalePolicy
    refresh_interval_seconds: float

    @property
    def periodic_refresh_enabled(self) -> bool:
        return self.refresh_interval_seconds > 0


class CacheSettings:
    """Loads catalog cache configuration from environment variables."""

    @staticmethod
    def load() -> CacheConfig:
        return CacheConfig(
            ttl_seconds=load_env_var(ConfigSchema.CACHE_TTL_SECONDS),
            stale_policy=load_env_var(ConfigSchema.CATALOG_STALE_POLICY),
            refresh_interval_seconds=load_env_var(ConfigSchema.CATALOG_REFRESH_INTERVAL_SECONDS),
        )
