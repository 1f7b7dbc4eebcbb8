"""Provider configuration loading from environment variables."""

import hashlib
import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional

from switchboard.core.provider_config import ProviderConfig, get_default_base_url

logger = logging.getLogger(__name__)


@dataclass
class ProviderLoadResult:
    """Result of loading a provider configuration."""

    name: str
    status: str  # "success", "partial", "missing"
    message: Optional[str] = None
    api_key_hash: Optional[str] = None
    base_url: Optional[str] = None


class ProviderConfigLoader:
    """Loads per-provider configuration from the environment.

    Responsibilities:
    - Read {PROVIDER}_API_KEY and {PROVIDER}_BASE_URL for each requested provider
    - Fall back to the built-in base URL when no override is set
    - Parse {PROVIDER}_CUSTOM_HEADER_* into HTTP headers
    - Record a ProviderLoadResult per provider for startup reporting

    A provider without an API key is not an error: it is reported as
    "missing" and left out of the returned configs.
    """

    def __init__(self, timeout: float = 30.0, health_timeout: float = 5.0) -> None:
        self.timeout = timeout
        self.health_timeout = health_timeout
        self._results: List[ProviderLoadResult] = []

    @property
    def results(self) -> List[ProviderLoadResult]:
        return list(self._results)

    def get_custom_headers(self, provider_prefix: str) -> dict[str, str]:
        """Extract provider-specific custom headers from environment.

        Args:
            provider_prefix: The uppercase provider prefix (e.g., "OPENAI").

        Returns:
            Dictionary of header names to values.
        """
        custom_headers = {}
        prefix = f"{provider_prefix.upper()}_CUSTOM_HEADER_"

        for env_key, env_value in os.environ.items():
            if env_key.startswith(prefix):
                header_name = env_key[len(prefix) :]
                if header_name:
                    # Convert underscores to hyphens for HTTP header format
                    custom_headers[header_name.replace("_", "-")] = env_value

        return custom_headers

    def load_provider(self, provider_name: str) -> Optional[ProviderConfig]:
        """Load a single provider configuration.

        Args:
            provider_name: The name of the provider (case-insensitive).

        Returns:
            ProviderConfig when a credential is present and a base URL can be
            determined, None otherwise.
        """
        name = provider_name.strip().lower()
        provider_upper = name.upper()

        api_key = (os.environ.get(f"{provider_upper}_API_KEY") or "").strip()
        if not api_key:
            self._results.append(
                ProviderLoadResult(
                    name=name,
                    status="missing",
                    message=f"{provider_upper}_API_KEY not set",
                )
            )
            return None

        base_url = os.environ.get(f"{provider_upper}_BASE_URL") or get_default_base_url(name)
        if not base_url:
            self._results.append(
                ProviderLoadResult(
                    name=name,
                    status="partial",
                    message=f"Missing {provider_upper}_BASE_URL",
                    api_key_hash=self._get_api_key_hash(api_key),
                )
            )
            return None

        self._results.append(
            ProviderLoadResult(
                name=name,
                status="success",
                api_key_hash=self._get_api_key_hash(api_key),
                base_url=base_url,
            )
        )
        return ProviderConfig(
            name=name,
            api_key=api_key,
            base_url=base_url,
            timeout=self.timeout,
            health_timeout=self.health_timeout,
            custom_headers=self.get_custom_headers(provider_upper),
        )

    def load_all(self, provider_names: Iterable[str]) -> List[ProviderConfig]:
        """Load configs in the given order, skipping duplicates and absent credentials."""
        self._results = []
        configs: List[ProviderConfig] = []
        seen = set()
        for provider_name in provider_names:
            name = provider_name.strip().lower()
            if not name or name in seen:
                continue
            seen.add(name)
            config = self.load_provider(name)
            if config is not None:
                configs.append(config)

        logger.debug(f"Loaded provider configs: {[c.name for c in configs]}")
        return configs

    @staticmethod
    def _get_api_key_hash(api_key: str) -> str:
        """Return first 8 chars of sha256 hash."""
        return hashlib.sha256(api_key.encode()).hexdigest()[:8]
