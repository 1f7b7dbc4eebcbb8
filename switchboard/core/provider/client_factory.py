"""Client factory for constructing one ProviderClient per provider kind."""

from typing import Callable, Dict, Mapping, Optional

from switchboard.core.alibaba_client import AlibabaClient
from switchboard.core.anthropic_client import AnthropicClient
from switchboard.core.exceptions import ConfigurationError
from switchboard.core.google_client import GoogleClient
from switchboard.core.openai_client import OpenAIClient
from switchboard.core.provider_client import ProviderClient
from switchboard.core.provider_config import ProviderConfig

ClientBuilder = Callable[[ProviderConfig], ProviderClient]


def _builder(client_class: type[ProviderClient]) -> ClientBuilder:
    def build(config: ProviderConfig) -> ProviderClient:
        return client_class(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            health_timeout=config.health_timeout,
            custom_headers=config.custom_headers,
        )

    return build


DEFAULT_BUILDERS: Dict[str, ClientBuilder] = {
    "openai": _builder(OpenAIClient),
    "anthropic": _builder(AnthropicClient),
    "google": _builder(GoogleClient),
    "alibaba": _builder(AlibabaClient),
}


class ClientFactory:
    """Creates ProviderClient instances from provider configs.

    Responsibilities:
    - Map a provider name to the client implementation that speaks its protocol
    - Pass credentials, base URL, timeouts and custom headers through

    Construction errors (missing credential, unknown provider kind) surface
    as ConfigurationError so the registry can skip that provider.
    """

    def __init__(self, builders: Optional[Mapping[str, ClientBuilder]] = None) -> None:
        self._builders: Dict[str, ClientBuilder] = dict(
            DEFAULT_BUILDERS if builders is None else builders
        )

    def supports(self, provider_name: str) -> bool:
        return provider_name.lower() in self._builders

    @property
    def supported_providers(self) -> tuple[str, ...]:
        return tuple(self._builders)

    def create(self, config: ProviderConfig) -> ProviderClient:
        """Construct the client for ``config``.

        Raises:
            ConfigurationError: If no implementation exists for the provider
                or the client rejects the configuration.
        """
        builder = self._builders.get(config.name)
        if builder is None:
            raise ConfigurationError(
                config.name,
                f"No client implementation (supported: {', '.join(self._builders)})",
            )
        return builder(config)
