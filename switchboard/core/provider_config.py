from dataclasses import dataclass, field
from typing import Dict, Optional

# Built-in endpoints used when no {PROVIDER}_BASE_URL override is set
DEFAULT_BASE_URLS: Dict[str, str] = {
    "openai": "https://api.openai.com/v1",
    "anthropic": "https://api.anthropic.com/v1",
    "google": "https://generativelanguage.googleapis.com/v1beta",
    "alibaba": "https://dashscope.aliyuncs.com/compatible-mode/v1",
}

SUPPORTED_PROVIDERS = tuple(DEFAULT_BASE_URLS)


def get_default_base_url(provider_name: str) -> Optional[str]:
    """Return the built-in base URL for a known provider"""
    return DEFAULT_BASE_URLS.get(provider_name.lower())


@dataclass
class ProviderConfig:
    """Configuration for a specific provider.

    ``api_key`` may be None here: the credential check belongs to the
    ProviderClient constructor, which raises ConfigurationError.
    """

    name: str
    api_key: Optional[str]
    base_url: str
    timeout: float = 30.0
    health_timeout: float = 5.0
    custom_headers: Dict[str, str] = field(default_factory=dict)

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def __post_init__(self) -> None:
        """Validate configuration after initialization"""
        if not self.name:
            raise ValueError("Provider name is required")
        self.name = self.name.lower()
        if not self.base_url:
            raise ValueError(f"Base URL is required for provider '{self.name}'")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive for provider '{self.name}'")
        if self.health_timeout <= 0:
            raise ValueError(f"Health check timeout must be positive for provider '{self.name}'")
