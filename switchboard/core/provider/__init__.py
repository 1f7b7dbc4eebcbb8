"""Provider management package.

Splits provider handling into focused components:

- ProviderConfigLoader: Loads per-provider configs from the environment
- ClientFactory: Constructs the ProviderClient for each provider kind
- FallbackRule: Ordered model-id heuristics used when the catalog misses
- DefaultModelSelector: Picks the default model from a catalog
- ProviderRegistry: Owns the clients and the catalog, resolves model ids
"""

from switchboard.core.provider.client_factory import ClientFactory
from switchboard.core.provider.default_selector import DefaultModelSelector
from switchboard.core.provider.fallback_rules import (
    DEFAULT_FALLBACK_RULES,
    FallbackRule,
    infer_provider,
)
from switchboard.core.provider.provider_config_loader import (
    ProviderConfigLoader,
    ProviderLoadResult,
)
from switchboard.core.provider.provider_registry import (
    CatalogState,
    ProviderFetchResult,
    ProviderRegistry,
    Resolution,
)

__all__ = [
    "CatalogState",
    "ClientFactory",
    "DEFAULT_FALLBACK_RULES",
    "DefaultModelSelector",
    "FallbackRule",
    "ProviderConfigLoader",
    "ProviderFetchResult",
    "ProviderLoadResult",
    "ProviderRegistry",
    "Resolution",
    "infer_provider",
]
