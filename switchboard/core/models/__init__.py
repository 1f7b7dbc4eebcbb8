from switchboard.core.models.cache import CATALOG_CACHE_KEY, CacheEntry, CacheStore, StalePolicy
from switchboard.core.models.model_info import Catalog, ModelDescriptor, ModelPricing

__all__ = [
    "CATALOG_CACHE_KEY",
    "CacheEntry",
    "CacheStore",
    "Catalog",
    "ModelDescriptor",
    "ModelPricing",
    "StalePolicy",
]
