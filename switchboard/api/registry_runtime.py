"""FastAPI dependency injection for the ProviderRegistry.

The registry is created by the application lifespan and stored on
``app.state``; handlers receive it through these accessors instead of a
module-level instance.
"""

from fastapi import Request

from switchboard.core.provider.default_selector import DefaultModelSelector
from switchboard.core.provider.provider_registry import ProviderRegistry


def get_registry(request: Request) -> ProviderRegistry:
    """Return the ProviderRegistry owned by the FastAPI app.

    Raises:
        RuntimeError: If the application lifespan has not set up a registry
        TypeError: If app.state.registry is not a ProviderRegistry
    """
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise RuntimeError("ProviderRegistry is not initialized (application lifespan not run)")
    if not isinstance(registry, ProviderRegistry):
        raise TypeError(
            f"app.state.registry must be ProviderRegistry, got {type(registry).__name__}"
        )
    return registry


def get_default_selector(request: Request) -> DefaultModelSelector:
    selector = getattr(request.app.state, "default_selector", None)
    if selector is None:
        return DefaultModelSelector()
    return selector
