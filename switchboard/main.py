"""Application composition root.

``create_app`` wires configuration, the ProviderRegistry and the HTTP routes.
The lifespan handler is the bootstrap: it registers one client per provider
with a credential, primes the catalog in the background, optionally runs the
periodic refresher, and closes provider HTTP clients at shutdown.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from switchboard import __version__
from switchboard.api.endpoints import router as api_router
from switchboard.api.services.error_handling import ErrorResponseBuilder
from switchboard.core.config import Config
from switchboard.core.logging import configure_root_logging
from switchboard.core.models.cache import CacheStore
from switchboard.core.provider.default_selector import DefaultModelSelector
from switchboard.core.provider.provider_registry import ProviderRegistry

logger = logging.getLogger(__name__)


def build_registry(config: Config) -> ProviderRegistry:
    """Construct and initialize a registry from configuration."""
    registry = ProviderRegistry(
        cache=CacheStore(default_ttl=config.cache_ttl_seconds),
        stale_policy=config.stale_policy,
    )
    registry.initialize(config.load_provider_configs())
    return registry


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    name = ".".join(location) or "body"
    return ErrorResponseBuilder.invalid_parameter(name, first.get("msg", "invalid value"))


def create_app(
    config: Config | None = None,
    registry: ProviderRegistry | None = None,
    prime_on_startup: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings to use; loaded from the environment when omitted.
        registry: Pre-built registry (tests); built from ``config`` when omitted.
        prime_on_startup: Whether to schedule the initial forced catalog load.
    """
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        active_registry = registry if registry is not None else build_registry(config)
        if not active_registry.initialized:
            active_registry.initialize(config.load_provider_configs())

        app.state.config = config
        app.state.registry = active_registry
        app.state.default_selector = DefaultModelSelector(config.default_provider)

        background: list[asyncio.Task] = []
        if prime_on_startup:
            background.append(
                asyncio.create_task(active_registry.prime_cache(), name="catalog-prime")
            )
        if config.refresh_interval_seconds > 0:
            background.append(
                asyncio.create_task(
                    active_registry.refresh_periodically(config.refresh_interval_seconds),
                    name="catalog-refresh",
                )
            )

        try:
            yield
        finally:
            for task in background:
                task.cancel()
            await asyncio.gather(*background, return_exceptions=True)
            await active_registry.aclose()
            logger.debug("Provider clients closed")

    app = FastAPI(title="Switchboard", version=__version__, lifespan=lifespan)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(api_router)
    return app


def main() -> None:
    config = Config()
    log_level = configure_root_logging(config.log_level).lower()

    print(f"🚀 Switchboard v{__version__}")
    print(f"   Providers: {', '.join(config.provider_names)}")
    print(f"   Catalog TTL: {config.cache_ttl_seconds:g}s ({config.stale_policy.value} when stale)")
    print(f"   Server: {config.host}:{config.port}")
    print("")

    uvicorn.run(
        "switchboard.main:create_app",
        factory=True,
        host=config.host,
        port=config.port,
        log_level=log_level,
        access_log=log_level == "debug",
        reload=False,
    )


if __name__ == "__main__":
    main()
