"""Provider registry and model resolution.

The registry owns one ProviderClient per configured provider, the merged
model catalog and the cache holding it. It is constructed once by the
composition root and handed to request handlers; there is no module-level
instance.

Catalog lifecycle::

    EMPTY -> (load succeeds) -> FRESH -> (ttl elapses) -> STALE -> (refresh) -> FRESH

STALE is a valid serving state. The catalog only returns to EMPTY when the
process restarts.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import Enum

from switchboard.core.error_types import ErrorType, classify_upstream_error
from switchboard.core.exceptions import ConfigurationError
from switchboard.core.models.cache import CATALOG_CACHE_KEY, CacheStore, StalePolicy
from switchboard.core.models.model_info import Catalog, ModelDescriptor
from switchboard.core.provider.client_factory import ClientFactory
from switchboard.core.provider.fallback_rules import (
    DEFAULT_FALLBACK_RULES,
    FallbackRule,
    infer_provider,
)
from switchboard.core.provider_client import ProviderClient
from switchboard.core.provider_config import ProviderConfig

logger = logging.getLogger(__name__)


class CatalogState(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"


@dataclass(frozen=True, slots=True)
class ProviderFetchResult:
    """Outcome of one provider's ``list_models()`` during a refresh."""

    provider_name: str
    models: tuple[ModelDescriptor, ...] = ()
    error_type: ErrorType | None = None
    error: str | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error_type is None


@dataclass(frozen=True, slots=True)
class Resolution:
    """How a model id was mapped to a provider."""

    model_id: str
    provider_name: str
    client: ProviderClient = field(compare=False)
    descriptor: ModelDescriptor | None = None
    fallback_rule: FallbackRule | None = None

    @property
    def via_fallback(self) -> bool:
        return self.descriptor is None


class ProviderRegistry:
    """Holds provider clients and resolves model ids to them.

    Responsibilities:
    - Construct and own one client per configured provider (``initialize``)
    - Aggregate every provider's catalog concurrently and cache the merge (``load_models``)
    - Serve the catalog without network I/O (``list_available_models``)
    - Resolve a model id to a client, with ordered fallback inference (``resolve``)
    - Probe every provider's health concurrently (``check_all_health``)

    A failing provider never aborts an aggregate operation: it contributes
    zero models to a refresh and ``False`` to a health report.
    """

    def __init__(
        self,
        cache: CacheStore | None = None,
        client_factory: ClientFactory | None = None,
        fallback_rules: Iterable[FallbackRule] = DEFAULT_FALLBACK_RULES,
        stale_policy: StalePolicy = StalePolicy.SERVE,
    ) -> None:
        self._cache = cache if cache is not None else CacheStore()
        self._client_factory = client_factory or ClientFactory()
        self._fallback_rules = tuple(fallback_rules)
        self._stale_policy = StalePolicy(stale_policy)

        # Insertion order is registration order; it drives dedup tie-breaks
        self._clients: dict[str, ProviderClient] = {}
        self._catalog = Catalog.empty()
        self._initialized = False
        self._refresh_lock = asyncio.Lock()
        self._last_fetch_results: tuple[ProviderFetchResult, ...] = ()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def initialize(self, provider_configs: Iterable[ProviderConfig]) -> list[str]:
        """Construct a client for every provider config, in order.

        A provider whose construction fails is logged and left out; the
        remaining providers are still registered.

        Returns:
            Names of the registered providers, in registration order.

        Raises:
            RuntimeError: If called more than once.
        """
        if self._initialized:
            raise RuntimeError("ProviderRegistry is already initialized")
        self._initialized = True

        for config in provider_configs:
            if config.name in self._clients:
                logger.warning(f"Provider '{config.name}' is configured twice, keeping the first")
                continue
            try:
                client = self._client_factory.create(config)
            except ConfigurationError as e:
                logger.warning(f"Skipping provider '{config.name}': {e.message}")
                continue
            except Exception as e:
                logger.warning(
                    f"Skipping provider '{config.name}': failed to construct client: {e}"
                )
                continue
            self._clients[config.name] = client
            logger.debug(f"Registered provider '{config.name}' ({client!r})")

        if self._clients:
            logger.info(f"Registered providers: {', '.join(self._clients)}")
        else:
            logger.warning("No providers registered; set at least one {PROVIDER}_API_KEY")
        return list(self._clients)

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def providers(self) -> tuple[str, ...]:
        return tuple(self._clients)

    def get_client(self, provider_name: str) -> ProviderClient | None:
        return self._clients.get(provider_name.lower())

    @property
    def cache(self) -> CacheStore:
        return self._cache

    @property
    def stale_policy(self) -> StalePolicy:
        return self._stale_policy

    @property
    def last_fetch_results(self) -> tuple[ProviderFetchResult, ...]:
        return self._last_fetch_results

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def load_models(self, force_refresh: bool = False) -> Catalog:
        """Return the model catalog, fetching from providers when needed.

        Without ``force_refresh`` an existing cache entry is returned as is.
        Under ``StalePolicy.REFRESH`` a stale entry triggers a fetch instead.
        A forced refresh always issues exactly one ``list_models()`` per
        registered provider.

        Refreshes are serialized: a caller arriving while another refresh is
        running waits for it, and a non-forced caller then reuses its result.
        """
        if not force_refresh:
            cached = self._serveable_cached_catalog()
            if cached is not None:
                return cached

        async with self._refresh_lock:
            if not force_refresh:
                cached = self._serveable_cached_catalog()
                if cached is not None:
                    return cached
            return await self._refresh()

    def _serveable_cached_catalog(self) -> Catalog | None:
        entry = self._cache.get(CATALOG_CACHE_KEY)
        if entry is None:
            return None
        if self._stale_policy is StalePolicy.REFRESH and not entry.is_fresh(self._cache.now()):
            logger.debug("Cached catalog is stale, refreshing")
            return None
        return entry.value

    async def _refresh(self) -> Catalog:
        clients = list(self._clients.items())
        if not clients:
            logger.warning("Catalog refresh skipped: no providers registered")
            return self.list_available_models()

        start_time = time.time()
        # gather() returns results in argument order, i.e. registration order,
        # regardless of which fetch completes first
        results = await asyncio.gather(
            *(self._fetch_models(name, client) for name, client in clients)
        )
        self._last_fetch_results = tuple(results)

        succeeded = [r for r in results if r.ok]
        if not succeeded:
            logger.error(
                f"Catalog refresh failed for all {len(results)} providers; "
                "keeping the previous catalog"
            )
            return self.list_available_models()

        merged = Catalog(model for result in results for model in result.models)
        self._catalog = merged
        self._cache.set(CATALOG_CACHE_KEY, merged)

        duration_ms = (time.time() - start_time) * 1000
        failed = [r.provider_name for r in results if not r.ok]
        logger.info(
            f"Catalog refreshed: {len(merged)} models from "
            f"{len(succeeded)}/{len(results)} providers in {duration_ms:.0f}ms"
            + (f" (failed: {', '.join(failed)})" if failed else "")
        )
        return merged

    async def _fetch_models(self, name: str, client: ProviderClient) -> ProviderFetchResult:
        start_time = time.time()
        try:
            models = await asyncio.wait_for(client.list_models(), timeout=client.timeout)
        except Exception as e:
            error_type = classify_upstream_error(e)
            logger.warning(
                f"Failed to load models from provider '{name}': "
                f"{error_type.value} - {str(e) or type(e).__name__}"
            )
            return ProviderFetchResult(
                provider_name=name,
                error_type=error_type,
                error=str(e) or type(e).__name__,
                duration_ms=(time.time() - start_time) * 1000,
            )

        attributed = []
        for model in models:
            if model.provider_name != name:
                logger.debug(
                    f"Re-attributing model '{model.id}' from '{model.provider_name}' to '{name}'"
                )
                model = replace(model, provider_name=name)
            attributed.append(model)

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"Provider '{name}' returned {len(attributed)} models in {duration_ms:.0f}ms")
        return ProviderFetchResult(
            provider_name=name, models=tuple(attributed), duration_ms=duration_ms
        )

    def list_available_models(self) -> Catalog:
        """Return the in-memory catalog, else the cached one, else an empty one.

        Never performs network I/O.
        """
        if self._catalog:
            return self._catalog
        entry = self._cache.get(CATALOG_CACHE_KEY)
        if entry is not None:
            return entry.value
        return Catalog.empty()

    def catalog_state(self) -> CatalogState:
        entry = self._cache.get(CATALOG_CACHE_KEY)
        if entry is None:
            return CatalogState.EMPTY
        return CatalogState.FRESH if entry.is_fresh(self._cache.now()) else CatalogState.STALE

    async def prime_cache(self) -> Catalog:
        """Initial forced load, scheduled by the application at startup."""
        catalog = await self.load_models(force_refresh=True)
        if not catalog:
            logger.warning("Model catalog is empty after startup load")
        return catalog

    async def refresh_periodically(self, interval_seconds: float) -> None:
        """Force a refresh every ``interval_seconds`` until cancelled."""
        logger.info(f"Periodic catalog refresh every {interval_seconds:g}s")
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.load_models(force_refresh=True)
            except Exception as e:
                logger.error(f"Periodic catalog refresh failed: {e}")

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, model_id: str) -> ProviderClient | None:
        """Return the client serving ``model_id``, or None when it cannot be resolved.

        A miss is a normal outcome (unconfigured or mistyped model id), not
        an error. Never performs network I/O.
        """
        resolution = self.resolve_detailed(model_id)
        return resolution.client if resolution is not None else None

    def resolve_detailed(self, model_id: str) -> Resolution | None:
        if not model_id:
            return None

        descriptor = self.list_available_models().get(model_id)
        if descriptor is not None:
            client = self._clients.get(descriptor.provider_name)
            if client is not None:
                return Resolution(
                    model_id=model_id,
                    provider_name=descriptor.provider_name,
                    client=client,
                    descriptor=descriptor,
                )
            logger.debug(
                f"Catalog entry '{model_id}' names unregistered provider "
                f"'{descriptor.provider_name}', trying fallback rules"
            )

        rule = infer_provider(model_id, self._fallback_rules)
        if rule is None:
            logger.debug(f"No provider found for model '{model_id}'")
            return None

        client = self._clients.get(rule.provider_name)
        if client is None:
            logger.debug(
                f"Model '{model_id}' matched rule ({rule.description}) for provider "
                f"'{rule.provider_name}', which is not registered"
            )
            return None

        logger.debug(f"Model '{model_id}' resolved to '{rule.provider_name}' by fallback rule")
        return Resolution(
            model_id=model_id,
            provider_name=rule.provider_name,
            client=client,
            fallback_rule=rule,
        )

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    async def check_all_health(self) -> dict[str, bool]:
        """Probe every registered provider concurrently.

        The result has exactly one entry per registered provider.
        """
        names = list(self._clients)
        statuses = await asyncio.gather(
            *(self._probe_health(name, self._clients[name]) for name in names)
        )
        return dict(zip(names, statuses))

    async def _probe_health(self, name: str, client: ProviderClient) -> bool:
        try:
            return bool(await asyncio.wait_for(client.check_health(), timeout=client.health_timeout))
        except Exception as e:
            logger.warning(
                f"Health check for provider '{name}' failed: "
                f"{classify_upstream_error(e).value} - {str(e) or type(e).__name__}"
            )
            return False

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close every provider's HTTP client."""
        for name, client in self._clients.items():
            try:
                await client.aclose()
            except Exception as e:
                logger.warning(f"Error closing client for provider '{name}': {e}")

    def __repr__(self) -> str:
        return (
            f"ProviderRegistry(providers={list(self._clients)}, "
            f"models={len(self.list_available_models())}, state={self.catalog_state().value})"
        )
