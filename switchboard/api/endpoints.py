import logging
import time
import uuid
from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from switchboard import __version__
from switchboard.api.models.endpoint_requests import GenerateRequest, ModelsListRequest
from switchboard.api.registry_runtime import get_default_selector, get_registry
from switchboard.api.services.error_handling import ErrorResponseBuilder
from switchboard.core.exceptions import UpstreamFetchError
from switchboard.core.logging import ConversationLogger
from switchboard.core.provider.default_selector import DefaultModelSelector
from switchboard.core.provider.provider_registry import ProviderRegistry
from switchboard.core.provider_client import GenerateOptions

logger = logging.getLogger(__name__)
conversation_logger = ConversationLogger.get_logger()

router = APIRouter()


@router.get("/api/models/available")
async def available_models(
    request: ModelsListRequest = Depends(ModelsListRequest.from_fastapi),
    registry: ProviderRegistry = Depends(get_registry),
) -> list[dict[str, Any]]:
    """List the cached catalog. Never calls a provider."""
    catalog = registry.list_available_models()
    if not catalog:
        logger.warning("Returning an empty model list; check provider refresh logs")

    if request.provider:
        return [model.to_dict() for model in catalog.by_provider(request.provider)]
    return catalog.to_list()


@router.get("/api/models/default", response_model=None)
async def default_model(
    registry: ProviderRegistry = Depends(get_registry),
    selector: DefaultModelSelector = Depends(get_default_selector),
) -> Dict[str, Any] | JSONResponse:
    model = selector.select(registry.list_available_models())
    if model is None:
        return ErrorResponseBuilder.not_found("Default model", "catalog is empty")
    return model.to_dict()


@router.post("/api/models/refresh")
async def refresh_models(registry: ProviderRegistry = Depends(get_registry)) -> Dict[str, Any]:
    """Force one catalog fetch from every registered provider."""
    catalog = await registry.load_models(force_refresh=True)
    return {
        "count": len(catalog),
        "state": registry.catalog_state().value,
        "providers": [
            {
                "name": result.provider_name,
                "ok": result.ok,
                "model_count": len(result.models),
                "error_type": result.error_type.value if result.error_type else None,
                "duration_ms": round(result.duration_ms, 1),
            }
            for result in registry.last_fetch_results
        ],
        "models": catalog.to_list(),
    }


@router.get("/api/models/health")
async def providers_health(registry: ProviderRegistry = Depends(get_registry)) -> Dict[str, bool]:
    return await registry.check_all_health()


@router.post("/api/generate", response_model=None)
async def generate_text(
    body: GenerateRequest,
    registry: ProviderRegistry = Depends(get_registry),
    selector: DefaultModelSelector = Depends(get_default_selector),
) -> Dict[str, Any] | JSONResponse:
    request_id = str(uuid.uuid4())

    with ConversationLogger.correlation_context(request_id):
        model_id = body.model_id
        if model_id is None:
            default = selector.select(registry.list_available_models())
            if default is None:
                return ErrorResponseBuilder.service_unavailable(
                    "No models available; cannot pick a default model"
                )
            model_id = default.id
            conversation_logger.info(f"No model requested, using default '{model_id}'")

        resolution = registry.resolve_detailed(model_id)
        if resolution is None:
            if not registry.list_available_models():
                return ErrorResponseBuilder.service_unavailable(
                    f"No models available; cannot resolve '{model_id}'"
                )
            conversation_logger.warning(f"No provider found for model '{model_id}'")
            return ErrorResponseBuilder.not_found("Model", model_id)

        options = GenerateOptions(model_id=model_id, system_prompt=body.system_prompt)
        if body.max_tokens is not None:
            options.max_tokens = body.max_tokens
        if body.temperature is not None:
            options.temperature = body.temperature

        conversation_logger.info(
            f"Generating with {resolution.provider_name}/{model_id} "
            f"(input: {len(body.input_text)} chars, "
            f"system prompt: {'present' if body.system_prompt else 'absent'}"
            f"{', fallback rule' if resolution.via_fallback else ''})"
        )

        start_time = time.time()
        try:
            generated_text = await resolution.client.generate_text(body.input_text, options)
        except UpstreamFetchError as e:
            conversation_logger.error(f"Generation failed: {e}")
            return ErrorResponseBuilder.upstream_error(
                e, context=f"generating text with '{model_id}'"
            )

        duration_ms = (time.time() - start_time) * 1000
        conversation_logger.info(f"Generated {len(generated_text)} chars in {duration_ms:.0f}ms")

    return {
        "generated_text": generated_text,
        "model_used": model_id,
        "provider": resolution.provider_name,
    }


@router.get("/health")
async def health_check(request: Request) -> Dict[str, Any]:
    """Liveness endpoint. Reports registration and catalog state without probing providers."""
    registry = get_registry(request)
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "providers": list(registry.providers),
        "catalog": {
            "state": registry.catalog_state().value,
            "model_count": len(registry.list_available_models()),
        },
    }


@router.get("/")
async def root() -> Dict[str, Any]:
    return {
        "message": f"Switchboard v{__version__}",
        "status": "running",
        "endpoints": {
            "available_models": "/api/models/available",
            "default_model": "/api/models/default",
            "refresh_models": "/api/models/refresh",
            "providers_health": "/api/models/health",
            "generate": "/api/generate",
            "health": "/health",
        },
    }
