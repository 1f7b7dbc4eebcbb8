"""Google Gemini client for the Generative Language REST API.

The API key travels in the ``x-goog-api-key`` header, never in the URL.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

from switchboard.core.models.model_info import ModelDescriptor
from switchboard.core.provider_client import (
    GenerateOptions,
    ProviderClient,
    humanize_model_id,
    is_future_dated,
)

logger = logging.getLogger(__name__)

MAX_LISTED_MODELS = 5

PREFERRED_DEFAULTS = (
    "gemini-2.5-pro",
    "gemini-2.0-pro",
    "gemini-2.5-flash",
    "gemini-2.0-flash",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
)

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


def series_rank(model_id: str) -> int:
    """Higher is newer."""
    if "gemini-2.5" in model_id:
        return 5
    if "gemini-2.0" in model_id:
        return 4
    if "gemini-2." in model_id:
        return 3
    if "gemini-1.5" in model_id:
        return 2
    if "gemini-1.0" in model_id:
        return 1
    return 0


def _sort_key(model_id: str) -> Tuple[int, int, int, Tuple[int, ...]]:
    if "-pro" in model_id:
        tier = 0
    elif "-flash" in model_id:
        tier = 1
    else:
        tier = 2
    latest = 0 if "-latest" in model_id else 1
    # Reverse lexical order within a tier so newer dated versions come first
    inverted = tuple(-ord(c) for c in model_id)
    return (-series_rank(model_id), tier, latest, inverted)


def _is_text_generation_model(raw: Dict[str, Any]) -> bool:
    name = raw.get("name")
    methods = raw.get("supportedGenerationMethods") or []
    if not isinstance(name, str) or not name.startswith("models/gemini-"):
        return False
    if "generateContent" not in methods:
        return False
    if "vision" in name and "pro" not in name:
        return False
    return not is_future_dated(name)


def pick_default(model_ids: List[str]) -> Optional[str]:
    """First preferred family present in ``model_ids``, else the first id."""
    for preferred in PREFERRED_DEFAULTS:
        for model_id in model_ids:
            if preferred in model_id:
                return model_id
    return model_ids[0] if model_ids else None


class GoogleClient(ProviderClient):
    """Client for Gemini models."""

    provider_name = "google"
    default_model = "gemini-1.5-pro-latest"

    def _build_headers(self) -> Dict[str, str]:
        return {"x-goog-api-key": self.api_key, "content-type": "application/json"}

    def _to_descriptor(self, raw: Dict[str, Any], is_default: bool) -> ModelDescriptor:
        model_id = raw["name"].replace("models/", "", 1)
        display_name = raw.get("displayName") or humanize_model_id(model_id)
        context_window = raw.get("inputTokenLimit")
        return ModelDescriptor(
            id=model_id,
            display_name=display_name,
            provider_name=self.provider_name,
            description=raw.get("description") or f"Google Gemini model: {display_name}",
            context_window_tokens=context_window if isinstance(context_window, int) else None,
            is_default=is_default,
            input_modalities=("text", "image"),
        )

    async def list_models(self) -> List[ModelDescriptor]:
        payload = await self._request_json(
            "GET", "/models", "list_models", params={"pageSize": 1000}
        )
        raw_models = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(raw_models, list):
            raise self._bad_response("list_models", "Expected a 'models' list in /models response")

        candidates = [m for m in raw_models if isinstance(m, dict) and _is_text_generation_model(m)]
        candidates.sort(key=lambda m: _sort_key(m["name"].replace("models/", "", 1)))
        candidates = candidates[:MAX_LISTED_MODELS]

        ids = [m["name"].replace("models/", "", 1) for m in candidates]
        default_id = pick_default(ids)
        models = [self._to_descriptor(m, model_id == default_id) for m, model_id in zip(candidates, ids)]
        logger.debug(f"google listed {len(raw_models)} models, kept {len(models)}")
        return models

    async def generate_text(self, prompt: str, options: Optional[GenerateOptions] = None) -> str:
        options = options or GenerateOptions()
        model_id = options.model_id or self.default_model
        start_time = time.time()

        request: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": options.max_tokens,
                "temperature": options.temperature,
                "topP": options.top_p,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                for category in SAFETY_CATEGORIES
            ],
        }
        if options.system_prompt:
            request["systemInstruction"] = {"parts": [{"text": options.system_prompt}]}

        logger.debug(f"📤 GOOGLE REQUEST | Model: {model_id}")
        payload = await self._request_json(
            "POST",
            f"/models/{model_id}:generateContent",
            "generate_text",
            json=request,
        )

        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._bad_response("generate_text", f"Unexpected generateContent shape: {e}") from e

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"📥 GOOGLE RESPONSE | Duration: {duration_ms:.0f}ms")
        return "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict)).strip()

    async def _probe_health(self) -> None:
        await self._request_json(
            "GET",
            "/models",
            "check_health",
            params={"pageSize": 1},
            timeout=self.health_timeout,
        )
