"""OpenAI API client.

Talks to the OpenAI REST API (or any OpenAI-compatible endpoint) with httpx:
``GET /models`` for the catalog and ``POST /chat/completions`` for generation.

API Documentation: https://platform.openai.com/docs/api-reference
"""

import logging
import re
import time
from typing import Any, Dict, List, Optional

from switchboard.core.models.model_info import ModelDescriptor
from switchboard.core.provider_client import (
    GenerateOptions,
    ProviderClient,
    humanize_model_id,
    is_future_dated,
)

logger = logging.getLogger(__name__)

MAX_LISTED_MODELS = 7

DISPLAY_NAMES: Dict[str, str] = {
    "gpt-4o": "GPT-4 Omni",
    "gpt-4o-mini": "GPT-4 Omni Mini",
    "gpt-4-turbo": "GPT-4 Turbo",
    "gpt-4-turbo-preview": "GPT-4 Turbo Preview",
    "gpt-4-0125-preview": "GPT-4 Turbo (0125 Preview)",
    "gpt-4-vision-preview": "GPT-4 Vision Preview",
    "gpt-4": "GPT-4",
    "gpt-3.5-turbo": "GPT-3.5 Turbo",
    "gpt-3.5-turbo-0125": "GPT-3.5 Turbo (0125)",
    "gpt-3.5-turbo-16k": "GPT-3.5 Turbo (16K)",
}

_DATED_FAMILY = re.compile(r"^(gpt-4o|gpt-4-turbo)-(\d{4}-\d{2}-\d{2})$")

CHAT_MODEL_PATTERNS = (
    re.compile(r"^gpt-4o$"),
    re.compile(r"^gpt-4o-\d{4}-\d{2}-\d{2}$"),
    re.compile(r"^gpt-4o-mini"),
    re.compile(r"^gpt-4-turbo$"),
    re.compile(r"^gpt-4-turbo-\d{4}-\d{2}-\d{2}$"),
    re.compile(r"^gpt-4-turbo-preview$"),
    re.compile(r"^gpt-4-\d{4}-preview$"),
    re.compile(r"^gpt-4$"),
    re.compile(r"^gpt-3\.5-turbo$"),
    re.compile(r"^gpt-3\.5-turbo-\d{4}$"),
    re.compile(r"^gpt-3\.5-turbo-16k$"),
)

EXCLUDED_MODEL_PATTERNS = (
    re.compile(r"instruct$"),
    re.compile(r"davinci|curie|babbage"),
    re.compile(r"embedding|similarity|search"),
    re.compile(r"audio|whisper|tts|realtime|transcribe"),
    re.compile(r"image|dall-e"),
    re.compile(r"-ft-|^ft:"),
    re.compile(r"deprecate", re.IGNORECASE),
)

PREFERRED_ORDER = (
    "gpt-4o",
    "gpt-4o-mini",
    "gpt-4-turbo",
    "gpt-4-turbo-preview",
    "gpt-4-0125-preview",
    "gpt-4",
    "gpt-3.5-turbo",
    "gpt-3.5-turbo-0125",
)


def get_display_name(model_id: str) -> str:
    if model_id in DISPLAY_NAMES:
        return DISPLAY_NAMES[model_id]
    dated = _DATED_FAMILY.match(model_id)
    if dated and dated.group(1) in DISPLAY_NAMES:
        return f"{DISPLAY_NAMES[dated.group(1)]} ({dated.group(2)})"
    return humanize_model_id(model_id)


def _preference_rank(model_id: str) -> int:
    # Longest matching family wins so "gpt-4o-mini-..." ranks as gpt-4o-mini, not gpt-4o
    best: Optional[int] = None
    best_len = -1
    for index, family in enumerate(PREFERRED_ORDER):
        if (model_id == family or model_id.startswith(family + "-")) and len(family) > best_len:
            best, best_len = index, len(family)
    return best if best is not None else len(PREFERRED_ORDER)


def _sort_key(model_id: str) -> tuple:
    # Dated variants sort after their alias, newest first
    dated = re.search(r"-(\d{4}-\d{2}-\d{2}|\d{4})$", model_id)
    date_part = dated.group(1) if dated else ""
    inverted = tuple(-ord(c) for c in date_part)
    return (_preference_rank(model_id), 0 if not date_part else 1, inverted, model_id)


def is_chat_model(model_id: str) -> bool:
    if not any(p.search(model_id) for p in CHAT_MODEL_PATTERNS):
        return False
    return not any(p.search(model_id) for p in EXCLUDED_MODEL_PATTERNS)


class OpenAIClient(ProviderClient):
    """Client for the OpenAI Chat Completions API."""

    provider_name = "openai"
    default_model = "gpt-4o"
    fallback_generation_model = "gpt-3.5-turbo"
    health_probe_model = "gpt-3.5-turbo"
    vendor_label = "OpenAI"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "authorization": f"Bearer {self.api_key}",
            "content-type": "application/json",
        }

    def _display_name(self, model_id: str) -> str:
        return get_display_name(model_id)

    def _select_models(self, raw_models: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Keep current chat models, ordered by preference, capped."""
        ids_seen = set()
        chat_models = []
        for raw in raw_models:
            model_id = raw.get("id")
            if not isinstance(model_id, str) or model_id in ids_seen:
                continue
            if is_future_dated(model_id) or not is_chat_model(model_id):
                continue
            ids_seen.add(model_id)
            chat_models.append(raw)

        chat_models.sort(key=lambda m: _sort_key(m["id"]))
        return chat_models[:MAX_LISTED_MODELS]

    def _to_descriptor(self, raw: Dict[str, Any], is_default: bool) -> ModelDescriptor:
        model_id = raw["id"]
        display_name = self._display_name(model_id)
        metadata = {"owned_by": raw["owned_by"]} if raw.get("owned_by") else {}
        return ModelDescriptor(
            id=model_id,
            display_name=display_name,
            provider_name=self.provider_name,
            description=f"{self.vendor_label} model: {display_name}",
            is_default=is_default,
            metadata=metadata,
        )

    async def list_models(self) -> List[ModelDescriptor]:
        payload = await self._request_json("GET", "/models", "list_models")
        raw_models = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(raw_models, list):
            raise self._bad_response("list_models", "Expected a 'data' list in /models response")

        selected = self._select_models([m for m in raw_models if isinstance(m, dict)])
        ids = [m["id"] for m in selected]
        if self.default_model in ids:
            default_id = self.default_model
        else:
            default_id = ids[0] if len(ids) == 1 else None

        models = [self._to_descriptor(m, m["id"] == default_id) for m in selected]
        logger.debug(f"{self.provider_name} listed {len(raw_models)} models, kept {len(models)}")
        return models

    def _build_messages(self, prompt: str, options: GenerateOptions) -> List[Dict[str, str]]:
        messages = []
        if options.system_prompt:
            messages.append({"role": "system", "content": options.system_prompt})
        messages.append({"role": "user", "content": prompt})
        return messages

    async def generate_text(self, prompt: str, options: Optional[GenerateOptions] = None) -> str:
        options = options or GenerateOptions()
        model_id = options.model_id or self.fallback_generation_model
        start_time = time.time()

        request = {
            "model": model_id,
            "messages": self._build_messages(prompt, options),
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "top_p": options.top_p,
            "stream": False,
        }

        logger.debug(f"📤 {self.provider_name.upper()} REQUEST | Model: {model_id}")
        payload = await self._request_json("POST", "/chat/completions", "generate_text", json=request)

        try:
            content = payload["choices"][0]["message"].get("content") or ""
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise self._bad_response("generate_text", f"Unexpected completion shape: {e}") from e

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"📥 {self.provider_name.upper()} RESPONSE | Duration: {duration_ms:.0f}ms")
        return content.strip()

    async def _probe_health(self) -> None:
        await self._request_json(
            "GET",
            f"/models/{self.health_probe_model}",
            "check_health",
            timeout=self.health_timeout,
        )
