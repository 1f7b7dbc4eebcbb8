"""Anthropic API client.

Uses the Messages API for generation and the Models API for the catalog.
Catalog entries are enriched with a table of known Claude models so that
display names, context windows and the default flag stay stable even when
the upstream listing is terse.
"""

import logging
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

ANTHROPIC_VERSION = "2023-06-01"

KNOWN_CLAUDE_MODELS: Dict[str, Dict[str, Any]] = {
    "claude-opus-4-20250514": {
        "name": "Claude 4 Opus",
        "description": "Anthropic's most powerful model for highly complex tasks.",
    },
    "claude-sonnet-4-20250514": {
        "name": "Claude 4 Sonnet",
        "description": "Anthropic's balanced model for intelligence and speed.",
    },
    "claude-3-5-sonnet-20241022": {
        "name": "Claude 3.5 Sonnet (Newer)",
        "description": "Anthropic's most intelligent 3.5 model (October 2024 release).",
    },
    "claude-3-5-sonnet-20240620": {
        "name": "Claude 3.5 Sonnet",
        "description": "Balances performance and cost (June 2024 release).",
    },
    "claude-3-opus-20240229": {
        "name": "Claude 3 Opus",
        "description": "Powerful model for complex tasks (previous generation).",
    },
    "claude-3-sonnet-20240229": {
        "name": "Claude 3 Sonnet",
        "description": "Balanced intelligence and speed (previous generation).",
    },
    "claude-3-haiku-20240307": {
        "name": "Claude 3 Haiku",
        "description": "Fastest and most compact model for near-instant responsiveness.",
    },
}

CLAUDE_CONTEXT_WINDOW = 200_000


class AnthropicClient(ProviderClient):
    """Client for the Anthropic Messages API."""

    provider_name = "anthropic"
    default_model = "claude-sonnet-4-20250514"
    fallback_generation_model = "claude-3-opus-20240229"

    def _build_headers(self) -> Dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "content-type": "application/json",
            "anthropic-version": ANTHROPIC_VERSION,
        }

    def _to_descriptor(self, raw: Dict[str, Any]) -> ModelDescriptor:
        model_id = raw["id"]
        known = KNOWN_CLAUDE_MODELS.get(model_id, {})
        return ModelDescriptor(
            id=model_id,
            display_name=known.get("name") or raw.get("display_name") or humanize_model_id(model_id),
            provider_name=self.provider_name,
            description=known.get("description"),
            context_window_tokens=CLAUDE_CONTEXT_WINDOW,
            is_default=model_id == self.default_model,
            input_modalities=("text", "image"),
        )

    async def list_models(self) -> List[ModelDescriptor]:
        payload = await self._request_json("GET", "/models", "list_models", params={"limit": 100})
        raw_models = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(raw_models, list):
            raise self._bad_response("list_models", "Expected a 'data' list in /models response")

        models = [
            self._to_descriptor(raw)
            for raw in raw_models
            if isinstance(raw, dict)
            and isinstance(raw.get("id"), str)
            and raw["id"].startswith("claude-")
            and not is_future_dated(raw["id"])
        ]

        # Known models first in table order, then anything else the API reports
        known_order = list(KNOWN_CLAUDE_MODELS)
        models.sort(
            key=lambda m: known_order.index(m.id) if m.id in known_order else len(known_order),
        )
        return models

    async def generate_text(self, prompt: str, options: Optional[GenerateOptions] = None) -> str:
        options = options or GenerateOptions()
        model_id = options.model_id or self.fallback_generation_model
        start_time = time.time()

        request: Dict[str, Any] = {
            "model": model_id,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
            "top_p": options.top_p,
        }
        if options.system_prompt:
            request["system"] = options.system_prompt

        logger.debug(f"📤 ANTHROPIC REQUEST | Model: {model_id}")
        payload = await self._request_json("POST", "/messages", "generate_text", json=request)

        content = payload.get("content") if isinstance(payload, dict) else None
        if not content:
            logger.warning(f"Anthropic response for {model_id} contained no content blocks")
            return ""

        if not isinstance(content, list) or not isinstance(content[0], dict):
            raise self._bad_response("generate_text", "Expected a list of content block objects")

        first_block = content[0]
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(f"📥 ANTHROPIC RESPONSE | Duration: {duration_ms:.0f}ms")

        if first_block.get("type") == "text":
            return str(first_block.get("text", "")).strip()
        logger.warning(
            f"Anthropic response's first content block was type '{first_block.get('type')}', "
            "not 'text'"
        )
        return f"[Received non-text content: {first_block.get('type')}]"

    async def _probe_health(self) -> None:
        await self._request_json(
            "GET",
            "/models",
            "check_health",
            params={"limit": 1},
            timeout=self.health_timeout,
        )
