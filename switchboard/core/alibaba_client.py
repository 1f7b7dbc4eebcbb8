"""Alibaba Cloud DashScope client.

DashScope's compatible mode speaks the OpenAI wire protocol, so this client
only changes which models are kept and how they are labelled.
"""

from typing import Any, Dict, List

from switchboard.core.openai_client import OpenAIClient
from switchboard.core.provider_client import humanize_model_id, is_future_dated

QWEN_DISPLAY_NAMES: Dict[str, str] = {
    "qwen-turbo": "Qwen Turbo",
    "qwen-plus": "Qwen Plus",
    "qwen-max": "Qwen Max",
    "qwen-max-longcontext": "Qwen Max Long Context",
}

QWEN_PREFERRED_ORDER = ("qwen-plus", "qwen-max", "qwen-turbo", "qwen-max-longcontext")


class AlibabaClient(OpenAIClient):
    """Client for Qwen models served by DashScope."""

    provider_name = "alibaba"
    default_model = "qwen-plus"
    fallback_generation_model = "qwen-turbo"
    vendor_label = "Alibaba Qwen"

    def _display_name(self, model_id: str) -> str:
        return QWEN_DISPLAY_NAMES.get(model_id) or humanize_model_id(model_id)

    def _select_models(self, raw_models: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        seen = set()
        selected = []
        for raw in raw_models:
            model_id = raw.get("id")
            if not isinstance(model_id, str) or model_id in seen:
                continue
            if not model_id.lower().startswith("qwen") or is_future_dated(model_id):
                continue
            seen.add(model_id)
            selected.append(raw)

        def rank(raw: Dict[str, Any]) -> tuple:
            model_id = raw["id"]
            if model_id in QWEN_PREFERRED_ORDER:
                return (QWEN_PREFERRED_ORDER.index(model_id), model_id)
            return (len(QWEN_PREFERRED_ORDER), model_id)

        selected.sort(key=rank)
        return selected

    async def _probe_health(self) -> None:
        await self._request_json("GET", "/models", "check_health", timeout=self.health_timeout)
