"""ProviderClient capability contract.

One ProviderClient exists per configured vendor. Each exposes the same four
capabilities: ``generate_text``, ``list_models``, ``check_health`` and
``estimate_cost``. Construction fails fast with ConfigurationError when the
credential is missing, so a provider without a key is never registered.
"""

import asyncio
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, List, Optional

import httpx

from switchboard.core.error_types import ErrorType, classify_upstream_error
from switchboard.core.exceptions import ConfigurationError, UpstreamFetchError
from switchboard.core.models.model_info import ModelDescriptor
from switchboard.core.provider_config import get_default_base_url

logger = logging.getLogger(__name__)

_DATE_IN_ID = re.compile(r"(\d{4})-?(\d{2})-?(\d{2})")


@dataclass
class GenerateOptions:
    """Options for a single text-generation call."""

    model_id: Optional[str] = None
    max_tokens: int = 1500
    temperature: float = 0.7
    top_p: float = 1.0
    system_prompt: Optional[str] = None


def is_future_dated(model_id: str, now: Optional[datetime] = None) -> bool:
    """True when a date embedded in the id is more than one year ahead."""
    match = _DATE_IN_ID.search(model_id)
    if not match:
        return False
    current_year = (now or datetime.now(timezone.utc)).year
    return int(match.group(1)) > current_year + 1


def humanize_model_id(model_id: str) -> str:
    """'gpt-4-turbo' -> 'Gpt 4 Turbo'"""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), model_id.replace("-", " "))


class ProviderClient(ABC):
    """Base class for vendor clients.

    Subclasses set ``provider_name`` and ``default_model`` and implement the
    vendor wire protocol. The shared pieces live here:
    - credential check and header construction
    - one httpx.AsyncClient per provider, bounded by the provider timeout
    - error wrapping into UpstreamFetchError
    - health probing bounded by ``health_timeout`` and mapped to a bool
    """

    provider_name: ClassVar[str]
    default_model: ClassVar[str]

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        health_timeout: float = 5.0,
        custom_headers: Optional[Dict[str, str]] = None,
    ) -> None:
        if not api_key:
            raise ConfigurationError(self.provider_name, "API key is not configured")

        resolved_base_url = base_url or get_default_base_url(self.provider_name)
        if not resolved_base_url:
            raise ConfigurationError(self.provider_name, "Base URL is not configured")

        self.api_key = api_key
        self.base_url = resolved_base_url.rstrip("/")
        self.timeout = timeout
        self.health_timeout = health_timeout
        self.custom_headers = custom_headers or {}

        self.headers = self._build_headers()
        self.headers.update(self.custom_headers)

        self.client = httpx.AsyncClient(timeout=timeout, headers=self.headers)

    @property
    def name(self) -> str:
        return self.provider_name

    def _build_headers(self) -> Dict[str, str]:
        return {"content-type": "application/json"}

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    @abstractmethod
    async def generate_text(self, prompt: str, options: Optional[GenerateOptions] = None) -> str:
        """Generate a completion for ``prompt`` and return it as plain text."""

    @abstractmethod
    async def list_models(self) -> List[ModelDescriptor]:
        """Fetch the provider's catalog.

        Raises:
            UpstreamFetchError: If the catalog call fails.
        """

    @abstractmethod
    async def _probe_health(self) -> None:
        """Issue a cheap vendor-specific liveness call; raise on failure."""

    async def check_health(self) -> bool:
        """Return True if the provider answered the probe within ``health_timeout``."""
        try:
            await asyncio.wait_for(self._probe_health(), timeout=self.health_timeout)
            return True
        except Exception as e:
            logger.warning(
                f"Health check failed for {self.provider_name}: "
                f"{classify_upstream_error(e).value} - {e}"
            )
            return False

    async def estimate_cost(self, prompt: str, model_id: str) -> float:
        logger.warning(
            f"[{self.provider_name}] estimate_cost is not implemented for model {model_id}. "
            "Returning 0."
        )
        return 0.0

    async def aclose(self) -> None:
        await self.client.aclose()

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    async def _request_json(
        self,
        method: str,
        path: str,
        operation: str,
        **kwargs: Any,
    ) -> Any:
        """Send a request relative to ``base_url`` and decode the JSON body.

        Raises:
            UpstreamFetchError: For transport errors, non-2xx statuses and undecodable bodies.
        """
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                self.provider_name,
                operation,
                _error_detail(e.response),
                error_type=classify_upstream_error(e),
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFetchError(
                self.provider_name,
                operation,
                str(e) or type(e).__name__,
                error_type=classify_upstream_error(e),
            ) from e
        except ValueError as e:
            raise UpstreamFetchError(
                self.provider_name,
                operation,
                f"Invalid JSON response: {e}",
                error_type=ErrorType.UPSTREAM_BAD_RESPONSE,
            ) from e

    def _bad_response(self, operation: str, message: str) -> UpstreamFetchError:
        return UpstreamFetchError(
            self.provider_name,
            operation,
            message,
            error_type=ErrorType.UPSTREAM_BAD_RESPONSE,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text[:200]}"
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return f"HTTP {response.status_code}: {error['message']}"
        if isinstance(error, str):
            return f"HTTP {response.status_code}: {error}"
    return f"HTTP {response.status_code}"
