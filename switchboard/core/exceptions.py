"""
Exception hierarchy for Switchboard.

All exceptions inherit from SwitchboardError, allowing callers to catch every
library-specific error with a single except clause.

Resolution misses are deliberately not represented here: ``resolve()``
returns None for an unknown model id and callers branch on that.
"""

from __future__ import annotations

from switchboard.core.error_types import ErrorType


class SwitchboardError(Exception):
    """Base exception for all Switchboard errors."""

    pass


class ConfigurationError(SwitchboardError):
    """Raised when a provider cannot be constructed from its configuration.

    Fatal only to that provider's registration: Bootstrap logs it and leaves
    the provider out of the registry.

    Attributes:
        provider: Name of the provider being constructed
        message: Human-readable explanation
    """

    error_type = ErrorType.CONFIGURATION_ERROR

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        self.message = message
        super().__init__(f"Provider '{provider}': {message}")

    def __repr__(self) -> str:
        return f"ConfigurationError(provider={self.provider!r}, message={self.message!r})"


class UpstreamFetchError(SwitchboardError):
    """Raised when a call to a provider's API fails.

    Covers network failures, authentication errors, rate limiting and
    malformed responses. The registry catches it at the per-provider boundary
    and converts it to "zero models" or an unhealthy status.

    Attributes:
        provider: Name of the provider that failed
        operation: The capability being exercised (list_models, check_health, generate_text)
        error_type: Categorized failure
        status_code: Upstream HTTP status, when there was one
    """

    def __init__(
        self,
        provider: str,
        operation: str,
        message: str,
        error_type: ErrorType = ErrorType.UPSTREAM_ERROR,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.operation = operation
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        super().__init__(f"{provider}.{operation} failed ({error_type.value}): {message}")

    def __repr__(self) -> str:
        return (
            f"UpstreamFetchError(provider={self.provider!r}, operation={self.operation!r}, "
            f"error_type={self.error_type.value!r}, status_code={self.status_code!r})"
        )
