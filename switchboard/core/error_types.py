"""Error type enumeration for Switchboard.

Provides type-safe error categorization for upstream failures and error responses.
"""

import asyncio
from enum import Enum

import httpx


class ErrorType(str, Enum):
    """Error type categories for logs and error responses.

    These error types are used throughout the codebase for:
    - UpstreamFetchError.error_type
    - Provider failure log lines during catalog refresh and health probes
    - The "type" field of JSON error responses

    When adding new error types:
    1. Add the enum value here
    2. Teach classify_upstream_error() about it if it maps from an exception
    3. Document when the error type is used
    """

    # Configuration
    CONFIGURATION_ERROR = "configuration_error"  # Missing credential or invalid setting

    # Upstream lifecycle errors
    UPSTREAM_TIMEOUT = "upstream_timeout"  # Provider call exceeded its timeout
    UPSTREAM_CONNECTION_ERROR = "upstream_connection_error"  # Could not reach provider
    UPSTREAM_HTTP_ERROR = "upstream_http_error"  # Provider returned a non-2xx status
    UPSTREAM_BAD_RESPONSE = "upstream_bad_response"  # Malformed provider payload
    UPSTREAM_ERROR = "upstream_error"  # Generic upstream error

    # Authentication/rate limiting
    AUTH_ERROR = "auth_error"  # Provider rejected the credential
    RATE_LIMIT = "rate_limit"  # Provider rate limit exceeded

    # Request errors
    BAD_REQUEST = "bad_request"  # Invalid request
    NOT_FOUND = "not_found"  # Model could not be resolved
    SERVICE_UNAVAILABLE = "service_unavailable"  # No models available

    # Catch-all
    UNEXPECTED_ERROR = "unexpected_error"  # Unhandled/unexpected error


def classify_upstream_error(exc: BaseException) -> ErrorType:
    """Map an exception raised by a provider call to an ErrorType."""
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError, TimeoutError)):
        return ErrorType.UPSTREAM_TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status in (401, 403):
            return ErrorType.AUTH_ERROR
        if status == 429:
            return ErrorType.RATE_LIMIT
        return ErrorType.UPSTREAM_HTTP_ERROR
    if isinstance(exc, httpx.TransportError):
        return ErrorType.UPSTREAM_CONNECTION_ERROR
    if isinstance(exc, (ValueError, KeyError, TypeError)):
        return ErrorType.UPSTREAM_BAD_RESPONSE
    error_type = getattr(exc, "error_type", None)
    if isinstance(error_type, ErrorType):
        return error_type
    return ErrorType.UPSTREAM_ERROR
