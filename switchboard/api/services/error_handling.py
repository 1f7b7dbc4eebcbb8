"""Error handling services for API endpoints."""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi.responses import JSONResponse

from switchboard.core.error_types import ErrorType, classify_upstream_error

logger = logging.getLogger(__name__)


def _error_body(error_type: str, message: str, details: Any | None = None) -> dict[str, Any]:
    content: dict[str, Any] = {
        "type": "error",
        "error": {
            "type": error_type,
            "message": message,
        },
    }
    if details is not None:
        content["error"]["details"] = details
    return content


@dataclass(frozen=True, slots=True)
class ErrorResponseBuilder:
    """Centralized builder for consistent error responses across all endpoints.

    Error response format:
    {
        "type": "error",
        "error": {
            "type": "<error_type>",
            "message": "<error_message>"
        }
    }
    """

    @staticmethod
    def not_found(resource: str, identifier: str) -> JSONResponse:
        """Build a 404 Not Found error response.

        Args:
            resource: The type of resource that was not found (e.g., "Model")
            identifier: The specific identifier that was not found
        """
        return JSONResponse(
            status_code=404,
            content=_error_body(ErrorType.NOT_FOUND.value, f"{resource} '{identifier}' not found"),
        )

    @staticmethod
    def invalid_parameter(name: str, reason: str, value: Any | None = None) -> JSONResponse:
        """Build a 400 Bad Request error response for invalid parameters."""
        message = f"Invalid parameter '{name}': {reason}"
        if value is not None:
            message += f" (got: {value!r})"
        return JSONResponse(
            status_code=400,
            content=_error_body(ErrorType.BAD_REQUEST.value, message),
        )

    @staticmethod
    def upstream_error(exception: Exception, context: str | None = None) -> JSONResponse:
        """Build a 502 Bad Gateway or 504 Gateway Timeout error response.

        Timeouts map to 504, every other upstream failure to 502.
        """
        error_type = classify_upstream_error(exception)

        if error_type is ErrorType.UPSTREAM_TIMEOUT:
            message = "Upstream request timed out"
            if context:
                message += f" while {context}"
            message += ". Consider increasing REQUEST_TIMEOUT."
            return JSONResponse(status_code=504, content=_error_body(error_type.value, message))

        message = "Upstream service error"
        if context:
            message += f" while {context}"
        return JSONResponse(
            status_code=502,
            content=_error_body(error_type.value, message, details=str(exception)),
        )

    @staticmethod
    def internal_error(
        message: str, error_type: str = ErrorType.UNEXPECTED_ERROR.value, details: Any | None = None
    ) -> JSONResponse:
        """Build a 500 Internal Server Error response."""
        return JSONResponse(status_code=500, content=_error_body(error_type, message, details))

    @staticmethod
    def service_unavailable(message: str = "Service temporarily unavailable") -> JSONResponse:
        """Build a 503 Service Unavailable error response."""
        return JSONResponse(
            status_code=503,
            content=_error_body(ErrorType.SERVICE_UNAVAILABLE.value, message),
        )
