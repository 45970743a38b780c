"""Error classes and helpers for the tl;dv MCP Server.

Defines structured exceptions for the configuration, validation and
API failure cases, and a function to convert exceptions to serializable
error payloads suitable for logs and tool responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict


class ErrorPayload(TypedDict, total=False):
    code: str
    message: str
    details: Dict[str, Any]


@dataclass
class AppError(Exception):
    """Base application error with a code and optional details."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return self.message

    def to_payload(self) -> ErrorPayload:
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ConfigurationError(AppError):
    """Raised when the client configuration is missing or invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("CONFIG_ERROR", message, details)


class BadRequestError(AppError):
    """Raised when a request is invalid or missing required parameters."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("BAD_REQUEST", message, details)


class ApiError(AppError):
    """Raised when the tl;dv API answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__("API_ERROR", message, details)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """True for rate limiting (429) and server-side (5xx) failures."""
        return self.status_code == 429 or self.status_code >= 500


def to_error_payload(error: Exception) -> ErrorPayload:
    """Convert an exception into a structured error payload.

    Examples:
        >>> payload = to_error_payload(ApiError("Meeting not found", 404))
        >>> payload["code"]
        'API_ERROR'
    """

    if isinstance(error, AppError):
        return error.to_payload()
    return {"code": "INTERNAL", "message": str(error)}
