"""Typed error hierarchy raised by the identifier, adapter and tool layers.

Every error carries a stable ``code``, a human-readable ``message`` and an
optional ``details`` dict. Only :class:`~gravatar_mcp.server.router.ToolRouter`
turns these into MCP error envelopes; everything below it raises.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from gravatar_mcp.constants import ErrorCodes


class GravatarError(Exception):
    """Base error for all gravatar-mcp failures."""

    default_code = ErrorCodes["API_ERROR"]

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class GravatarValidationError(GravatarError):
    """Raised when an identifier or request parameter is rejected."""

    default_code = ErrorCodes["VALIDATION_ERROR"]


class ToolInputError(GravatarValidationError):
    """Raised when tool arguments do not match the declared input shape.

    ``details["errors"]`` holds ``{"field", "message"}`` entries.
    """

    default_code = ErrorCodes["INVALID_INPUT"]

    def __init__(self, message: str = "Invalid input", errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message, details={"errors": errors or []})


class ToolNotFoundError(GravatarValidationError):
    """Raised when a call names a tool that is not registered."""

    default_code = ErrorCodes["TOOL_NOT_FOUND"]

    def __init__(self, tool_name: str) -> None:
        super().__init__(f"Unknown tool: {tool_name}", details={"tool_name": tool_name})


class GravatarResourceNotFoundError(GravatarError):
    default_code = ErrorCodes["RESOURCE_NOT_FOUND"]


class GravatarAuthenticationError(GravatarError):
    default_code = ErrorCodes["AUTHENTICATION_FAILED"]


class GravatarPermissionError(GravatarError):
    default_code = ErrorCodes["PERMISSION_DENIED"]


class GravatarRateLimitError(GravatarError):
    """Raised on HTTP 429. ``reset_at`` is a timezone-aware UTC datetime."""

    default_code = ErrorCodes["RATE_LIMITED"]

    def __init__(self, message: str, reset_at: datetime, **kwargs: Any) -> None:
        details = dict(kwargs.pop("details", None) or {})
        details.setdefault("reset_at", reset_at.isoformat())
        super().__init__(message, details=details, **kwargs)
        self.reset_at = reset_at


class GravatarApiError(GravatarError):
    """Generic upstream failure: unmapped status codes and malformed bodies."""

    default_code = ErrorCodes["API_ERROR"]

    def __init__(self, message: str, status: int | None = None, **kwargs: Any) -> None:
        details = dict(kwargs.pop("details", None) or {})
        if status is not None:
            details.setdefault("status", status)
        super().__init__(message, details=details, **kwargs)
        self.status = status


class GravatarTransportError(GravatarError):
    """Raised when no HTTP response was received (DNS, connect, timeout, reset)."""

    default_code = ErrorCodes["TRANSPORT_FAILURE"]
