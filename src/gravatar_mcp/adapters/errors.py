"""ErrorMapper: upstream HTTP failures → typed errors → MCP error responses."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from gravatar_mcp.constants import DEFAULT_RATE_LIMIT_RESET_SECONDS, ErrorCodes
from gravatar_mcp.errors import (
    GravatarApiError,
    GravatarAuthenticationError,
    GravatarError,
    GravatarPermissionError,
    GravatarRateLimitError,
    GravatarResourceNotFoundError,
    GravatarTransportError,
    GravatarValidationError,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


class ErrorMapper:
    """Classifies upstream failures and renders errors for the MCP boundary.

    Two inbound paths are kept apart:

    - :meth:`from_status` classifies a *response* by its HTTP status.
    - :meth:`from_transport_error` wraps failures that happened before any
      response arrived (DNS, connect, timeout, reset).

    :meth:`to_mcp_error` is the single outbound path used by the router.
    """

    def from_status(
        self,
        status: int,
        message: str,
        headers: Mapping[str, str] | None = None,
        now: datetime | None = None,
    ) -> GravatarError:
        """Map an HTTP status code and message to a typed error.

        Args:
            status: HTTP status code of the upstream response.
            message: Upstream or caller-supplied description.
            headers: Response headers, consulted for the rate-limit reset.
            now: Reference time for the default rate-limit reset.

        Returns:
            The typed error instance (not raised).
        """
        details = {"status": status}
        if status == 400:
            return GravatarValidationError(f"Validation Error: {message}", details=details)
        if status == 401:
            return GravatarAuthenticationError(f"Authentication Failed: {message}", details=details)
        if status == 403:
            return GravatarPermissionError(f"Permission Denied: {message}", details=details)
        if status == 404:
            return GravatarResourceNotFoundError(f"Resource Not Found: {message}", details=details)
        if status == 429:
            reset_at = self._rate_limit_reset(headers, now)
            return GravatarRateLimitError(
                f"Rate Limit Exceeded: {message} (resets at {reset_at.isoformat()})",
                reset_at=reset_at,
                details=details,
            )
        return GravatarApiError(f"Gravatar API Error ({status}): {message}", status=status)

    def from_response(self, response: httpx.Response, fallback_message: str) -> GravatarError:
        """Map a non-2xx ``httpx.Response``, preferring the upstream error text."""
        message = self._extract_message(response) or response.reason_phrase or fallback_message
        return self.from_status(response.status_code, message, headers=response.headers)

    def from_transport_error(self, error: httpx.RequestError, url: str) -> GravatarTransportError:
        """Wrap a network-level failure that produced no HTTP response."""
        if isinstance(error, httpx.TimeoutException):
            reason = "request timed out"
        elif isinstance(error, httpx.ConnectError):
            reason = "connection failed"
        else:
            reason = str(error) or type(error).__name__
        return GravatarTransportError(
            f"Transport Failure: {reason}",
            details={"url": url, "error_type": type(error).__name__},
            cause=error,
        )

    def to_mcp_error(self, error: Exception) -> dict[str, Any]:
        """Describe *error* as ``{is_error, error_type, message, details}``.

        Gravatar errors keep their message; anything else is reported as a
        generic internal error so no exception text reaches the client.
        """
        if isinstance(error, GravatarError):
            return self._handle_gravatar_error(error)

        # Unknown exception: classify as generic, sanitize completely
        return {
            "is_error": True,
            "error_type": ErrorCodes["API_ERROR"],
            "message": "Internal error occurred",
            "details": None,
        }

    def _handle_gravatar_error(self, error: GravatarError) -> dict[str, Any]:
        code = error.code
        details = error.details or None

        if code == ErrorCodes["INVALID_INPUT"]:
            formatted_message = self._format_validation_errors((details or {}).get("errors", []))
            return {
                "is_error": True,
                "error_type": code,
                "message": formatted_message,
                "details": details,
            }

        return {
            "is_error": True,
            "error_type": code,
            "message": error.message,
            "details": details,
        }

    def _format_validation_errors(self, errors: list[dict[str, Any]]) -> str:
        """Format field-level input errors into one readable message."""
        if not errors:
            return "Invalid input"

        error_lines = []
        for err in errors:
            field = err.get("field", "unknown")
            msg = err.get("message", "invalid")
            error_lines.append(f"{field}: {msg}")

        return "Invalid input: " + "; ".join(error_lines)

    def _rate_limit_reset(self, headers: Mapping[str, str] | None, now: datetime | None) -> datetime:
        now = now or datetime.now(timezone.utc)
        raw = headers.get(RATE_LIMIT_RESET_HEADER) if headers else None
        if raw:
            try:
                reset_at = datetime.fromtimestamp(int(raw), tz=timezone.utc)
            except (TypeError, ValueError, OverflowError, OSError):
                logger.debug("Ignoring unparseable %s header: %r", RATE_LIMIT_RESET_HEADER, raw)
            else:
                if reset_at >= now:
                    return reset_at
        return now + timedelta(seconds=DEFAULT_RATE_LIMIT_RESET_SECONDS)

    def _extract_message(self, response: httpx.Response) -> str | None:
        """Pull ``error``/``message`` from a JSON error body, if there is one."""
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            for key in ("error", "message"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return None
