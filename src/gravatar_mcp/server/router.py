"""ToolRouter: route MCP tool calls -> ToolRegistry, errors -> error envelopes."""

from __future__ import annotations

import logging
from typing import Any

from gravatar_mcp.adapters.errors import ErrorMapper
from gravatar_mcp.errors import GravatarError

logger = logging.getLogger(__name__)


class ToolRouter:
    """Routes MCP tool calls through the tool registry.

    This is the only place where exceptions become envelopes: the registry,
    adapters and normalizer raise typed errors, and the router converts the
    result (or any exception) into a ``(content, is_error)`` tuple that the
    MCP factory turns into a ``CallToolResult``.

    Args:
        registry: A ToolRegistry (duck-typed -- must expose an async
            ``call_async(name, arguments)`` method).
    """

    def __init__(self, registry: Any, *, error_mapper: ErrorMapper | None = None) -> None:
        self._registry = registry
        self._error_mapper = error_mapper or ErrorMapper()

    async def handle_call(
        self,
        tool_name: str,
        arguments: dict[str, Any] | None,
    ) -> tuple[list[dict[str, str]], bool]:
        """Execute one tool call.

        Args:
            tool_name: The MCP tool name.
            arguments: The tool call arguments dict (None is treated as empty).

        Returns:
            A ``(content, is_error)`` tuple where *content* is a list of
            text/image content dicts and *is_error* signals whether the
            result represents an error.
        """
        logger.debug("Executing tool call: %s", tool_name)
        try:
            content = await self._registry.call_async(tool_name, arguments or {})
            return (content, False)
        except GravatarError as error:
            logger.info("Tool %s failed: [%s] %s", tool_name, error.code, error.message)
            return (self._error_content(error), True)
        except Exception as error:
            logger.exception("Unexpected error in tool %s", tool_name)
            return (self._error_content(error), True)

    def _error_content(self, error: Exception) -> list[dict[str, str]]:
        error_info = self._error_mapper.to_mcp_error(error)
        return [{"type": "text", "text": error_info["message"]}]
