"""MCPServerFactory: create and configure an MCP Server for the Gravatar tools."""

from __future__ import annotations

import logging
from typing import Any

from mcp import types as mcp_types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from gravatar_mcp._version import __version__
from gravatar_mcp.adapters.annotations import AnnotationMapper
from gravatar_mcp.adapters.schema import SchemaConverter

logger = logging.getLogger(__name__)

ToolContent = mcp_types.TextContent | mcp_types.ImageContent


class MCPServerFactory:
    """Turns a ToolRegistry into a low-level MCP Server with list/call handlers."""

    def __init__(self) -> None:
        self._schema_converter = SchemaConverter()
        self._annotation_mapper = AnnotationMapper()

    def create_server(self, name: str = "gravatar", version: str = __version__) -> Server:
        return Server(name, version=version)

    def build_tool(self, descriptor: Any) -> mcp_types.Tool:
        """Describe one tool for ``tools/list``: flattened schema plus read-only hints."""
        return mcp_types.Tool(
            name=descriptor.name,
            title=descriptor.title,
            description=descriptor.description,
            inputSchema=self._schema_converter.convert_input_schema(descriptor),
            annotations=self._annotation_mapper.to_mcp_annotations(descriptor.annotations, title=descriptor.title),
        )

    def build_tools(self, registry: Any, prefix: str | None = None) -> list[mcp_types.Tool]:
        """One Tool per registered name; a descriptor that cannot be built is logged and skipped."""
        built: list[mcp_types.Tool] = []
        for name in registry.list(prefix=prefix):
            descriptor = registry.get_definition(name)
            if descriptor is None:
                logger.warning("Skipped tool %s: no definition found", name)
                continue
            try:
                built.append(self.build_tool(descriptor))
            except Exception as e:
                logger.warning("Failed to build tool for %s: %s", name, e)
        return built

    def to_content(self, item: dict[str, str]) -> ToolContent:
        """Convert a router content dict to the matching MCP content type."""
        if item.get("type") == "image":
            return mcp_types.ImageContent(type="image", data=item["data"], mimeType=item["mimeType"])
        return mcp_types.TextContent(type="text", text=item.get("text", ""))

    def register_handlers(
        self,
        server: Server,
        tools: list[mcp_types.Tool],
        router: Any,
    ) -> None:
        """Wire ``tools/list`` to *tools* and ``tools/call`` to ``router.handle_call``.

        The router returns ``(content, is_error)``; an error is re-raised with
        its text so the SDK reports a CallToolResult with isError set.
        """

        @server.list_tools()
        async def list_gravatar_tools() -> list[mcp_types.Tool]:
            return list(tools)

        @server.call_tool()
        async def call_gravatar_tool(name: str, arguments: dict[str, Any]) -> list[ToolContent]:
            content, is_error = await router.handle_call(name, arguments or {})
            if is_error:
                texts = [item["text"] for item in content if item.get("type") == "text"]
                raise Exception(texts[0] if texts else "Unknown error")
            return [self.to_content(item) for item in content]

    def build_init_options(
        self,
        server: Server,
        name: str,
        version: str,
    ) -> InitializationOptions:
        return InitializationOptions(
            server_name=name,
            server_version=version,
            capabilities=server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )
