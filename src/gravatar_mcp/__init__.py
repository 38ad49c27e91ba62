"""gravatar-mcp: Gravatar profiles, interests and avatars as MCP tools."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import httpx

from gravatar_mcp._version import __version__
from gravatar_mcp.adapters.annotations import AnnotationMapper
from gravatar_mcp.adapters.errors import ErrorMapper
from gravatar_mcp.adapters.identifiers import (
    IdentifierNormalizer,
    derive_hash_from_email,
    is_valid_hash,
    normalize_email,
)
from gravatar_mcp.adapters.schema import SchemaConverter
from gravatar_mcp.api.avatars import AvatarRequestParams, build_avatar_url
from gravatar_mcp.api.client import GravatarApi
from gravatar_mcp.config import GravatarSettings
from gravatar_mcp.constants import ERROR_CODES, DefaultAvatarOption, Rating
from gravatar_mcp.converters.openai import OpenAIConverter
from gravatar_mcp.errors import (
    GravatarApiError,
    GravatarAuthenticationError,
    GravatarError,
    GravatarPermissionError,
    GravatarRateLimitError,
    GravatarResourceNotFoundError,
    GravatarTransportError,
    GravatarValidationError,
    ToolInputError,
    ToolNotFoundError,
)
from gravatar_mcp.server.factory import MCPServerFactory
from gravatar_mcp.server.router import ToolRouter
from gravatar_mcp.server.transport import TRANSPORTS, TransportManager
from gravatar_mcp.tools.registry import ToolRegistry

__all__ = [
    # Public API
    "serve",
    "build_registry",
    "to_openai_tools",
    "__version__",
    # Configuration
    "GravatarSettings",
    # Server building blocks
    "MCPServerFactory",
    "ToolRouter",
    "ToolRegistry",
    "TransportManager",
    # Adapters
    "GravatarApi",
    "AvatarRequestParams",
    "build_avatar_url",
    "IdentifierNormalizer",
    "normalize_email",
    "derive_hash_from_email",
    "is_valid_hash",
    "ErrorMapper",
    "SchemaConverter",
    "AnnotationMapper",
    # Converters
    "OpenAIConverter",
    # Constants
    "ERROR_CODES",
    "DefaultAvatarOption",
    "Rating",
    # Errors
    "GravatarError",
    "GravatarValidationError",
    "ToolInputError",
    "ToolNotFoundError",
    "GravatarResourceNotFoundError",
    "GravatarAuthenticationError",
    "GravatarPermissionError",
    "GravatarRateLimitError",
    "GravatarApiError",
    "GravatarTransportError",
]

logger = logging.getLogger(__name__)


def build_registry(
    settings: GravatarSettings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
) -> ToolRegistry:
    """Wire settings -> adapters -> tool registry.

    Args:
        settings: Upstream configuration. Loaded from ``GRAVATAR_*`` env vars when omitted.
        client: Optional ``httpx.AsyncClient`` shared by all adapters.
    """
    return ToolRegistry(GravatarApi.from_settings(settings, client=client))


def serve(
    settings: GravatarSettings | None = None,
    *,
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 8000,
    name: str = "gravatar",
    version: str | None = None,
    on_startup: Callable[[], None] | None = None,
    on_shutdown: Callable[[], None] | None = None,
    log_level: str | None = None,
) -> None:
    """Launch an MCP Server that exposes the Gravatar tools.

    Args:
        settings: Upstream configuration. Loaded from ``GRAVATAR_*`` env vars when omitted.
        transport: One of ``TRANSPORTS``, matched case-insensitively.
        host, port: Bind address; ignored by stdio.
        name, version: Reported to clients at initialization. The version
            falls back to the package version.
        on_startup: Called once the server is wired, just before serving.
        on_shutdown: Called when serving ends, whether or not it failed.
        log_level: Level applied to the ``gravatar_mcp`` logger tree.
    """
    if not name:
        raise ValueError("name must not be empty")
    if len(name) > 255:
        raise ValueError(f"name exceeds maximum length of 255: {len(name)}")
    if transport.lower() not in TRANSPORTS:
        raise ValueError(f"Unknown transport: {transport!r}. Expected one of {', '.join(TRANSPORTS)}.")
    if log_level is not None:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if log_level.upper() not in valid_levels:
            raise ValueError(f"Unknown log level: {log_level!r}. Valid: {sorted(valid_levels)}")
        logging.getLogger("gravatar_mcp").setLevel(getattr(logging, log_level.upper()))

    version = version or __version__
    settings = settings or GravatarSettings()

    registry = build_registry(settings)
    factory = MCPServerFactory()
    server = factory.create_server(name=name, version=version)
    tools = factory.build_tools(registry)
    router = ToolRouter(registry)
    factory.register_handlers(server, tools, router)
    init_options = factory.build_init_options(server, name=name, version=version)

    logger.info(
        "Starting MCP server '%s' v%s with %d tools via %s (profiles: %s, avatars: %s, api key: %s)",
        name,
        version,
        len(tools),
        transport,
        settings.profile_base_url,
        settings.avatar_base_url,
        "set" if settings.resolve_api_key() else "not set",
    )

    transport_manager = TransportManager()
    transport_manager.set_tool_count(len(tools))

    if on_startup is not None:
        on_startup()

    try:
        asyncio.run(transport_manager.run(transport, server, init_options, host=host, port=port))
    finally:
        if on_shutdown is not None:
            on_shutdown()


def to_openai_tools(
    settings: GravatarSettings | None = None,
    *,
    embed_annotations: bool = False,
    strict: bool = False,
    prefix: str | None = None,
) -> list[dict]:
    """Describe the Gravatar tools as OpenAI function-calling entries.

    The result can be passed as ``tools=`` to a chat completions request;
    nothing is fetched from Gravatar.
    """
    registry = build_registry(settings)
    tools = OpenAIConverter().convert_registry(
        registry,
        embed_annotations=embed_annotations,
        strict=strict,
        prefix=prefix,
    )
    logger.debug("Converted %d tools to OpenAI format", len(tools))
    return tools
