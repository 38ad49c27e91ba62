"""TransportManager: serve the Gravatar MCP server over stdio, Streamable HTTP or SSE."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import anyio
import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.models import InitializationOptions
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http import StreamableHTTPServerTransport
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import BaseRoute, Mount, Route

from gravatar_mcp._version import __version__

logger = logging.getLogger(__name__)

TRANSPORTS = ("stdio", "streamable-http", "sse")


class TransportManager:
    """Runs one transport until its connection (or HTTP server) stops.

    The HTTP transports also answer ``GET /health`` with the version, uptime
    and number of registered tools.
    """

    def __init__(self) -> None:
        self._started = time.monotonic()
        self._tool_count = 0

    def set_tool_count(self, count: int) -> None:
        self._tool_count = count

    def _build_health_response(self) -> dict[str, object]:
        return {
            "status": "ok",
            "version": __version__,
            "uptime_seconds": round(time.monotonic() - self._started, 1),
            "tool_count": self._tool_count,
        }

    async def run(
        self,
        transport: str,
        server: Server,
        init_options: InitializationOptions,
        host: str = "127.0.0.1",
        port: int = 8000,
    ) -> None:
        """Run *transport* (case-insensitive); host and port only matter for HTTP."""
        name = transport.lower()
        if name == "stdio":
            await self.run_stdio(server, init_options)
        elif name == "streamable-http":
            await self.run_streamable_http(server, init_options, host=host, port=port)
        elif name == "sse":
            await self.run_sse(server, init_options, host=host, port=port)
        else:
            raise ValueError(f"Unknown transport: {transport!r}. Expected one of {', '.join(TRANSPORTS)}.")

    async def run_stdio(self, server: Server, init_options: InitializationOptions) -> None:
        logger.info("Starting stdio transport")
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, init_options)

    async def run_streamable_http(
        self,
        server: Server,
        init_options: InitializationOptions,
        host: str = "127.0.0.1",
        port: int = 8000,
    ) -> None:
        """Serve MCP under ``/mcp`` next to the health route."""
        self._validate_host_port(host, port)
        logger.info("Starting streamable-http transport on %s:%d", host, port)

        http_transport = StreamableHTTPServerTransport(mcp_session_id=uuid.uuid4().hex)
        async with http_transport.connect() as (read_stream, write_stream):
            app = self._http_app([Mount("/mcp", app=http_transport.handle_request)])
            async with anyio.create_task_group() as tg:
                tg.start_soon(server.run, read_stream, write_stream, init_options)
                tg.start_soon(self._serve, app, host, port)

    async def run_sse(
        self,
        server: Server,
        init_options: InitializationOptions,
        host: str = "127.0.0.1",
        port: int = 8000,
    ) -> None:
        """Serve the legacy SSE transport: ``GET /sse`` plus ``POST /messages/``."""
        self._validate_host_port(host, port)
        logger.info("Starting sse transport on %s:%d", host, port)
        logger.warning("SSE transport is deprecated. Use Streamable HTTP instead.")

        sse = SseServerTransport("/messages/")

        async def sse_endpoint(request: Request) -> Response:
            async with sse.connect_sse(request.scope, request.receive, request._send) as streams:
                await server.run(streams[0], streams[1], init_options)
            return Response()

        app = self._http_app(
            [
                Route("/sse", endpoint=sse_endpoint, methods=["GET"]),
                Mount("/messages/", app=sse.handle_post_message),
            ]
        )
        await self._serve(app, host, port)

    def _http_app(self, routes: list[BaseRoute]) -> Starlette:
        async def health(request: Request) -> JSONResponse:
            return JSONResponse(self._build_health_response())

        return Starlette(routes=[Route("/health", endpoint=health, methods=["GET"]), *routes])

    async def _serve(self, app: Any, host: str, port: int) -> None:
        await uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="info")).serve()

    def _validate_host_port(self, host: str, port: int) -> None:
        if not host:
            raise ValueError("Host must not be empty")
        if not isinstance(port, int) or not 1 <= port <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {port}")
