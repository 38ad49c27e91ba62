"""CLI entry point: python -m gravatar_mcp."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from gravatar_mcp import serve
from gravatar_mcp.config import GravatarSettings
from gravatar_mcp.server.transport import TRANSPORTS

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255

# CLI flag -> GravatarSettings field. Unset flags fall back to GRAVATAR_* / .env.
_SETTINGS_FLAGS = {
    "profile_base_url": "Base URL of the profiles API (env: GRAVATAR_PROFILE_BASE_URL).",
    "avatar_base_url": "Base URL of the avatar endpoint (env: GRAVATAR_AVATAR_BASE_URL).",
    "client_name": "Client identification appended to the User-Agent (env: GRAVATAR_CLIENT_NAME).",
}


def _port(value: str) -> int:
    port = int(value)
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"must be in range 1-65535, got {port}")
    return port


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m gravatar_mcp",
        description="Launch an MCP server exposing Gravatar profiles, interests and avatars as tools.",
    )

    serving = parser.add_argument_group("serving")
    serving.add_argument("--transport", choices=TRANSPORTS, default="stdio", help="Transport type (default: stdio).")
    serving.add_argument("--host", default="127.0.0.1", help="Bind address for HTTP transports (default: 127.0.0.1).")
    serving.add_argument("--port", type=_port, default=8000, help="Port for HTTP transports (default: 8000).")
    serving.add_argument("--name", default="gravatar", help='Server name reported to clients (default: "gravatar").')
    serving.add_argument("--version", default=None, help="Server version reported to clients.")
    serving.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Logging level (default: INFO).",
    )

    upstream = parser.add_argument_group("upstream")
    for field, help_text in _SETTINGS_FLAGS.items():
        upstream.add_argument(f"--{field.replace('_', '-')}", dest=field, default=None, help=help_text)

    return parser


def main() -> None:
    """Parse arguments, build settings and serve until shutdown.

    Exits with 1 for a bad ``--name`` or invalid settings, and with 2 for
    argument errors or a failure inside serve().
    """
    args = _build_parser().parse_args()

    if len(args.name) > MAX_NAME_LENGTH:
        print(f"Error: --name must be at most {MAX_NAME_LENGTH} characters, got {len(args.name)}.", file=sys.stderr)
        sys.exit(1)

    # stdout carries the stdio transport
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    overrides = {field: getattr(args, field) for field in _SETTINGS_FLAGS if getattr(args, field) is not None}
    try:
        settings = GravatarSettings(**overrides)
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        serve(
            settings,
            transport=args.transport,
            host=args.host,
            port=args.port,
            name=args.name,
            version=args.version,
        )
    except Exception:
        logger.exception("Server startup failed.")
        sys.exit(2)


if __name__ == "__main__":
    main()
