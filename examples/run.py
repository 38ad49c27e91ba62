"""Launch the Gravatar MCP server over Streamable HTTP.

Usage (from the project root):
    GRAVATAR_API_KEY=<key> python examples/run.py

Then check the server:
    curl http://127.0.0.1:8000/health
"""

import logging

from gravatar_mcp import GravatarSettings, serve

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

settings = GravatarSettings(client_name="examples-run/1.0")
print(f"Profiles API: {settings.profile_base_url}")
print(f"Avatars:      {settings.avatar_base_url}")
print(f"API key:      {'set' if settings.resolve_api_key() else 'not set (anonymous rate limits)'}")

serve(
    settings,
    transport="streamable-http",
    host="127.0.0.1",
    port=8000,
    on_startup=lambda: print("Listening on http://127.0.0.1:8000/mcp"),
    on_shutdown=lambda: print("Server stopped"),
)
