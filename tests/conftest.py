"""Shared test fixtures for gravatar-mcp tests."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from typing import Any, Union

import httpx
import pytest

from gravatar_mcp.api.client import GravatarApi
from gravatar_mcp.config import GravatarSettings
from gravatar_mcp.tools.registry import ToolRegistry

PROFILE_BASE = "https://api.gravatar.test/v3/profiles"
AVATAR_BASE = "https://gravatar.test/avatar"

TEST_EMAIL = "test@example.com"
TEST_HASH = hashlib.sha256(TEST_EMAIL.encode("utf-8")).hexdigest()
MD5_HASH = "00000000000000000000000000000000"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"fake-avatar-image-data"

SAMPLE_PROFILE: dict[str, Any] = {
    "hash": TEST_HASH,
    "display_name": "Test User",
    "profile_url": "https://gravatar.com/testuser",
    "avatar_url": f"https://0.gravatar.com/avatar/{TEST_HASH}",
    "location": "Lisbon, Portugal",
    "description": "Just testing.",
    "verified_accounts": [],
}

SAMPLE_INTERESTS: list[dict[str, Any]] = [
    {"id": 1, "name": "photography"},
    {"id": 2, "name": "hiking"},
    {"id": 3, "name": "open source"},
]


# ---------------------------------------------------------------------------
# Fake upstream: an httpx.MockTransport that records every request
# ---------------------------------------------------------------------------

Route = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """Routes requests by URL (query string ignored) and records them.

    Unrouted URLs answer 404 with a JSON error body.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, Route] = {}

    def route(self, url: str, response: Route) -> None:
        self._routes[url] = response

    def profile(self, hash_: str, response: Route) -> None:
        self.route(f"{PROFILE_BASE}/{hash_}", response)

    def interests(self, hash_: str, response: Route) -> None:
        self.route(f"{PROFILE_BASE}/{hash_}/inferred-interests", response)

    def avatar(self, hash_: str, response: Route) -> None:
        self.route(f"{AVATAR_BASE}/{hash_}", response)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        route = self._routes.get(key)
        if route is None:
            return httpx.Response(404, json={"error": "Profile not found"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and overrides out of every test."""
    for var in (
        "GRAVATAR_API_KEY",
        "GRAVATAR_API_KEY_ENV_VAR",
        "GRAVATAR_PROFILE_BASE_URL",
        "GRAVATAR_AVATAR_BASE_URL",
        "GRAVATAR_CLIENT_NAME",
        "GRAVATAR_HTTP_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings() -> GravatarSettings:
    return GravatarSettings(
        profile_base_url=PROFILE_BASE,
        avatar_base_url=AVATAR_BASE,
        _env_file=None,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
async def http_client(upstream: FakeUpstream):
    async with upstream.client() as client:
        yield client


@pytest.fixture
def api(settings: GravatarSettings, http_client: httpx.AsyncClient) -> GravatarApi:
    return GravatarApi.from_settings(settings, client=http_client)


@pytest.fixture
def registry(api: GravatarApi) -> ToolRegistry:
    return ToolRegistry(api)
