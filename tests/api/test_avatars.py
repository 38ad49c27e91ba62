"""Tests for AvatarAdapter and avatar URL construction."""

from __future__ import annotations

import httpx
import pytest

from gravatar_mcp.api.avatars import AvatarRequestParams, build_avatar_url
from gravatar_mcp.api.client import GravatarApi
from gravatar_mcp.constants import DefaultAvatarOption, Rating
from gravatar_mcp.errors import GravatarTransportError, GravatarValidationError
from tests.conftest import AVATAR_BASE, MD5_HASH, PNG_BYTES, TEST_HASH, FakeUpstream

BASE = "https://gravatar.com/avatar"


class TestAvatarRequestParams:
    def test_all_fields(self) -> None:
        params = AvatarRequestParams(
            size=200,
            default_option=DefaultAvatarOption.IDENTICON,
            force_default=True,
            rating=Rating.PG,
        )
        assert params.to_query() == [("s", "200"), ("d", "identicon"), ("f", "y"), ("r", "pg")]

    def test_empty(self) -> None:
        assert AvatarRequestParams().to_query() == []

    def test_force_default_false_is_omitted(self) -> None:
        assert AvatarRequestParams(force_default=False).to_query() == []

    def test_accepts_plain_strings(self) -> None:
        params = AvatarRequestParams(default_option="404", rating="X")  # type: ignore[arg-type]
        assert params.to_query() == [("d", "404"), ("r", "x")]

    @pytest.mark.parametrize("size", [0, -5, 2049])
    def test_size_bounds(self, size: int) -> None:
        with pytest.raises(GravatarValidationError, match="between 1 and 2048"):
            AvatarRequestParams(size=size)

    @pytest.mark.parametrize("size", [1, 2048])
    def test_size_bounds_inclusive(self, size: int) -> None:
        assert AvatarRequestParams(size=size).to_query() == [("s", str(size))]


class TestBuildAvatarUrl:
    def test_full_query_string(self) -> None:
        params = AvatarRequestParams(
            size=200,
            default_option=DefaultAvatarOption.IDENTICON,
            force_default=True,
            rating=Rating.PG,
        )
        url = build_avatar_url(BASE, MD5_HASH, params)
        assert url == f"{BASE}/{MD5_HASH}?s=200&d=identicon&f=y&r=pg"
        assert httpx.URL(url).query == b"s=200&d=identicon&f=y&r=pg"

    def test_no_params_no_query(self) -> None:
        assert build_avatar_url(BASE, MD5_HASH) == f"{BASE}/{MD5_HASH}"
        assert build_avatar_url(BASE, MD5_HASH, AvatarRequestParams()) == f"{BASE}/{MD5_HASH}"

    def test_only_supplied_fields(self) -> None:
        url = build_avatar_url(BASE, MD5_HASH, AvatarRequestParams(rating=Rating.R, size=80))
        assert url == f"{BASE}/{MD5_HASH}?s=80&r=r"

    def test_trailing_slash_on_base(self) -> None:
        assert build_avatar_url(BASE + "/", MD5_HASH) == f"{BASE}/{MD5_HASH}"


class TestGetAvatarById:
    async def test_single_get_without_query(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        upstream.avatar(MD5_HASH, httpx.Response(200, content=PNG_BYTES, headers={"Content-Type": "image/png"}))

        data = await api.avatars.get_avatar_by_id(MD5_HASH)

        assert data == PNG_BYTES
        assert len(upstream.requests) == 1
        request = upstream.requests[0]
        assert str(request.url) == f"{AVATAR_BASE}/{MD5_HASH}"
        assert request.url.query == b""

    async def test_sends_query_params(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        upstream.avatar(TEST_HASH, httpx.Response(200, content=PNG_BYTES))
        params = AvatarRequestParams(size=200, default_option=DefaultAvatarOption.IDENTICON, force_default=True, rating=Rating.PG)

        await api.avatars.get_avatar_by_id(TEST_HASH, params)

        assert upstream.requests[0].url.query == b"s=200&d=identicon&f=y&r=pg"

    async def test_user_agent_always_sent(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        upstream.avatar(MD5_HASH, httpx.Response(200, content=PNG_BYTES))
        await api.avatars.get_avatar_by_id(MD5_HASH)
        assert upstream.requests[0].headers["User-Agent"].startswith("gravatar-mcp/")

    async def test_invalid_hash_never_reaches_network(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        with pytest.raises(GravatarValidationError):
            await api.avatars.get_avatar_by_id("invalid-hash")
        assert upstream.requests == []

    @pytest.mark.parametrize("status, reason", [(404, "Not Found"), (403, "Forbidden"), (500, "Internal Server Error")])
    async def test_failure_is_validation_kind_with_status_text(
        self, api: GravatarApi, upstream: FakeUpstream, status: int, reason: str
    ) -> None:
        upstream.avatar(MD5_HASH, httpx.Response(status))
        with pytest.raises(GravatarValidationError) as exc_info:
            await api.avatars.get_avatar_by_id(MD5_HASH)
        assert exc_info.value.message == f"Failed to fetch avatar: {reason}"
        assert exc_info.value.details["status"] == status

    async def test_timeout_is_transport_error(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        upstream.avatar(MD5_HASH, httpx.ReadTimeout("timed out"))
        with pytest.raises(GravatarTransportError, match="timed out"):
            await api.avatars.get_avatar_by_id(MD5_HASH)


class TestGetAvatarByEmail:
    async def test_delegates_with_derived_hash(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        upstream.avatar(TEST_HASH, httpx.Response(200, content=PNG_BYTES))

        data = await api.avatars.get_avatar_by_email(" TEST@EXAMPLE.COM ", AvatarRequestParams(size=64))

        assert data == PNG_BYTES
        assert upstream.requests[0].url.path == f"/avatar/{TEST_HASH}"
        assert upstream.requests[0].url.query == b"s=64"

    async def test_invalid_email(self, api: GravatarApi, upstream: FakeUpstream) -> None:
        with pytest.raises(GravatarValidationError, match="Invalid email format"):
            await api.avatars.get_avatar_by_email("nobody")
        assert upstream.requests == []
