"""Resource adapters: one upstream GET per call, typed results or typed errors."""

from gravatar_mcp.api.avatars import AvatarAdapter, AvatarRequestParams, build_avatar_url
from gravatar_mcp.api.client import GravatarApi
from gravatar_mcp.api.http import HttpGateway, build_async_client
from gravatar_mcp.api.profiles import ProfileAdapter

__all__ = [
    "AvatarAdapter",
    "AvatarRequestParams",
    "GravatarApi",
    "HttpGateway",
    "ProfileAdapter",
    "build_async_client",
    "build_avatar_url",
]
