"""GravatarApi: the adapters wired to one settings object and one HTTP gateway."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from gravatar_mcp.adapters.identifiers import IdentifierNormalizer
from gravatar_mcp.api.avatars import AvatarAdapter
from gravatar_mcp.api.http import HttpGateway
from gravatar_mcp.api.profiles import ProfileAdapter
from gravatar_mcp.config import GravatarSettings


@dataclass(frozen=True)
class GravatarApi:
    """Explicit dependency bundle handed to the tool layer at process start."""

    profiles: ProfileAdapter
    avatars: AvatarAdapter
    normalizer: IdentifierNormalizer

    @classmethod
    def from_settings(
        cls,
        settings: GravatarSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> GravatarApi:
        """Build both adapters.

        Args:
            settings: Endpoint and identity configuration. Loaded from the
                environment when omitted.
            client: Optional shared ``httpx.AsyncClient``; tests inject one
                backed by ``httpx.MockTransport``.
        """
        settings = settings or GravatarSettings()
        http = HttpGateway(settings, client=client)
        normalizer = IdentifierNormalizer()
        return cls(
            profiles=ProfileAdapter(http, settings.profile_base_url, normalizer),
            avatars=AvatarAdapter(http, settings.avatar_base_url, normalizer),
            normalizer=normalizer,
        )
