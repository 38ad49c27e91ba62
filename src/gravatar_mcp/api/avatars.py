"""AvatarAdapter: avatar image retrieval by hash."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from gravatar_mcp.adapters.identifiers import IdentifierNormalizer
from gravatar_mcp.api.http import HttpGateway
from gravatar_mcp.constants import AVATAR_MAX_SIZE, AVATAR_MIN_SIZE, DefaultAvatarOption, Rating
from gravatar_mcp.errors import GravatarValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AvatarRequestParams:
    """Optional avatar request knobs. ``None`` leaves the upstream default in place."""

    size: int | None = None
    default_option: DefaultAvatarOption | None = None
    force_default: bool | None = None
    rating: Rating | None = None

    def __post_init__(self) -> None:
        if self.size is not None and not AVATAR_MIN_SIZE <= self.size <= AVATAR_MAX_SIZE:
            raise GravatarValidationError(
                f"Avatar size must be between {AVATAR_MIN_SIZE} and {AVATAR_MAX_SIZE}, got {self.size}",
                details={"field": "size"},
            )

    def to_query(self) -> list[tuple[str, str]]:
        """Query pairs in ``s``, ``d``, ``f``, ``r`` order, omitting absent fields."""
        query: list[tuple[str, str]] = []
        if self.size is not None:
            query.append(("s", str(self.size)))
        if self.default_option is not None:
            query.append(("d", DefaultAvatarOption(self.default_option).value))
        if self.force_default:
            query.append(("f", "y"))
        if self.rating is not None:
            query.append(("r", Rating(self.rating).value))
        return query


def build_avatar_url(base_url: str, hash_: str, params: AvatarRequestParams | None = None) -> str:
    """Build ``{base_url}/{hash}`` plus a query string for the supplied params.

    Examples:
        >>> build_avatar_url("https://gravatar.com/avatar", "0" * 32)
        'https://gravatar.com/avatar/00000000000000000000000000000000'
    """
    url = f"{base_url.rstrip('/')}/{hash_}"
    query = params.to_query() if params is not None else []
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


class AvatarAdapter:
    """Fetches raw avatar image bytes.

    Non-2xx responses surface as :class:`GravatarValidationError` carrying
    the HTTP reason phrase; the status code is kept in ``details``.
    """

    def __init__(self, http: HttpGateway, base_url: str, normalizer: IdentifierNormalizer | None = None) -> None:
        self._http = http
        self._base_url = base_url
        self._normalizer = normalizer or IdentifierNormalizer()

    async def get_avatar_by_id(self, hash_: str, params: AvatarRequestParams | None = None) -> bytes:
        self._normalizer.require_hash(hash_)
        url = build_avatar_url(self._base_url, hash_, params)
        logger.debug("Fetching avatar for %s", hash_)
        response = await self._http.get(url, accept="image/*")
        if not response.is_success:
            reason = response.reason_phrase or f"HTTP {response.status_code}"
            logger.debug("Avatar fetch for %s failed with HTTP %d", hash_, response.status_code)
            raise GravatarValidationError(
                f"Failed to fetch avatar: {reason}",
                details={"status": response.status_code, "hash": hash_},
            )
        return response.content

    async def get_avatar_by_email(self, email: str, params: AvatarRequestParams | None = None) -> bytes:
        return await self.get_avatar_by_id(self._normalizer.derive_hash(email), params)
