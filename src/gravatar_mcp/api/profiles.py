"""ProfileAdapter: profile and inferred-interest lookups against the REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gravatar_mcp.adapters.identifiers import IdentifierNormalizer
from gravatar_mcp.api.http import HttpGateway
from gravatar_mcp.errors import GravatarApiError

logger = logging.getLogger(__name__)


class ProfileAdapter:
    """Fetches profile payloads keyed by hash.

    The ``*_by_email`` variants only derive the hash and delegate; all
    validation and network logic lives in the ``*_by_id`` methods.
    """

    def __init__(self, http: HttpGateway, base_url: str, normalizer: IdentifierNormalizer | None = None) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._normalizer = normalizer or IdentifierNormalizer()

    def profile_url(self, hash_: str) -> str:
        return f"{self._base_url}/{hash_}"

    def interests_url(self, hash_: str) -> str:
        return f"{self._base_url}/{hash_}/inferred-interests"

    async def get_profile_by_id(self, hash_: str) -> dict[str, Any]:
        """Return the decoded profile object, unmodified."""
        self._normalizer.require_hash(hash_)
        logger.debug("Fetching profile for %s", hash_)
        payload = await self._fetch_json(self.profile_url(hash_), "Failed to fetch profile")
        if not isinstance(payload, dict):
            raise GravatarApiError("Malformed profile response: expected a JSON object")
        return payload

    async def get_profile_by_email(self, email: str) -> dict[str, Any]:
        return await self.get_profile_by_id(self._normalizer.derive_hash(email))

    async def get_inferred_interests_by_id(self, hash_: str) -> list[dict[str, Any]]:
        """Return the full list of ``{"id", "name"}`` interest records."""
        self._normalizer.require_hash(hash_)
        logger.debug("Fetching inferred interests for %s", hash_)
        payload = await self._fetch_json(self.interests_url(hash_), "Failed to fetch inferred interests")
        if not isinstance(payload, list) or not all(
            isinstance(item, dict) and isinstance(item.get("name"), str) for item in payload
        ):
            raise GravatarApiError("Malformed inferred interests response: expected a JSON array of named objects")
        return payload

    async def get_inferred_interests_by_email(self, email: str) -> list[dict[str, Any]]:
        return await self.get_inferred_interests_by_id(self._normalizer.derive_hash(email))

    async def _fetch_json(self, url: str, fallback_message: str) -> Any:
        response = await self._http.get(url)
        if not response.is_success:
            error = self._http.error_mapper.from_response(response, fallback_message)
            logger.debug("GET %s mapped to %r", url, error)
            raise error
        return self._decode(response)

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as error:
            raise GravatarApiError(
                f"Malformed response from Gravatar API: {error}",
                status=response.status_code,
                cause=error,
            ) from error
