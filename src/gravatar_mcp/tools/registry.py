"""ToolRegistry: the six Gravatar tools bound to their adapters."""

from __future__ import annotations

import base64
import json
import logging
from typing import Any

from pydantic import ValidationError

from gravatar_mcp.api.client import GravatarApi
from gravatar_mcp.constants import AVATAR_MIME_TYPE
from gravatar_mcp.errors import ToolInputError, ToolNotFoundError
from gravatar_mcp.tools.descriptors import ContentItem, ToolDescriptor
from gravatar_mcp.tools.inputs import AvatarByEmailInput, AvatarByIdInput, EmailInput, HashInput

logger = logging.getLogger(__name__)


def text_content(payload: Any) -> list[ContentItem]:
    """Text envelope: the payload pretty-printed as JSON."""
    return [{"type": "text", "text": json.dumps(payload, indent=2, default=str)}]


def image_content(data: bytes, mime_type: str = AVATAR_MIME_TYPE) -> list[ContentItem]:
    """Image envelope: base64-encoded bytes with a fixed MIME type."""
    return [{"type": "image", "data": base64.b64encode(data).decode("ascii"), "mimeType": mime_type}]


def interest_names(interests: list[dict[str, Any]]) -> list[str]:
    return [interest["name"] for interest in interests]


class ToolRegistry:
    """Holds the tool descriptors and executes validated calls.

    Each call is an independent transaction: validate arguments against the
    tool's input model, resolve the identifier, fetch, format. Errors are
    raised; turning them into envelopes is the router's job.
    """

    def __init__(self, api: GravatarApi) -> None:
        self._api = api
        self._descriptors: dict[str, ToolDescriptor] = {d.name: d for d in self._build_descriptors()}

    def list(self, prefix: str | None = None) -> list[str]:
        names = list(self._descriptors)
        if prefix is not None:
            names = [name for name in names if name.startswith(prefix)]
        return names

    def get_definition(self, name: str) -> ToolDescriptor | None:
        return self._descriptors.get(name)

    def validate(self, name: str, arguments: dict[str, Any]) -> Any:
        """Parse *arguments* with the tool's input model.

        Raises:
            ToolNotFoundError: If *name* is not registered.
            ToolInputError: If the arguments do not match the input shape.
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise ToolNotFoundError(name)
        try:
            return descriptor.input_model.model_validate(arguments)
        except ValidationError as exc:
            errors = [
                {"field": ".".join(str(loc) for loc in err["loc"]) or "arguments", "message": err["msg"]}
                for err in exc.errors()
            ]
            raise ToolInputError(f"Invalid arguments for {name}", errors=errors) from exc

    async def call_async(self, name: str, arguments: dict[str, Any] | None = None) -> list[ContentItem]:
        params = self.validate(name, arguments or {})
        logger.debug("Dispatching %s", name)
        return await self._descriptors[name].handler(params)

    # ── Handlers ──────────────────────────────────────────────────────────

    async def _profile_by_id(self, params: HashInput) -> list[ContentItem]:
        return text_content(await self._api.profiles.get_profile_by_id(params.hash))

    async def _profile_by_email(self, params: EmailInput) -> list[ContentItem]:
        return text_content(await self._api.profiles.get_profile_by_email(params.email))

    async def _interests_by_id(self, params: HashInput) -> list[ContentItem]:
        interests = await self._api.profiles.get_inferred_interests_by_id(params.hash)
        return text_content(interest_names(interests))

    async def _interests_by_email(self, params: EmailInput) -> list[ContentItem]:
        interests = await self._api.profiles.get_inferred_interests_by_email(params.email)
        return text_content(interest_names(interests))

    async def _avatar_by_id(self, params: AvatarByIdInput) -> list[ContentItem]:
        return image_content(await self._api.avatars.get_avatar_by_id(params.hash, params.to_params()))

    async def _avatar_by_email(self, params: AvatarByEmailInput) -> list[ContentItem]:
        return image_content(await self._api.avatars.get_avatar_by_email(params.email, params.to_params()))

    def _build_descriptors(self) -> list[ToolDescriptor]:
        return [
            ToolDescriptor(
                name="get_profile_by_id",
                title="Get Profile by ID",
                description="Fetch a Gravatar profile using a profile identifier (hash).",
                input_model=HashInput,
                handler=self._profile_by_id,
            ),
            ToolDescriptor(
                name="get_profile_by_email",
                title="Get Profile by Email",
                description="Fetch a Gravatar profile using an email address.",
                input_model=EmailInput,
                handler=self._profile_by_email,
            ),
            ToolDescriptor(
                name="get_inferred_interests_by_id",
                title="Get Inferred Interests by ID",
                description="Fetch inferred interests for a Gravatar profile using a profile identifier (hash).",
                input_model=HashInput,
                handler=self._interests_by_id,
            ),
            ToolDescriptor(
                name="get_inferred_interests_by_email",
                title="Get Inferred Interests by Email",
                description="Fetch inferred interests for a Gravatar profile using an email address.",
                input_model=EmailInput,
                handler=self._interests_by_email,
            ),
            ToolDescriptor(
                name="get_avatar_by_id",
                title="Get Avatar by ID",
                description="Get the avatar PNG image for a Gravatar profile using a profile identifier (hash).",
                input_model=AvatarByIdInput,
                handler=self._avatar_by_id,
            ),
            ToolDescriptor(
                name="get_avatar_by_email",
                title="Get Avatar by Email",
                description="Get the avatar PNG image for a Gravatar profile using an email address.",
                input_model=AvatarByEmailInput,
                handler=self._avatar_by_email,
            ),
        ]
