"""Declared input shapes for the six Gravatar tools.

Each model is both the runtime validator for call arguments and the source
of the tool's MCP ``inputSchema``. Unknown fields are rejected.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gravatar_mcp.adapters.identifiers import is_valid_email
from gravatar_mcp.api.avatars import AvatarRequestParams
from gravatar_mcp.constants import AVATAR_MAX_SIZE, AVATAR_MIN_SIZE, HASH_PATTERN_SOURCE, DefaultAvatarOption, Rating

HASH_DESCRIPTION = (
    "Profile identifier: a 64-character (SHA256) or 32-character (MD5, deprecated) hexadecimal hash."
)


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class HashInput(ToolInput):
    hash: str = Field(pattern=HASH_PATTERN_SOURCE, description=HASH_DESCRIPTION)


class EmailInput(ToolInput):
    email: str = Field(min_length=3, description="Email address associated with the Gravatar profile.")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("Invalid email format.")
        return value


# Advertised shapes for the avatar options. Besides the typed values, each
# accepts "" (treated as unset) and forceDefault also accepts "true"/"false".
_OPTION_SCHEMAS: dict[str, dict[str, Any]] = {
    "size": {"type": ["integer", "string"], "minimum": AVATAR_MIN_SIZE, "maximum": AVATAR_MAX_SIZE, "maxLength": 0},
    "defaultOption": {"type": "string", "enum": [*(o.value for o in DefaultAvatarOption), ""]},
    "forceDefault": {"type": ["boolean", "string"], "enum": [True, False, "true", "false", ""]},
    "rating": {"type": "string", "enum": [*(r.value for r in Rating), *(r.value.upper() for r in Rating), ""]},
}


def _accept_blank_options(schema: dict[str, Any]) -> None:
    properties = schema.get("properties", {})
    for name, widened in _OPTION_SCHEMAS.items():
        if name in properties:
            description = properties[name].get("description")
            properties[name] = {**widened, "description": description} if description else dict(widened)


class AvatarOptions(ToolInput):
    model_config = ConfigDict(extra="forbid", populate_by_name=True, json_schema_extra=_accept_blank_options)

    size: int | None = Field(
        default=None,
        ge=AVATAR_MIN_SIZE,
        le=AVATAR_MAX_SIZE,
        description=f"Desired avatar size in pixels ({AVATAR_MIN_SIZE}-{AVATAR_MAX_SIZE}).",
    )
    default_option: DefaultAvatarOption | None = Field(
        default=None,
        alias="defaultOption",
        description="Image to serve when the profile has no avatar.",
    )
    force_default: bool | None = Field(
        default=None,
        alias="forceDefault",
        description="Always serve the default image, even when an avatar exists.",
    )
    rating: Rating | None = Field(
        default=None,
        description="Maximum content rating of the avatar to serve (g, pg, r, x).",
    )

    @field_validator("size", "default_option", "rating", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @field_validator("rating", mode="before")
    @classmethod
    def _lower_rating(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("force_default", mode="before")
    @classmethod
    def _parse_force_default(cls, value: Any) -> Any:
        if value == "":
            return None
        if value in ("true", "false"):
            return value == "true"
        return value

    def to_params(self) -> AvatarRequestParams:
        return AvatarRequestParams(
            size=self.size,
            default_option=self.default_option,
            force_default=self.force_default,
            rating=self.rating,
        )


class AvatarByIdInput(HashInput, AvatarOptions):
    pass


class AvatarByEmailInput(EmailInput, AvatarOptions):
    pass
