"""Constants shared across gravatar-mcp: identifier patterns, enums, error codes."""

from __future__ import annotations

import re
from enum import Enum

# Identifier patterns
HASH_MD5_PATTERN = re.compile(r"^[a-fA-F0-9]{32}$")
HASH_SHA256_PATTERN = re.compile(r"^[a-fA-F0-9]{64}$")
HASH_PATTERN_SOURCE = r"^([a-fA-F0-9]{32}|[a-fA-F0-9]{64})$"
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# Upstream endpoints
DEFAULT_PROFILE_BASE_URL = "https://api.gravatar.com/v3/profiles"
DEFAULT_AVATAR_BASE_URL = "https://gravatar.com/avatar"
DEFAULT_API_KEY_ENV_VAR = "GRAVATAR_API_KEY"
USER_AGENT_PRODUCT = "gravatar-mcp"

AVATAR_MIME_TYPE = "image/png"
AVATAR_MIN_SIZE = 1
AVATAR_MAX_SIZE = 2048

# Seconds to wait before retrying when a 429 carries no reset header
DEFAULT_RATE_LIMIT_RESET_SECONDS = 60


class DefaultAvatarOption(str, Enum):
    """Fallback image styles served when a hash has no avatar."""

    INITIALS = "initials"
    COLOR = "color"
    NOT_FOUND = "404"
    MYSTERY_PERSON = "mp"
    IDENTICON = "identicon"
    MONSTERID = "monsterid"
    WAVATAR = "wavatar"
    RETRO = "retro"
    ROBOHASH = "robohash"
    BLANK = "blank"


class Rating(str, Enum):
    """Content ratings accepted by the avatar endpoint, as sent on the wire.

    Lookup is case-insensitive: ``Rating("PG") is Rating.PG``.
    """

    G = "g"
    PG = "pg"
    R = "r"
    X = "x"

    @classmethod
    def _missing_(cls, value: object) -> Rating | None:
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


ErrorCodes: dict[str, str] = {
    "VALIDATION_ERROR": "VALIDATION_ERROR",
    "INVALID_INPUT": "INVALID_INPUT",
    "RESOURCE_NOT_FOUND": "RESOURCE_NOT_FOUND",
    "AUTHENTICATION_FAILED": "AUTHENTICATION_FAILED",
    "PERMISSION_DENIED": "PERMISSION_DENIED",
    "RATE_LIMITED": "RATE_LIMITED",
    "API_ERROR": "API_ERROR",
    "TRANSPORT_FAILURE": "TRANSPORT_FAILURE",
    "TOOL_NOT_FOUND": "TOOL_NOT_FOUND",
}

ERROR_CODES = ErrorCodes
