"""Runtime configuration for gravatar-mcp.

Values come from ``GRAVATAR_*`` environment variables (or a local ``.env``)
and are validated once at process start. The resulting
:class:`GravatarSettings` is passed explicitly to the adapters.
"""

from __future__ import annotations

import os

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gravatar_mcp._version import __version__
from gravatar_mcp.constants import (
    DEFAULT_API_KEY_ENV_VAR,
    DEFAULT_AVATAR_BASE_URL,
    DEFAULT_PROFILE_BASE_URL,
    USER_AGENT_PRODUCT,
)


class GravatarSettings(BaseSettings):
    """Upstream endpoints, credentials lookup and HTTP client identity."""

    model_config = SettingsConfigDict(
        env_prefix="GRAVATAR_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    profile_base_url: str = Field(
        default=DEFAULT_PROFILE_BASE_URL,
        min_length=8,
        description="Base URL of the profiles REST API.",
    )
    avatar_base_url: str = Field(
        default=DEFAULT_AVATAR_BASE_URL,
        min_length=8,
        description="Base URL of the avatar image endpoint.",
    )
    api_key_env_var: str = Field(
        default=DEFAULT_API_KEY_ENV_VAR,
        min_length=1,
        description="Name of the environment variable holding the API key.",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="API key read from GRAVATAR_API_KEY or .env; the variable named by api_key_env_var wins.",
    )
    client_name: str | None = Field(
        default=None,
        description="Client identification appended to the User-Agent.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per upstream request (seconds).",
    )

    @field_validator("profile_base_url", "avatar_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def resolve_api_key(self) -> str | None:
        """Return the API key, or None when nothing non-blank is configured.

        The process environment is consulted at call time, so a key exported
        after startup is picked up. A key that only lives in ``.env`` is
        available through the ``api_key`` field.
        """
        value = os.environ.get(self.api_key_env_var, "").strip()
        if not value and self.api_key is not None:
            value = self.api_key.get_secret_value().strip()
        return value or None

    @property
    def user_agent(self) -> str:
        agent = f"{USER_AGENT_PRODUCT}/{__version__}"
        if self.client_name:
            agent = f"{agent} {self.client_name}"
        return agent
