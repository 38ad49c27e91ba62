"""Tests for GravatarSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gravatar_mcp._version import __version__
from gravatar_mcp.config import GravatarSettings
from gravatar_mcp.constants import DEFAULT_AVATAR_BASE_URL, DEFAULT_PROFILE_BASE_URL


def test_defaults() -> None:
    settings = GravatarSettings(_env_file=None)
    assert settings.profile_base_url == DEFAULT_PROFILE_BASE_URL
    assert settings.avatar_base_url == DEFAULT_AVATAR_BASE_URL
    assert settings.api_key_env_var == "GRAVATAR_API_KEY"
    assert settings.client_name is None
    assert settings.http_timeout_seconds == 20.0


def test_env_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAVATAR_PROFILE_BASE_URL", "https://profiles.example.org/v3/profiles")
    monkeypatch.setenv("GRAVATAR_CLIENT_NAME", "assistant/1.0")
    monkeypatch.setenv("GRAVATAR_HTTP_TIMEOUT_SECONDS", "5")
    settings = GravatarSettings(_env_file=None)
    assert settings.profile_base_url == "https://profiles.example.org/v3/profiles"
    assert settings.client_name == "assistant/1.0"
    assert settings.http_timeout_seconds == 5.0


def test_explicit_values_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GRAVATAR_CLIENT_NAME", "from-env")
    assert GravatarSettings(client_name="explicit", _env_file=None).client_name == "explicit"


def test_trailing_slash_is_stripped() -> None:
    settings = GravatarSettings(
        profile_base_url="https://api.gravatar.com/v3/profiles/",
        avatar_base_url="https://gravatar.com/avatar//",
        _env_file=None,
    )
    assert settings.profile_base_url == "https://api.gravatar.com/v3/profiles"
    assert settings.avatar_base_url == "https://gravatar.com/avatar"


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_must_be_positive(timeout: float) -> None:
    with pytest.raises(ValidationError):
        GravatarSettings(http_timeout_seconds=timeout, _env_file=None)


class TestResolveApiKey:
    def test_unset(self) -> None:
        assert GravatarSettings(_env_file=None).resolve_api_key() is None

    def test_blank_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAVATAR_API_KEY", "   ")
        assert GravatarSettings(_env_file=None).resolve_api_key() is None

    def test_default_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAVATAR_API_KEY", " abc123 ")
        assert GravatarSettings(_env_file=None).resolve_api_key() == "abc123"

    def test_indirection_through_named_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GRAVATAR_API_KEY_ENV_VAR", "TEAM_GRAVATAR_KEY")
        monkeypatch.setenv("TEAM_GRAVATAR_KEY", "team-key")
        monkeypatch.setenv("GRAVATAR_API_KEY", "ignored")
        settings = GravatarSettings(_env_file=None)
        assert settings.api_key_env_var == "TEAM_GRAVATAR_KEY"
        assert settings.resolve_api_key() == "team-key"

    def test_read_at_call_time(self, monkeypatch: pytest.MonkeyPatch) -> None:
        settings = GravatarSettings(_env_file=None)
        assert settings.resolve_api_key() is None
        monkeypatch.setenv("GRAVATAR_API_KEY", "late")
        assert settings.resolve_api_key() == "late"

    def test_key_from_dotenv(self, tmp_path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("GRAVATAR_CLIENT_NAME=from-dotenv\nGRAVATAR_API_KEY=secret-from-dotenv\n")
        settings = GravatarSettings(_env_file=env_file)
        assert settings.client_name == "from-dotenv"
        assert settings.resolve_api_key() == "secret-from-dotenv"

    def test_environment_wins_over_dotenv(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("GRAVATAR_API_KEY=from-dotenv\n")
        settings = GravatarSettings(_env_file=env_file)
        monkeypatch.setenv("GRAVATAR_API_KEY", "from-environment")
        assert settings.resolve_api_key() == "from-environment"

    def test_key_hidden_from_repr(self) -> None:
        settings = GravatarSettings(api_key="hidden-value", _env_file=None)
        assert settings.resolve_api_key() == "hidden-value"
        assert "hidden-value" not in repr(settings)


class TestUserAgent:
    def test_product_and_version(self) -> None:
        assert GravatarSettings(_env_file=None).user_agent == f"gravatar-mcp/{__version__}"

    def test_with_client_name(self) -> None:
        settings = GravatarSettings(client_name="claude-desktop/0.9", _env_file=None)
        assert settings.user_agent == f"gravatar-mcp/{__version__} claude-desktop/0.9"
