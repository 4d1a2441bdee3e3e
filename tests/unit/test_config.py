"""Unit tests for Settings."""

import pytest
from pydantic import ValidationError

from orgsvc.core.config import Settings

REQUIRED = {"database_url": "sqlite+aiosqlite://", "jwt_secret": "x" * 40}


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**REQUIRED, **overrides})


def test_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ORGANIZATIONS_BACKEND_MODE", raising=False)
    monkeypatch.delenv("PASSWORD_RESET_URL", raising=False)
    monkeypatch.delenv("SERVER_URL", raising=False)
    monkeypatch.delenv("PLATFORM_DOMAIN", raising=False)

    settings = make_settings()

    assert settings.organizations_backend_mode == "ruby"
    assert settings.server_url is None
    assert settings.platform_domain == "getchef.com"
    assert settings.password_reset_url == "https://getchef.com/account/password_resets/new"


def test_password_reset_url_follows_domain(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("PASSWORD_RESET_URL", raising=False)

    settings = make_settings(platform_domain="example.org")

    assert settings.password_reset_url == "https://example.org/account/password_resets/new"


def test_password_reset_url_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PASSWORD_RESET_URL", "https://id.example.org/reset")

    assert make_settings().password_reset_url == "https://id.example.org/reset"


def test_backend_mode_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ORGANIZATIONS_BACKEND_MODE", "erlang")

    assert make_settings().organizations_backend_mode == "erlang"


def test_unknown_backend_mode_is_rejected():
    with pytest.raises(ValidationError):
        make_settings(organizations_backend_mode="python")


def test_server_url_trailing_slash_is_stripped():
    assert make_settings(server_url="https://api.example.com/").server_url == "https://api.example.com"


def test_production_requires_strong_jwt_secret():
    with pytest.raises(ValidationError):
        make_settings(environment="production", jwt_secret="changeme")

    assert make_settings(environment="production").environment == "production"
