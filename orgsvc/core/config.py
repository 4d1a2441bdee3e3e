"""Configuration settings using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str
    database_create_tables: bool = True

    # JWT Configuration (principal tokens are minted by the auth collaborator)
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 30

    environment: Literal["development", "production"] = "development"
    api_docs_enabled: bool | None = None

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Organizations endpoint behaviour
    organizations_backend_mode: Literal["ruby", "erlang"] = "ruby"
    server_url: str | None = None

    # Platform account links
    platform_domain: str = "getchef.com"
    password_reset_url: str | None = None

    @model_validator(mode="after")
    def _derive_password_reset_url(self) -> Settings:
        if not self.password_reset_url:
            self.password_reset_url = (
                f"https://{self.platform_domain}/account/password_resets/new"
            )
        if self.server_url:
            self.server_url = self.server_url.rstrip("/")
        return self

    @model_validator(mode="after")
    def _validate_production_settings(self) -> Settings:
        if self.environment != "production":
            return self

        insecure_jwt_secrets = {
            "dev-secret-change-in-production",
            "your-secret-key-change-in-production",
            "change-me",
            "changeme",
        }
        if self.jwt_secret in insecure_jwt_secrets or len(self.jwt_secret) < 32:
            raise ValueError("JWT_SECRET must be a strong secret in production")

        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
