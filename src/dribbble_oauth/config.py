# Config — environment-driven settings for the Dribbble OAuth client.
# Created: 2026-10-19

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings, read from ``DRIBBBLE_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(env_prefix="DRIBBBLE_", env_file=".env", extra="ignore")

    client_id: str | None = None
    client_secret: str | None = None

    oauth_base_url: str = "https://dribbble.com"
    api_base_url: str = "https://api.dribbble.com/v1"
    request_timeout: float = Field(default=15.0, gt=0)

    config_dir: Path = Field(default_factory=lambda: Path.home() / ".dribbble-oauth")

    # Header sent with Form-JSON request bodies. The legacy client sent
    # "application/x-www-form-urlencoded" here.
    form_json_content_type: str = "application/json"

    @property
    def authorize_url(self) -> str:
        return f"{self.oauth_base_url.rstrip('/')}/oauth/authorize"

    @property
    def token_url(self) -> str:
        return f"{self.oauth_base_url.rstrip('/')}/oauth/token"


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings (cached)."""
    return Settings()


def get_config_dir() -> Path:
    """Get/create the config directory."""
    d = get_settings().config_dir
    d.mkdir(parents=True, exist_ok=True)
    return d
