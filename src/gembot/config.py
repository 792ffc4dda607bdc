"""Configuration management for Gembot."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gembot.errors import ApiKeyNotConfiguredError

DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"


@dataclass(frozen=True)
class SessionConfig:
    """Explicit options handed to one session controller."""

    service_endpoint: str
    identity_token: str | None = None
    api_key: str | None = None
    timeout_seconds: float | None = None


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="GEMBOT_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Configuration
    api_key: str | None = Field(None, description="API key for the generation service")
    model: str = Field(default=DEFAULT_MODEL, description="Model name used in the endpoint path")
    api_base: str = Field(default=DEFAULT_API_BASE, description="Base URL of the generation service")
    timeout_seconds: float = Field(default=60, description="Timeout for one generation request in seconds")

    # Identity Configuration
    identity_token: str | None = Field(None, description="Optional custom identity token")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")

    @property
    def service_endpoint(self) -> str:
        return f"{self.api_base.rstrip('/')}/models/{self.model}:generateContent"

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ApiKeyNotConfiguredError("API key not configured. Set GEMBOT_API_KEY in your environment or .env file.")
        return self.api_key

    def session_config(self) -> SessionConfig:
        return SessionConfig(
            service_endpoint=self.service_endpoint,
            identity_token=self.identity_token or None,
            api_key=self.api_key or None,
            timeout_seconds=self.timeout_seconds,
        )


def get_settings(**overrides: object) -> Settings:
    """Load settings from the environment, then apply non-empty overrides."""
    settings = Settings()
    values = {key: value for key, value in overrides.items() if value is not None}
    if not values:
        return settings
    return settings.model_copy(update=values)
