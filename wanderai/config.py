"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database (cloud sync); empty means in-memory repositories
    database_url: str | None = None

    # Origin used when building shareable links
    share_origin: str = "http://localhost:8501"

    # Compact share payloads longer than this fall back to the minimal payload
    share_max_chars: int = 1500

    # Itinerary generation
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 4000
    openai_temperature: float = 0.7
    generation_timeout_s: float = 60.0

    default_currency: str = "USD"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
