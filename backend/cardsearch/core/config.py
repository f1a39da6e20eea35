"""
Application configuration settings.

All configuration is loaded from environment variables with sensible defaults.
"""
import json
from typing import Any
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Card Search Smart Pills"
    api_debug: bool = True

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    rate_limit: str = "100/15minutes"
    rate_limit_enabled: bool = True

    # Hosted search index (Algolia)
    algolia_app_id: str = ""
    algolia_search_api_key: str = ""
    algolia_index_name: str = "prod_item_state_v1"
    external_api_timeout: int = 10

    # Redis (optional response cache, disabled when empty)
    redis_url: str = ""

    # Smart pills
    smart_pills_threshold: int = 50
    smart_pills_sample_size: int = 100
    smart_pills_count_concurrency: int = 8
    smart_pills_cache_ttl_seconds: int = 1800  # 30 minutes
    default_pills_cache_ttl_seconds: int = 3600  # 1 hour

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Any) -> list[str]:
        """Parse CORS origins from JSON string or list."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [v]
        return v

    @property
    def algolia_configured(self) -> bool:
        """Whether credentials for the hosted search index are present."""
        return bool(self.algolia_app_id and self.algolia_search_api_key)

    @property
    def cache_configured(self) -> bool:
        return bool(self.redis_url)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
