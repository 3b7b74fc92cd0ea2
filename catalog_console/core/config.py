"""Application configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment (and .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "Exercise Catalog Console"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"

    # Upstream catalog REST API
    catalog_api_base_url: str = "http://localhost:8000/api"
    catalog_api_token: str = ""  # Set in .env - never commit
    catalog_api_timeout_seconds: float = 30.0

    # CORS: comma-separated list of allowed origins in production
    cors_origins: str = ""

    @property
    def catalog_api_headers(self) -> dict[str, str]:
        """Default headers for every upstream request."""
        headers = {"Accept": "application/json"}
        if self.catalog_api_token:
            headers["Authorization"] = f"Bearer {self.catalog_api_token}"
        return headers


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
