from functools import lru_cache
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # API Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    # Comma separated, e.g. "https://a.example,https://b.example"
    ALLOWED_ORIGINS: str = "*"

    # Environment name
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Google Maps Platform
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    PLACES_BASE_URL: str = "https://places.googleapis.com/v1"
    ROUTES_BASE_URL: str = "https://routes.googleapis.com"

    # HTTP client limits
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    MAX_RESPONSE_BYTES: int = 1_048_576

    # Route search fan-out
    SEARCH_TIMEOUT_SECONDS: Optional[float] = None
    MAX_CONCURRENT_SEARCHES: int = 8

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
