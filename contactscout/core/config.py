from __future__ import annotations

import os
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API configuration
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Contact Scout"
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() in ("true", "1", "yes")

    # CORS (every response, including pre-flight)
    CORS_ALLOW_ORIGIN: str = "*"
    CORS_ALLOW_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: list[str] = [
        "Content-Type",
        "Authorization",
        "X-Client-Info",
        "Apikey",
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_PATH: Path = Path("logs")
    LOG_BACKUP_COUNT: int = 30  # Keep 30 days of logs

    # MongoDB configuration
    MONGODB_URL: str = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "contact_scout")
    MONGODB_COLLECTION_RESULTS: str = "scrape_results"

    # Extraction provider
    SCRAPER_API_BASE_URL: str = os.getenv(
        "SCRAPER_API_BASE_URL", "https://dws-project.onrender.com"
    )
    SCRAPER_API_PATH: str = "/api/scrape"
    SCRAPER_WARMUP_ON_STARTUP: bool = os.getenv(
        "SCRAPER_WARMUP_ON_STARTUP", "true"
    ).lower() in ("true", "1", "yes")
    SCRAPER_WARMUP_DOMAIN: str = "example.com"
    EXTERNAL_API_TIMEOUT: int = 30

    # Retry configuration (fixed delay, no jitter)
    RETRY_MAX_ATTEMPTS: int = int(os.getenv("RETRY_MAX_ATTEMPTS", 3))
    RETRY_DELAY_SECONDS: float = float(os.getenv("RETRY_DELAY_SECONDS", 3.0))

    # History
    HISTORY_LIMIT: int = 10
    HISTORY_MAX_LIMIT: int = 100

    @field_validator("CORS_ALLOW_METHODS", "CORS_ALLOW_HEADERS", mode="before")
    @classmethod
    def assemble_header_list(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list | str):
            return v
        raise ValueError(v)

    class Config:
        case_sensitive = True
        env_file = ".env"
        extra = "ignore"  # Ignore extra fields from .env file


# Create settings instance
settings = Settings()
