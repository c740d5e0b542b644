"""
Application Configuration
Location reporting service
"""
from functools import lru_cache
from typing import Annotated, List, Optional
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic import field_validator, model_validator
from pathlib import Path

# Get the directory where config.py is located
CONFIG_DIR = Path(__file__).resolve().parent
PROJECT_DIR = CONFIG_DIR.parent.parent
ENV_FILE = PROJECT_DIR / ".env"


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Location API Server"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_PREFIX: str = "/api"
    ADMIN_PREFIX: str = "/admin"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Logging
    LOG_LEVEL: str = "INFO"

    # Database - embedded SQLite by default, Vercel POSTGRES_URL and Neon override it
    DATABASE_URL: str = "sqlite+aiosqlite:///./locations.db"
    POSTGRES_URL: Optional[str] = None  # Vercel Postgres
    NEON_DATABASE_URL: Optional[str] = None  # Neon Postgres
    DATABASE_ECHO: bool = False

    @model_validator(mode='after')
    def configure_database_url(self):
        """Use cloud database URL if available (Neon or Vercel Postgres)"""
        # Priority: NEON_DATABASE_URL > POSTGRES_URL > DATABASE_URL
        url = self.NEON_DATABASE_URL or self.POSTGRES_URL
        if url:
            self.DATABASE_URL = url
        self.DATABASE_URL = normalize_database_url(self.DATABASE_URL)
        return self

    # CORS
    CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            # Handle both JSON array and comma-separated formats
            if v.startswith("["):
                import json
                return json.loads(v)
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got {v!r}")
        return level

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        case_sensitive=True,
        extra="ignore"
    )


def normalize_database_url(url: str) -> str:
    """Point plain driver URLs at the async drivers SQLAlchemy needs"""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://"):
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    # Add SSL mode for Neon (required)
    if "neon.tech" in url and "sslmode" not in url:
        url = url + ("&" if "?" in url else "?") + "sslmode=require"
    return url


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
