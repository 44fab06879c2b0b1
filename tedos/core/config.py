"""Configuration management for the TedOS content core."""

from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file (only if accessible)
try:
    load_dotenv()
except (PermissionError, OSError):
    # In sandboxed environments, .env might not be accessible
    pass


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # Environment
    TEDOS_ENV: str = Field(default="dev", description="Environment: dev, staging, prod, test")
    TEDOS_LOG_LEVEL: str | None = Field(
        default=None, description="Explicit log level override (DEBUG, INFO, WARNING...)"
    )

    # Merge diagnostics
    MERGE_LOG_CHUNK_KEYS: bool = Field(
        default=True, description="Log the keys each chunk contributed during a merge"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance
    """
    return Settings()
