from functools import lru_cache
from typing import Any
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Pokedex Proxy"
    DEBUG: bool = False

    # CORS settings
    BACKEND_CORS_ORIGINS: list[str] = ["*"]

    # Upstream settings
    POKEAPI_BASE_URL: str = "https://pokeapi.co/api/v2"
    UPSTREAM_TIMEOUT: float = 10.0  # seconds

    # Cache settings
    CACHE_MAX_ENTRIES: int = 500
    CACHE_TTL: int = 60 * 60 * 24  # 24 hours, in seconds

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Logging settings
    LOG_LEVEL: str = "INFO"
    ENABLE_STRUCTURED_LOGGING: bool = True

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    @field_validator("POKEAPI_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("CACHE_MAX_ENTRIES")
    @classmethod
    def check_capacity(cls, v: int) -> int:
        if v < 1:
            raise ValueError("CACHE_MAX_ENTRIES must be at least 1")
        return v


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings with caching for efficiency.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
