"""Configuration for the FastAPI service."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Service settings loaded from environment variables."""

    APP_NAME: str = "deal-prompt-service"

    # Listener
    HOST: str = "0.0.0.0"
    PORT: int = 4000


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
