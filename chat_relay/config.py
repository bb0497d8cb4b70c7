from functools import lru_cache
from typing import List, Optional
import os

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Service information
    SERVICE_NAME: str = "chat-relay"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False
    API_PREFIX: str = ""
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # WebSocket configuration
    WS_PATH: str = "/ws"

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"
    CORRELATION_ID_HEADER: str = "X-Correlation-ID"

    # Assistant models
    ASSISTANT_MODEL_PATH: Optional[str] = None
    SENTIMENT_EMOTICONS: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Only structured JSON or plain text logs are supported."""
        if v.lower() not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be either 'json' or 'text'")
        return v.lower()

    @field_validator("WS_PATH")
    @classmethod
    def validate_ws_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("WS_PATH must start with '/'")
        return v


def load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_path = os.path.join(os.getcwd(), ".env")
    if os.path.exists(env_path):
        load_dotenv(dotenv_path=env_path)


@lru_cache
def get_settings() -> Settings:
    """
    Create and cache application settings.

    Returns:
        Settings: Application settings instance
    """
    load_env_file()
    return Settings()
