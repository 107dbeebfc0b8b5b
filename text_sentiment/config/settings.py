"""Application configuration management."""

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Configuration
    api_title: str = "Text Sentiment Analysis"
    api_version: str = "1.0.0"
    api_description: str = "Submits text to the sentiment analysis service and serves render-ready results"
    api_prefix: str = "/api/v1"

    # Analysis service Configuration
    analysis_api_url: str = "http://localhost:8000"
    analysis_timeout: float | None = 30.0  # seconds, None waits indefinitely

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 3000
    max_sessions: int = 1000  # analysis sessions kept in memory
    cors_origins: list[str] = ["*"]

    # Development Configuration
    debug: bool = False
    log_level: str = "INFO"

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8")


# Global settings instance
settings = Settings()
