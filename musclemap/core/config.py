"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "MuscleMap recovery and balance engine"
    VERSION: str = "0.1.0"

    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./musclemap.db"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


# Global settings instance
settings = Settings()
