"""
Configuration settings for the Wecraft scoring service.
Loads environment variables and provides typed configuration.

These settings configure the HTTP service and logging only; the scoring
engine takes its configuration as call arguments.
"""
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Wecraft Scoring Engine"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Role scored when a request names none
    default_role: str = os.getenv("DEFAULT_ROLE", "backend")

    class Config:
        env_file = ".env"
        extra = "ignore"


# Global settings instance
settings = Settings()
