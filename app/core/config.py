# Defines application-wide settings using pydantic-settings' BaseSettings
# Manages environment variables for various aspects of the application:
# Project metadata (name, version)
# Database connection details
# Session cookie and token settings
# Template and static asset locations


import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

APP_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    PROJECT_NAME: str = "Forum"
    VERSION: str = "0.1.0"

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./db/forum.db")

    # Sessions
    SESSION_COOKIE_NAME: str = "session"
    SESSION_LIFETIME_HOURS: int = 24
    SESSION_TOKEN_BYTES: int = 32  # 256 bits, hex encoded to 64 characters
    SESSION_TOKEN_ATTEMPTS: int = 3
    COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "False").lower() in ["true", "1", "t"]

    # Rendering
    TEMPLATES_DIR: str = str(APP_DIR / "templates")
    STATIC_DIR: str = str(APP_DIR / "statics")

    # Development settings - set these differently in production
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ["true", "1", "t"]
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")

    @field_validator("SESSION_LIFETIME_HOURS", "SESSION_TOKEN_BYTES", "SESSION_TOKEN_ATTEMPTS")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be a positive integer")
        return v


# Create settings instance
settings = Settings()

# Print for debugging
if settings.DEBUG:
    print(f"Environment: {settings.ENVIRONMENT}")
