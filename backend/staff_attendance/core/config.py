"""
Application configuration using Pydantic BaseSettings.
Loads environment variables and provides typed configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project metadata
    PROJECT_NAME: str = "Staff Attendance Manager"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./attendance.db"
    DATABASE_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # Sessions
    SECRET_KEY: str = "attendance-local-secret"
    SESSION_COOKIE: str = "attendance_session"
    SESSION_MAX_AGE: int = 8 * 60 * 60  # seconds

    # Accounts
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "change-me-admin"
    DEFAULT_STAFF_PASSWORD: str = "sam123456"

    # Calendar rules, ISO weekday numbers (Mon=1 .. Sun=7)
    WEEKEND_DAYS: List[int] = [7]
    # Manual marks on a holiday/weekend are stored as holiday/weekend
    ENFORCE_CALENDAR_OVERRIDE: bool = True

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True
    LOGIN_RATE_LIMIT: str = "10/minute"

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


settings = Settings()
