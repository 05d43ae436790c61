"""
Configuration settings for the Medication Reminder service.

Uses Pydantic Settings for environment variable management.
"""

import os
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Environment
    ENV: str = Field(default="development", env="ENV")
    DEBUG: bool = Field(default=False, env="DEBUG")
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")

    # Logging Control
    ENABLE_FILE_LOGGING: bool = Field(default=True, env="ENABLE_FILE_LOGGING")
    LOGS_DIR: str = Field(default="logs", env="LOGS_DIR")

    # Application
    APP_NAME: str = Field(default="Medication Reminder", env="APP_NAME")
    VERSION: str = Field(default="1.0.0", env="VERSION")

    # Server
    HOST: str = Field(default="127.0.0.1", env="HOST")
    PORT: int = Field(default=8000, env="PORT")

    origins: List[str] = [
        "http://localhost:8080",
        "http://localhost:5173",
    ]

    # Local store
    DATABASE_URL: str = Field(default="sqlite:///./medications.db", env="DATABASE_URL")
    DATABASE_ECHO: bool = Field(default=False, env="DATABASE_ECHO")
    SEED_CATALOGUE: bool = Field(default=True, env="SEED_CATALOGUE")

    # Selection flows idle longer than this are dropped
    FLOW_IDLE_TIMEOUT_SECONDS: int = Field(default=3600, env="FLOW_IDLE_TIMEOUT_SECONDS")

    # Notifications
    NOTIFICATIONS_ENABLED: bool = Field(default=True, env="NOTIFICATIONS_ENABLED")
    NOTIFICATION_AUTHORIZATION: str = Field(default="authorized", env="NOTIFICATION_AUTHORIZATION")
    NOTIFICATION_MISFIRE_GRACE_SECONDS: int = Field(default=300, env="NOTIFICATION_MISFIRE_GRACE_SECONDS")
    REMINDER_TITLE: str = Field(default="服药提醒", env="REMINDER_TITLE")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


def get_env_file() -> str:
    """Get the appropriate environment file based on ENV setting."""
    env_file = f".env.{os.getenv('ENV', 'development')}"
    if os.path.exists(env_file):
        return env_file
    return ".env"


settings = Settings(_env_file=get_env_file())
