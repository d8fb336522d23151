"""
config.py — Gram Panchayat Portal Global Configuration
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    APP_NAME: str = "Gram Panchayat Portal"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # API Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    TRUSTED_HOSTS: List[str] = ["*.panchayat.gov.in"]

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./panchayat.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_CONNECT_TIMEOUT: int = 5

    # Sessions
    JWT_SECRET_KEY: str = Field(
        default="change-me-in-production",
        validation_alias=AliasChoices("JWT_SECRET_KEY", "NEXTAUTH_SECRET"),
    )
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRY_MINUTES: int = 60

    # Passwords
    PASSWORD_HASH_ITERATIONS: int = 260_000

    # Workflow rules the portal historically left to the browser
    ENFORCE_ACTIVE_SCHEME: bool = False
    ENFORCE_SINGLE_ENROLLMENT: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "panchayat.log"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
