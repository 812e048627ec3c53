"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the blog backend application.
"""

from pathlib import Path
from typing import Literal

from pydantic import SecretStr
from pydantic_settings.main import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_TITLE_LENGTH = 200
MAX_SLUG_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 500
MAX_BODY_LENGTH = 100000
MAX_TAGS_COUNT = 20
MAX_TAG_LENGTH = 50

BLOG_STATES: tuple[str, ...] = ("draft", "published")
SORTABLE_FIELDS: frozenset[str] = frozenset(
    {"timestamp", "title", "read_count", "reading_time", "updated_at"},
)

# Response constants
DEFAULT_ERROR_MESSAGE = "An Error Occured"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Blog Backend"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/blogapi.log"

    # Store Configuration
    STORE_BACKEND: Literal["postgres", "memory"] = "postgres"
    DATABASE_URL: str = "postgresql+asyncpg://localhost/blog"
    DATABASE_ECHO: bool = False
    POOL_SIZE: int = 10
    MAX_OVERFLOW: int = 20
    POOL_TIMEOUT: int = 30  # seconds
    POOL_RECYCLE: int = 1800  # 30 minutes
    DATABASE_STATEMENT_TIMEOUT_MS: int = 30000

    # Token Configuration
    SECRET_KEY: SecretStr = SecretStr("change-me")
    ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "blogapi"
    JWT_AUDIENCE: str = "blogapi-clients"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Listing Configuration
    DEFAULT_PAGE: int = 1
    DEFAULT_PAGE_LIMIT: int = 20
    PAGINATION_MAX_LIMIT: int = 100
    DEFAULT_ORDER_BY: str = "-timestamp"

    # Text processing
    WORDS_PER_MINUTE: int = 200


settings = Settings()
