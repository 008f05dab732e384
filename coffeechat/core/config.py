# coffeechat/core/config.py
from functools import lru_cache
from enum import Enum

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnv(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Runtime configuration, read from the environment (or a local .env file).
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "CoffeeChat API"
    APP_ENV: AppEnv = AppEnv.DEVELOPMENT

    DATABASE_URL: str = "sqlite:///./coffeechat.db"

    # Shared with the identity provider that issues the bearer tokens
    AUTH_SECRET: str = "change-me-for-production"
    AUTH_ALGORITHM: str = "HS256"

    CLIENT_URL: str = "http://localhost:5173"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "json" | "console"

    MESSAGE_MAX_LENGTH: int = 1000
    FEEDBACK_MAX_LENGTH: int = 500

    THREAD_DEFAULT_LIMIT: int = 50
    THREAD_MAX_LIMIT: int = 100
    REVIEWS_DEFAULT_LIMIT: int = 10
    REVIEWS_MAX_LIMIT: int = 50


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
