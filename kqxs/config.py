"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_database_url() -> str:
    """Resolve the SQL history store connection string.

    Priority:
      1) DATABASE_URL (explicit)
      2) Fallback to local sqlite
    """

    explicit = os.getenv("DATABASE_URL")
    if explicit:
        return explicit
    return "sqlite:///./kqxs.db"


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # History store
    HISTORY_BACKEND: str = os.getenv("HISTORY_BACKEND", "json").lower().strip()  # "json" | "sql"
    HISTORY_PATH: str = os.getenv("HISTORY_PATH", "./history.json")
    DATABASE_URL: str = resolve_database_url()

    # Scraping
    KQXS_URL: str = os.getenv("KQXS_URL", "https://link-quay-thu.com")
    SCRAPE_TIMEOUT_SECONDS: int = _env_int("SCRAPE_TIMEOUT_SECONDS", 60)
    SCRAPE_RETRIES: int = _env_int("SCRAPE_RETRIES", 2)

    # Scheduling
    AUTO_CRAWL: bool = _env_bool("AUTO_CRAWL", False)
    CRAWL_INTERVAL_SECONDS: int = _env_int("CRAWL_INTERVAL_SECONDS", 300)

    MANUAL_TEXT_LIMIT: int = _env_int("MANUAL_TEXT_LIMIT", 6000)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration."""

    TESTING: bool = True
    AUTO_CRAWL: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
