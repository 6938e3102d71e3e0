"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _database_url() -> str:
    """
    Return DATABASE_URL, or build a PostgreSQL URL from the
    individual DB_* variables when it is not set.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return "postgresql://{user}:{password}@{host}:{port}/{name}".format(
        user=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASSWORD", "password"),
        host=os.getenv("DB_HOST", "localhost"),
        port=os.getenv("DB_PORT", "5432"),
        name=os.getenv("DB_NAME", "testdb"),
    )


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Ledger Engine"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = _env_flag("DEBUG", "false")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))

    # Database
    DATABASE_URL: str = _database_url()

    # Ledger policy. Defaults keep the permissive behaviour:
    # balances may go negative, an account may transfer to itself,
    # and zero or negative amounts are accepted.
    ALLOW_NEGATIVE_BALANCE: bool = _env_flag("ALLOW_NEGATIVE_BALANCE", "true")
    ALLOW_SELF_TRANSFER: bool = _env_flag("ALLOW_SELF_TRANSFER", "true")
    REQUIRE_POSITIVE_AMOUNT: bool = _env_flag("REQUIRE_POSITIVE_AMOUNT", "false")

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
