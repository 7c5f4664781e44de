"""Storefront settings loaded from environment (and an optional .env file)."""
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

DEFAULT_CATALOG_BASE_URL = "https://dummyjson.com"


@dataclass(frozen=True)
class Settings:
    catalog_base_url: str = DEFAULT_CATALOG_BASE_URL
    catalog_timeout_seconds: float = 30.0
    catalog_max_retries: int = 3
    session_ttl_hours: int = 24
    log_level: str = "INFO"
    environment: str = "development"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    """Build settings from the current environment."""
    load_dotenv()
    return Settings(
        catalog_base_url=os.environ.get("CATALOG_BASE_URL", DEFAULT_CATALOG_BASE_URL).rstrip("/"),
        catalog_timeout_seconds=_float_env("CATALOG_TIMEOUT_SECONDS", 30.0),
        catalog_max_retries=max(1, _int_env("CATALOG_MAX_RETRIES", 3)),
        session_ttl_hours=_int_env("SESSION_TTL_HOURS", 24),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        environment=os.environ.get("STOREFRONT_ENV", "development").lower(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings (call get_settings.cache_clear() after changing env)."""
    return load_settings()
