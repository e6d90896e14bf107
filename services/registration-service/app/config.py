from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
import os


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration values exposed to FastAPI components."""

    app_name: str = os.getenv("APP_NAME", "registration-service")
    version: str = "0.1.0"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    account_service_url: str = os.getenv("ACCOUNT_SERVICE_URL", "")
    account_service_timeout_seconds: float = float(
        os.getenv("ACCOUNT_SERVICE_TIMEOUT_SECONDS", "5")
    )
    social_provider_header: str = os.getenv("SOCIAL_PROVIDER_HEADER", "X-Social-Provider")
    rate_limit_requests: int = int(os.getenv("RATE_LIMIT_REQUESTS", "20"))
    rate_limit_window_seconds: int = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    rate_limit_backend: str = os.getenv("RATE_LIMIT_BACKEND", "memory").lower()
    redis_url: str = os.getenv("REDIS_URL", "")
    cors_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_csv(
            os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
        )
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings instance for the running process."""
    return Settings()
