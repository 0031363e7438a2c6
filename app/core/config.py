# app/core/config.py

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_REDIS_URL = "redis://localhost:6379"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    redis_url: str = DEFAULT_REDIS_URL
    key_prefix: str = "m_portal"
    socket_timeout: float = 2.0
    retry_attempts: int = 3
    retry_delay: float = 2.0
    retry_backoff: float = 1.0
    max_pool_size: int = 0
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def durable_enabled(self) -> bool:
        return bool(self.redis_url)

    @classmethod
    def from_env(cls) -> "Settings":
        # Load environment variables from .env
        load_dotenv()
        settings = cls(
            redis_url=os.getenv("REDIS_URL", DEFAULT_REDIS_URL).strip(),
            key_prefix=os.getenv("REDIS_KEY_PREFIX", "m_portal"),
            socket_timeout=_env_float("REDIS_SOCKET_TIMEOUT", 2.0),
            retry_attempts=_env_int("REDIS_RETRY_ATTEMPTS", 3),
            retry_delay=_env_float("REDIS_RETRY_DELAY", 2.0),
            retry_backoff=_env_float("REDIS_RETRY_BACKOFF", 1.0),
            max_pool_size=_env_int("MAX_POOL_SIZE", 0),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_env_int("PORT", 3000),
        )
        if settings.retry_attempts < 0:
            raise ValueError("REDIS_RETRY_ATTEMPTS must not be negative")
        if settings.max_pool_size < 0:
            raise ValueError("MAX_POOL_SIZE must not be negative")
        return settings
