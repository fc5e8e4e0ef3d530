import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import httpx
import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Weather provider
    api_key: str = os.getenv("API_KEY", "")
    weather_api_base_url: str = os.getenv(
        "WEATHER_API_BASE_URL", "https://api.openweathermap.org/data/2.5"
    )
    weather_history_base_url: str = os.getenv(
        "WEATHER_HISTORY_BASE_URL", "http://history.openweathermap.org/data/2.5"
    )
    weather_api_timeout: float = float(os.getenv("WEATHER_API_TIMEOUT", "30.0"))

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # History cache (entry TTL is fixed at 86400s, see services.history_service)
    history_coalesce_inflight: bool = (
        os.getenv("HISTORY_COALESCE_INFLIGHT", "false").lower() == "true"
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///weather.db")
    database_echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "3000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.weather_api_timeout <= 0:
            raise ValueError("WEATHER_API_TIMEOUT must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Install a single stream handler on the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_redis_client() -> redis.Redis:
    """Create the shared async Redis client.

    The client owns a connection pool; every command borrows a connection
    and returns it when done, so one instance serves all requests.
    """
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )


def get_http_client() -> httpx.AsyncClient:
    """Create the shared async HTTP client for the weather provider."""
    return httpx.AsyncClient(
        timeout=settings.weather_api_timeout,
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )
