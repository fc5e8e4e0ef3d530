"""Weather Cache - location registry with live and cached historical weather.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, LocationStore, WeatherProvider)
    - repositories: Data access implementations (Redis, SQLite, OpenWeatherMap)
    - services: Business logic (history cache gateway, current weather, locations)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from weather_cache.services import HistoryService

    history = HistoryService.create(cache=cache_repository, provider=provider)
    payload = await history.get_history(location, days=7)
    ```

For HTTP API:
    ```python
    from weather_cache.api.app import app
    ```
"""

from weather_cache.config import get_http_client, get_redis_client, settings
from weather_cache.dto import CreateLocationRequest, UpdateLocationRequest
from weather_cache.entities import CurrentWeatherEntity, LocationEntity
from weather_cache.errors import (
    CacheBackendError,
    InvalidDaysError,
    LocationNotFoundError,
    UpstreamError,
    WeatherCacheError,
)
from weather_cache.handlers import LocationHandler, WeatherHandler
from weather_cache.protocols import CacheStore, LocationStore, WeatherProvider
from weather_cache.repositories import (
    OpenWeatherProvider,
    RedisCacheRepository,
    SqlLocationRepository,
)
from weather_cache.services import HistoryService, LocationService, WeatherService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    "get_http_client",
    # Errors
    "WeatherCacheError",
    "LocationNotFoundError",
    "InvalidDaysError",
    "UpstreamError",
    "CacheBackendError",
    # Protocols (interfaces)
    "CacheStore",
    "LocationStore",
    "WeatherProvider",
    # Services (business logic)
    "HistoryService",
    "LocationService",
    "WeatherService",
    # Handlers (HTTP)
    "LocationHandler",
    "WeatherHandler",
    # Repositories (data access)
    "RedisCacheRepository",
    "SqlLocationRepository",
    "OpenWeatherProvider",
    # Entities (domain models)
    "LocationEntity",
    "CurrentWeatherEntity",
    # DTOs (API contracts)
    "CreateLocationRequest",
    "UpdateLocationRequest",
]
