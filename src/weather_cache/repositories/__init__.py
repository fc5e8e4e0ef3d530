"""Repository layer for data access.

This layer abstracts external dependencies (Redis, SQLite, OpenWeatherMap)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from weather_cache.protocols import CacheStore, LocationStore, WeatherProvider

from .location_repository import SqlLocationRepository
from .openweather_provider import OpenWeatherProvider
from .redis_repository import RedisCacheRepository

__all__ = [
    "CacheStore",
    "LocationStore",
    "WeatherProvider",
    "RedisCacheRepository",
    "SqlLocationRepository",
    "OpenWeatherProvider",
]
