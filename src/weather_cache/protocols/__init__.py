"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → Memcached, SQLite → PostgreSQL, etc.)
- Unit testing with in-memory implementations
- Clear separation of concerns

Usage:
    ```python
    from weather_cache.protocols import CacheStore

    store: CacheStore = RedisCacheRepository(client)  # works
    store: CacheStore = InMemoryCacheStore()          # also works
    ```
"""

from .cache_store import CacheStore
from .location_store import LocationStore
from .weather_provider import WeatherProvider

__all__ = [
    "CacheStore",
    "LocationStore",
    "WeatherProvider",
]
