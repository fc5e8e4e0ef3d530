"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from weather_cache.services import HistoryService

    history = HistoryService.create(cache=cache_repository, provider=provider)
    payload = await history.get_history(location, days=7)
    ```
"""

from .history_service import HistoryService, history_cache_key, parse_days
from .location_service import LocationService
from .weather_service import WeatherService

__all__ = [
    "HistoryService",
    "LocationService",
    "WeatherService",
    "history_cache_key",
    "parse_days",
]
