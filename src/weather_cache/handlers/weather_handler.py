"""HTTP handlers for current and historical weather.

Every weather route resolves the location first, so a missing location
surfaces as 404 before any provider or cache interaction.
"""

from typing import Any

from weather_cache.dto import CurrentWeatherResponse
from weather_cache.services import HistoryService, LocationService, WeatherService, parse_days


class WeatherHandler:
    """HTTP handlers for weather lookups.

    This handler delegates business logic to the services and handles
    HTTP-specific concerns like:
    - Resolving the location before any weather call
    - Validating the ``days`` query parameter
    - Converting entities to DTOs
    """

    def __init__(
        self,
        location_service: LocationService,
        weather_service: WeatherService,
        history_service: HistoryService,
    ) -> None:
        self._locations = location_service
        self._weather = weather_service
        self._history = history_service

    async def get_current_weather(self, location_id: int) -> CurrentWeatherResponse:
        """Handle GET /weather/{location_id} requests.

        Raises:
            LocationNotFoundError: Rendered as 404
            UpstreamError: Rendered as 500
        """
        location = await self._locations.get(location_id)
        current = await self._weather.get_current(location)
        return CurrentWeatherResponse(
            temperature=current.temperature,
            humidity=current.humidity,
            wind_speed=current.wind_speed,
        )

    async def get_history(self, location_id: int, days: str | None) -> Any:
        """Handle GET /history/{location_id}?days=N requests.

        Args:
            location_id: The location to look up
            days: Raw query value, validated by ``parse_days``

        Returns:
            The provider's historical payload (fresh or cached)

        Raises:
            InvalidDaysError: Rendered as 400
            LocationNotFoundError: Rendered as 404
            UpstreamError, CacheBackendError: Rendered as 500
        """
        day_count = parse_days(days)
        location = await self._locations.get(location_id)
        return await self._history.get_history(location, day_count)

    async def health_check(self) -> dict:
        """Handle GET /health requests."""
        cache_healthy = await self._history.is_healthy()
        database_healthy = await self._locations.is_healthy()
        healthy = cache_healthy and database_healthy

        return {
            "status": "healthy" if healthy else "unhealthy",
            "cache_healthy": cache_healthy,
            "database_healthy": database_healthy,
        }
