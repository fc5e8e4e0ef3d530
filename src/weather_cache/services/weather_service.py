"""Current conditions lookup.

Selects ``temperature``, ``humidity`` and ``wind_speed`` from the provider's
current-weather payload. Current conditions are not cached.
"""

from weather_cache.entities import CurrentWeatherEntity, LocationEntity
from weather_cache.errors import UpstreamError
from weather_cache.protocols import WeatherProvider


class WeatherService:
    """Fetch and trim current conditions for a location."""

    def __init__(self, provider: WeatherProvider) -> None:
        self._provider = provider

    async def get_current(self, location: LocationEntity) -> CurrentWeatherEntity:
        """Return current conditions at the location's coordinates.

        Humidity is read from the top level of the payload, falling back to
        ``main.humidity`` where the provider nests it.

        Raises:
            UpstreamError: If the provider fails or the payload lacks
                ``main.temp`` or ``wind.speed``
        """
        payload = await self._provider.fetch_current(location.latitude, location.longitude)

        try:
            main = payload["main"]
            wind = payload["wind"]
            return CurrentWeatherEntity(
                temperature=main["temp"],
                humidity=payload.get("humidity", main.get("humidity")),
                wind_speed=wind["speed"],
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise UpstreamError(f"Weather provider payload is missing field {e}") from e
