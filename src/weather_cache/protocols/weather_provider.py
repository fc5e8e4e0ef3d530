"""Weather provider protocol.

Defines the interface for the third-party service that supplies current
and historical conditions for a pair of coordinates.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class WeatherProvider(Protocol):
    """Protocol for weather data providers.

    Both methods return the provider's raw JSON body. Transport failures,
    non-success statuses and unparseable bodies must raise ``UpstreamError``.
    """

    async def fetch_current(self, latitude: float, longitude: float) -> dict[str, Any]:
        """Fetch current conditions at the given coordinates."""
        ...

    async def fetch_history(self, latitude: float, longitude: float, start: int) -> Any:
        """Fetch hourly history from ``start`` (Unix seconds) until now."""
        ...
