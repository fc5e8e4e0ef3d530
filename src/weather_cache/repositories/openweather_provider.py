"""OpenWeatherMap implementation of WeatherProvider.

Endpoints used:
    - ``{base}/weather``: current conditions
    - ``{history_base}/history/city``: hourly history from a start timestamp

Both return JSON. The provider body is passed through untouched; field
selection happens in the service layer.
"""

import logging
from typing import Any

import httpx

from weather_cache.config import get_http_client, settings
from weather_cache.errors import UpstreamError

logger = logging.getLogger(__name__)


class OpenWeatherProvider:
    """OpenWeatherMap client satisfying the WeatherProvider protocol.

    Example:
        ```python
        provider = OpenWeatherProvider.create(api_key="...")
        payload = await provider.fetch_history(43.6, -116.2, start=1700000000)
        await provider.close()
        ```
    """

    def __init__(
        self,
        api_key: str,
        client: httpx.AsyncClient,
        base_url: str | None = None,
        history_base_url: str | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            api_key: OpenWeatherMap credential, sent as ``appid``.
            client: Shared async HTTP client.
            base_url: Current-conditions API base. Defaults to settings.
            history_base_url: History API base. Defaults to settings.
        """
        self._api_key = api_key
        self._client = client
        self._base_url = (base_url or settings.weather_api_base_url).rstrip("/")
        self._history_base_url = (
            history_base_url or settings.weather_history_base_url
        ).rstrip("/")

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> "OpenWeatherProvider":
        """Factory method to create OpenWeatherProvider with defaults.

        Args:
            api_key: Credential. If None, uses settings.
            client: HTTP client. If None, builds one from settings.

        Returns:
            Configured OpenWeatherProvider
        """
        if api_key is None:
            api_key = settings.api_key
        if not api_key:
            logger.warning("API_KEY not set; weather provider calls will be rejected")
        return cls(api_key=api_key, client=client or get_http_client())

    async def fetch_current(self, latitude: float, longitude: float) -> dict[str, Any]:
        """Fetch current conditions.

        Raises:
            UpstreamError: On transport failure, non-2xx status or non-JSON body
        """
        payload = await self._get(
            f"{self._base_url}/weather",
            {"lat": latitude, "lon": longitude},
        )
        if not isinstance(payload, dict):
            raise UpstreamError("Weather provider returned an unexpected payload")
        return payload

    async def fetch_history(self, latitude: float, longitude: float, start: int) -> Any:
        """Fetch hourly history from ``start`` until now.

        Args:
            latitude: Decimal degrees
            longitude: Decimal degrees
            start: Window start as Unix seconds

        Raises:
            UpstreamError: On transport failure, non-2xx status or non-JSON body
        """
        return await self._get(
            f"{self._history_base_url}/history/city",
            {"lat": latitude, "lon": longitude, "type": "hour", "start": start},
        )

    async def _get(self, url: str, params: dict[str, Any]) -> Any:
        params = {**params, "appid": self._api_key}
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Weather provider returned %d for %s: %s",
                e.response.status_code,
                url,
                e.response.text[:200],
            )
            raise UpstreamError(
                f"Weather provider returned status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Weather provider request to %s failed: %s", url, e)
            raise UpstreamError(f"Weather provider request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError("Weather provider returned a malformed payload") from e

    async def close(self) -> None:
        """Close the HTTP client. Only called at shutdown."""
        await self._client.aclose()
