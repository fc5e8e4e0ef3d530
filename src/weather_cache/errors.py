"""Domain exceptions.

Every error carries the HTTP status it maps to, so the API layer can render
all of them uniformly as ``{"error": message}``.
"""


class WeatherCacheError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class LocationNotFoundError(WeatherCacheError):
    """The referenced location id does not exist."""

    status_code = 404

    def __init__(self, location_id: int | None = None) -> None:
        super().__init__("Location not found")
        self.location_id = location_id


class InvalidDaysError(WeatherCacheError):
    """The ``days`` query parameter is missing or not a non-negative integer."""

    status_code = 400


class UpstreamError(WeatherCacheError):
    """The weather provider was unreachable or returned an unusable response."""

    status_code = 500


class CacheBackendError(WeatherCacheError):
    """The cache backend was unreachable or an operation on it failed."""

    status_code = 500
