"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .location_handler import LocationHandler
from .weather_handler import WeatherHandler

__all__ = [
    "LocationHandler",
    "WeatherHandler",
]
