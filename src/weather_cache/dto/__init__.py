"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import CreateLocationRequest, UpdateLocationRequest
from .responses import (
    CurrentWeatherResponse,
    ErrorResponse,
    HealthCheckResponse,
    LocationResponse,
)

__all__ = [
    "CreateLocationRequest",
    "UpdateLocationRequest",
    "LocationResponse",
    "CurrentWeatherResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
