"""Response DTOs for API endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field


class LocationResponse(BaseModel):
    """Response DTO for a stored location."""

    id: int = Field(..., description="Identifier assigned at creation")
    name: str = Field(..., description="Display name of the location")
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")
    created_at: datetime | None = Field(None, description="When the location was created")
    updated_at: datetime | None = Field(None, description="When the location was last modified")


class CurrentWeatherResponse(BaseModel):
    """Response DTO for current conditions."""

    temperature: float = Field(..., description="Temperature as reported by the provider (Kelvin)")
    humidity: float | None = Field(None, description="Relative humidity in percent")
    wind_speed: float = Field(..., description="Wind speed in metres per second")


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    database_healthy: bool = Field(..., description="Whether the location store is reachable")
