"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CreateLocationRequest(BaseModel):
    """Request DTO for creating a location."""

    name: str = Field(..., description="Display name of the location", min_length=1)
    latitude: float = Field(..., description="Latitude in decimal degrees", ge=-90.0, le=90.0)
    longitude: float = Field(..., description="Longitude in decimal degrees", ge=-180.0, le=180.0)


class UpdateLocationRequest(BaseModel):
    """Request DTO for updating a location.

    Only the fields present in the body are changed.
    """

    name: str | None = Field(None, description="New display name", min_length=1)
    latitude: float | None = Field(None, description="New latitude", ge=-90.0, le=90.0)
    longitude: float | None = Field(None, description="New longitude", ge=-180.0, le=180.0)
