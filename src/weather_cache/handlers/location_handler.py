"""HTTP handlers for location CRUD.

Handlers convert between DTOs (API contracts) and service calls.
Domain errors propagate to the application's exception handlers, which
render them as ``{"error": message}``.
"""

from weather_cache.dto import CreateLocationRequest, LocationResponse, UpdateLocationRequest
from weather_cache.entities import LocationEntity
from weather_cache.services import LocationService


def to_location_response(location: LocationEntity) -> LocationResponse:
    return LocationResponse(
        id=location.id,
        name=location.name,
        latitude=location.latitude,
        longitude=location.longitude,
        created_at=location.created_at,
        updated_at=location.updated_at,
    )


class LocationHandler:
    """HTTP handlers for location operations.

    Example:
        ```python
        handler = LocationHandler(location_service=LocationService(store))

        @app.post("/locations", response_model=LocationResponse)
        async def create_location(request: CreateLocationRequest):
            return await handler.create_location(request)
        ```
    """

    def __init__(self, location_service: LocationService) -> None:
        """Initialize the location handler.

        Args:
            location_service: The location service (required).
        """
        self._locations = location_service

    async def create_location(self, request: CreateLocationRequest) -> LocationResponse:
        """Handle POST /locations requests."""
        location = await self._locations.create(
            name=request.name,
            latitude=request.latitude,
            longitude=request.longitude,
        )
        return to_location_response(location)

    async def list_locations(self) -> list[LocationResponse]:
        """Handle GET /locations requests."""
        return [to_location_response(location) for location in await self._locations.list_all()]

    async def get_location(self, location_id: int) -> LocationResponse:
        """Handle GET /locations/{location_id} requests.

        Raises:
            LocationNotFoundError: Rendered as 404
        """
        return to_location_response(await self._locations.get(location_id))

    async def update_location(
        self, location_id: int, request: UpdateLocationRequest
    ) -> LocationResponse:
        """Handle PUT /locations/{location_id} requests.

        Only fields present in the request body are changed.
        """
        fields = request.model_dump(exclude_unset=True, exclude_none=True)
        location = await self._locations.update(location_id, **fields)
        return to_location_response(location)

    async def delete_location(self, location_id: int) -> None:
        """Handle DELETE /locations/{location_id} requests."""
        await self._locations.delete(location_id)
