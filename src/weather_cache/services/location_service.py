"""Location management service.

Thin layer over the LocationStore that turns "absent" results into
``LocationNotFoundError`` so every caller signals 404 the same way.
"""

from typing import Any

from weather_cache.entities import LocationEntity
from weather_cache.errors import LocationNotFoundError
from weather_cache.protocols import LocationStore


class LocationService:
    """CRUD operations on stored locations."""

    def __init__(self, store: LocationStore) -> None:
        """Initialize the location service.

        Args:
            store: Location storage backend (required).
        """
        self._store = store

    async def create(self, name: str, latitude: float, longitude: float) -> LocationEntity:
        return await self._store.create(name=name, latitude=latitude, longitude=longitude)

    async def list_all(self) -> list[LocationEntity]:
        return await self._store.list_all()

    async def get(self, location_id: int) -> LocationEntity:
        """Resolve a location.

        Raises:
            LocationNotFoundError: If no location has this id
        """
        location = await self._store.get(location_id)
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    async def update(self, location_id: int, **fields: Any) -> LocationEntity:
        """Apply a partial update.

        Raises:
            LocationNotFoundError: If no location has this id
        """
        location = await self._store.update(location_id, **fields)
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    async def delete(self, location_id: int) -> None:
        """Delete a location. Cached history derived from it is left to expire.

        Raises:
            LocationNotFoundError: If no location has this id
        """
        if not await self._store.delete(location_id):
            raise LocationNotFoundError(location_id)

    async def is_healthy(self) -> bool:
        return await self._store.health_check()

    @property
    def store(self) -> LocationStore:
        """Get the underlying store (for testing)."""
        return self._store
