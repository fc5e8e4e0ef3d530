"""Location storage protocol."""

from typing import Any, Protocol, runtime_checkable

from weather_cache.entities import LocationEntity


@runtime_checkable
class LocationStore(Protocol):
    """Protocol for durable location storage.

    Example:
        ```python
        store: LocationStore = SqlLocationRepository.from_url()
        location = await store.create("Boise", 43.6, -116.2)
        ```
    """

    async def create(self, name: str, latitude: float, longitude: float) -> LocationEntity:
        """Persist a new location and return it with its assigned id."""
        ...

    async def list_all(self) -> list[LocationEntity]:
        """Return every stored location, ordered by id."""
        ...

    async def get(self, location_id: int) -> LocationEntity | None:
        """Return the location, or None if it does not exist."""
        ...

    async def update(self, location_id: int, **fields: Any) -> LocationEntity | None:
        """Apply a partial update.

        Returns:
            The updated location, or None if it does not exist
        """
        ...

    async def delete(self, location_id: int) -> bool:
        """Delete a location permanently.

        Returns:
            True if a row was deleted, False if it did not exist
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        ...
