"""Location domain entity."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LocationEntity:
    """A named point on the map that weather can be looked up for.

    Attributes:
        id: Identifier assigned by the location store, never changes
        name: Human-readable name (e.g. "Boise")
        latitude: Decimal degrees
        longitude: Decimal degrees
        created_at: When the record was created
        updated_at: When the record was last modified
    """

    id: int
    name: str
    latitude: float
    longitude: float
    created_at: datetime | None = None
    updated_at: datetime | None = None
