"""Current weather domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CurrentWeatherEntity:
    """Fields selected from the provider's current-conditions payload."""

    temperature: float
    humidity: float | None
    wind_speed: float
