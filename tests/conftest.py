"""Shared fixtures and in-memory implementations of the protocols."""

import asyncio
from typing import Any

import pytest
from fastapi.testclient import TestClient

from weather_cache.api.app import app
from weather_cache.api.dependencies import build_handlers
from weather_cache.entities import LocationEntity
from weather_cache.errors import CacheBackendError, UpstreamError
from weather_cache.services import HistoryService, LocationService, WeatherService

START_TIME = 1_700_000_000.0

BOISE_CURRENT = {"main": {"temp": 290}, "wind": {"speed": 3}, "humidity": 40}
BOISE_HISTORY = {
    "cod": "200",
    "city_id": 5586437,
    "cnt": 2,
    "list": [
        {"dt": 1699568000, "main": {"temp": 281.2, "humidity": 71}, "wind": {"speed": 2.1}},
        {"dt": 1699571600, "main": {"temp": 280.4, "humidity": 74}, "wind": {"speed": 1.5}},
    ],
}


class FakeClock:
    """Controllable stand-in for ``time.time``."""

    def __init__(self, now: float = START_TIME) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryCacheStore:
    """CacheStore that expires entries against a FakeClock."""

    def __init__(self, clock: FakeClock) -> None:
        self._clock = clock
        self.entries: dict[str, tuple[str, float]] = {}
        self.gets: list[str] = []
        self.sets: list[tuple[str, str, int]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.closed = False

    async def get(self, key: str) -> str | None:
        if self.closed:
            raise CacheBackendError("The client is closed")
        if self.fail_reads:
            raise CacheBackendError(f"Cache read failed for {key}: connection refused")
        self.gets.append(key)
        entry = self.entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self.entries[key]
            return None
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        if self.closed:
            raise CacheBackendError("The client is closed")
        if self.fail_writes:
            raise CacheBackendError(f"Cache write failed for {key}: connection refused")
        self.sets.append((key, value, ttl))
        self.entries[key] = (value, self._clock() + ttl)

    async def health_check(self) -> bool:
        return not (self.closed or self.fail_reads)

    async def close(self) -> None:
        self.closed = True


class RecordingRedis:
    """Minimal async Redis double that records commands."""

    def __init__(self, error: Exception | None = None) -> None:
        self.data: dict[str, str | bytes] = {}
        self.commands: list[tuple] = []
        self.error = error
        self.closed = False

    async def get(self, key):
        self.commands.append(("GET", key))
        if self.error:
            raise self.error
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.commands.append(("SET", key, value, ex))
        if self.error:
            raise self.error
        self.data[key] = value
        return True

    async def ping(self):
        if self.error:
            raise self.error
        return True

    async def aclose(self):
        self.closed = True


class StubWeatherProvider:
    """WeatherProvider returning canned payloads and recording calls."""

    def __init__(
        self,
        current: dict[str, Any] | None = None,
        history: Any = None,
        delay: float = 0.0,
    ) -> None:
        self.current = current if current is not None else BOISE_CURRENT
        self.history = history if history is not None else BOISE_HISTORY
        self.delay = delay
        self.error: Exception | None = None
        self.current_calls: list[tuple[float, float]] = []
        self.history_calls: list[tuple[float, float, int]] = []

    async def fetch_current(self, latitude: float, longitude: float) -> dict[str, Any]:
        self.current_calls.append((latitude, longitude))
        if self.error is not None:
            raise self.error
        return self.current

    async def fetch_history(self, latitude: float, longitude: float, start: int) -> Any:
        self.history_calls.append((latitude, longitude, start))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.history


class InMemoryLocationStore:
    """LocationStore backed by a dict."""

    def __init__(self) -> None:
        self.rows: dict[int, LocationEntity] = {}
        self._next_id = 1

    async def create(self, name: str, latitude: float, longitude: float) -> LocationEntity:
        location = LocationEntity(id=self._next_id, name=name, latitude=latitude, longitude=longitude)
        self.rows[location.id] = location
        self._next_id += 1
        return location

    async def list_all(self) -> list[LocationEntity]:
        return [self.rows[key] for key in sorted(self.rows)]

    async def get(self, location_id: int) -> LocationEntity | None:
        return self.rows.get(location_id)

    async def update(self, location_id: int, **fields: Any) -> LocationEntity | None:
        current = self.rows.get(location_id)
        if current is None:
            return None
        updated = LocationEntity(
            id=current.id,
            name=fields.get("name", current.name),
            latitude=fields.get("latitude", current.latitude),
            longitude=fields.get("longitude", current.longitude),
        )
        self.rows[location_id] = updated
        return updated

    async def delete(self, location_id: int) -> bool:
        return self.rows.pop(location_id, None) is not None

    async def health_check(self) -> bool:
        return True


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> InMemoryCacheStore:
    return InMemoryCacheStore(clock)


@pytest.fixture
def provider() -> StubWeatherProvider:
    return StubWeatherProvider()


@pytest.fixture
def location_store() -> InMemoryLocationStore:
    return InMemoryLocationStore()


@pytest.fixture
def history_service(cache, provider, clock) -> HistoryService:
    return HistoryService(cache=cache, provider=provider, ttl=86400, clock=clock)


@pytest.fixture
def boise() -> LocationEntity:
    return LocationEntity(id=1, name="Boise", latitude=43.6, longitude=-116.2)


@pytest.fixture
def client(location_store, provider, history_service):
    """Test client wired to in-memory collaborators (lifespan is not run)."""
    location_service = LocationService(store=location_store)
    location_handler, weather_handler = build_handlers(
        location_service,
        WeatherService(provider=provider),
        history_service,
    )
    app.state.location_handler = location_handler
    app.state.weather_handler = weather_handler

    yield TestClient(app, raise_server_exceptions=False)

    del app.state.weather_handler
    del app.state.location_handler


@pytest.fixture
def upstream_failure() -> UpstreamError:
    return UpstreamError("Weather provider returned status 503")
