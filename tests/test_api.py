"""
Tests for the weather cache API.
"""

import json

from weather_cache.errors import CacheBackendError

from .conftest import BOISE_HISTORY


def create_boise(client) -> int:
    response = client.post("/locations", json={"name": "Boise", "latitude": 43.6, "longitude": -116.2})
    assert response.status_code == 200
    return response.json()["id"]


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Weather Cache API"


def test_health(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "cache_healthy": True, "database_healthy": True}


def test_health_reports_unreachable_cache(client, cache):
    cache.fail_reads = True

    data = client.get("/health").json()

    assert data["status"] == "unhealthy"
    assert data["cache_healthy"] is False


def test_create_location_and_current_weather(client):
    """Boise is stored and its current conditions are trimmed to three fields."""
    response = client.post("/locations", json={"name": "Boise", "latitude": 43.6, "longitude": -116.2})
    assert response.status_code == 200
    created = response.json()
    assert created["name"] == "Boise"
    assert isinstance(created["id"], int)

    response = client.get(f"/weather/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"temperature": 290, "humidity": 40, "wind_speed": 3}


def test_history_miss_calls_provider_and_caches(client, provider, cache):
    location_id = create_boise(client)

    response = client.get(f"/history/{location_id}?days=5")

    assert response.status_code == 200
    assert response.json() == BOISE_HISTORY
    assert len(provider.history_calls) == 1
    stored, _ = cache.entries[f"history:{location_id}:5"]
    assert json.loads(stored) == BOISE_HISTORY


def test_history_repeat_is_served_from_cache(client, provider):
    location_id = create_boise(client)
    first = client.get(f"/history/{location_id}?days=5")

    second = client.get(f"/history/{location_id}?days=5")

    assert second.status_code == 200
    assert second.content == first.content
    assert len(provider.history_calls) == 1


def test_history_for_missing_location(client, provider, cache):
    response = client.get("/history/999?days=5")

    assert response.status_code == 404
    assert response.json() == {"error": "Location not found"}
    assert provider.history_calls == []
    assert cache.gets == []


def test_weather_for_missing_location(client, provider):
    response = client.get("/weather/999")

    assert response.status_code == 404
    assert response.json() == {"error": "Location not found"}
    assert provider.current_calls == []


def test_history_rejects_invalid_days(client, cache):
    location_id = create_boise(client)

    for query in ("", "?days=", "?days=abc", "?days=-3", "?days=1.5"):
        response = client.get(f"/history/{location_id}{query}")
        assert response.status_code == 400, query
        assert response.json() == {"error": "days must be a non-negative integer"}

    assert cache.gets == []


def test_history_rejects_days_beyond_range(client, provider, cache):
    location_id = create_boise(client)

    for days in ("36501", "9" * 400, "9" * 5000):
        response = client.get(f"/history/{location_id}?days={days}")
        assert response.status_code == 400, days[:10]
        assert response.json() == {"error": "days must be at most 36500"}

    assert cache.gets == []
    assert provider.history_calls == []


def test_history_upstream_failure(client, provider, cache, upstream_failure):
    location_id = create_boise(client)
    provider.error = upstream_failure

    response = client.get(f"/history/{location_id}?days=2")

    assert response.status_code == 500
    assert response.json() == {"error": "Weather provider returned status 503"}
    assert cache.sets == []


def test_history_cache_failure(client, provider, cache):
    location_id = create_boise(client)
    cache.fail_reads = True

    response = client.get(f"/history/{location_id}?days=2")

    assert response.status_code == 500
    assert "error" in response.json()
    assert provider.history_calls == []


def test_weather_upstream_failure(client, provider, upstream_failure):
    location_id = create_boise(client)
    provider.error = upstream_failure

    response = client.get(f"/weather/{location_id}")

    assert response.status_code == 500
    assert response.json() == {"error": "Weather provider returned status 503"}


def test_cache_survives_many_requests(client, provider, cache):
    location_id = create_boise(client)

    for days in (1, 2, 1, 3, 2):
        assert client.get(f"/history/{location_id}?days={days}").status_code == 200

    assert cache.closed is False
    assert len(provider.history_calls) == 3


def test_location_crud(client):
    location_id = create_boise(client)

    listed = client.get("/locations").json()
    assert [location["id"] for location in listed] == [location_id]

    fetched = client.get(f"/locations/{location_id}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Boise"

    updated = client.put(f"/locations/{location_id}", json={"name": "Boise, ID"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Boise, ID"
    assert updated.json()["latitude"] == 43.6

    deleted = client.delete(f"/locations/{location_id}")
    assert deleted.status_code == 204
    assert deleted.content == b""

    assert client.get(f"/locations/{location_id}").status_code == 404


def test_location_not_found_routes(client):
    assert client.get("/locations/999").json() == {"error": "Location not found"}
    assert client.put("/locations/999", json={"name": "x"}).status_code == 404
    assert client.delete("/locations/999").status_code == 404


def test_create_location_validation(client):
    response = client.post("/locations", json={"name": "Nowhere", "latitude": 123.0})

    assert response.status_code == 422
    assert "error" in response.json()


def test_deleting_location_keeps_cached_history(client, cache):
    location_id = create_boise(client)
    client.get(f"/history/{location_id}?days=5")

    client.delete(f"/locations/{location_id}")

    assert f"history:{location_id}:5" in cache.entries
    assert client.get(f"/history/{location_id}?days=5").status_code == 404


def test_unexpected_error_is_reported_generically(client, cache, monkeypatch):
    location_id = create_boise(client)

    async def explode(key):
        raise RuntimeError("boom")

    monkeypatch.setattr(cache, "get", explode)

    response = client.get(f"/history/{location_id}?days=1")

    assert response.status_code == 500
    assert response.json() == {"error": "Something went wrong!"}


def test_cache_backend_error_message_is_returned(client, cache, monkeypatch):
    location_id = create_boise(client)

    async def unavailable(key):
        raise CacheBackendError("Cache read failed: connection refused")

    monkeypatch.setattr(cache, "get", unavailable)

    response = client.get(f"/history/{location_id}?days=1")

    assert response.status_code == 500
    assert response.json() == {"error": "Cache read failed: connection refused"}
