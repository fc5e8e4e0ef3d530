#!/usr/bin/env python3
"""
Demo script for the weather cache API.

Creates a location against a running server, fetches its current weather,
then requests the same history window twice to show the second call being
served from Redis.

Usage:
    uvicorn weather_cache.api.app:app --port 3000
    python scripts/demo.py --base-url http://localhost:3000
"""

import argparse
import time

import httpx


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def timed_get(client: httpx.Client, path: str) -> tuple[httpx.Response, float]:
    start_time = time.time()
    response = client.get(path)
    return response, (time.time() - start_time) * 1000


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--base-url", default="http://localhost:3000")
    parser.add_argument("--days", type=int, default=5)
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        print_section("Create location")
        response = client.post("/locations", json={"name": "Boise", "latitude": 43.6, "longitude": -116.2})
        response.raise_for_status()
        location = response.json()
        print(f"  ✓ Stored {location['name']} as id {location['id']}")

        print_section("Current weather")
        response, elapsed_ms = timed_get(client, f"/weather/{location['id']}")
        print(f"  {response.status_code} in {elapsed_ms:.1f}ms: {response.json()}")

        print_section(f"History for the last {args.days} days")
        for attempt in ("first (cache miss)", "second (cache hit)"):
            response, elapsed_ms = timed_get(client, f"/history/{location['id']}?days={args.days}")
            print(f"  {attempt}: {response.status_code} in {elapsed_ms:.1f}ms")

        print_section("Missing location")
        response = client.get(f"/history/999999?days={args.days}")
        print(f"  {response.status_code}: {response.json()}")

        client.delete(f"/locations/{location['id']}")


if __name__ == "__main__":
    main()
