"""Historical weather retrieval backed by a time-bounded cache.

Request flow (one attempt per step, no retries):

    CACHE_LOOKUP -> HIT  -> respond with the deserialized cached payload
                 -> MISS -> UPSTREAM_FETCH -> SUCCESS -> CACHE_WRITE -> respond
                                           -> FAILURE -> raise, nothing written

Cache keys have the form ``history:<location_id>:<days>`` and entries expire
after a fixed TTL. Reads never extend the TTL. Two concurrent misses for the
same key both reach the provider and both write (last write wins) unless
in-flight coalescing is enabled.
"""

import asyncio
import json
import logging
import re
import time
from collections.abc import Callable
from typing import Any

from weather_cache.config import settings
from weather_cache.entities import LocationEntity
from weather_cache.errors import CacheBackendError, InvalidDaysError
from weather_cache.protocols import CacheStore, WeatherProvider

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400
HISTORY_CACHE_TTL = SECONDS_PER_DAY
MAX_HISTORY_DAYS = 36500

_DAYS_PATTERN = re.compile(r"\d+")
_MAX_DAYS_DIGITS = len(str(MAX_HISTORY_DAYS))


def history_cache_key(location_id: int, days: int) -> str:
    """Build the cache key for a location and day-count window."""
    return f"history:{location_id}:{days}"


def parse_days(raw: str | int | None) -> int:
    """Validate the ``days`` query value.

    Accepts an integer from 0 to ``MAX_HISTORY_DAYS`` or its decimal string
    form (surrounding whitespace ignored). Anything else, including a
    missing value, is rejected so that no malformed key or timestamp is
    ever produced.

    Raises:
        InvalidDaysError: If the value is not an integer in range
    """
    if isinstance(raw, str) and _DAYS_PATTERN.fullmatch(raw.strip()):
        digits = raw.strip().lstrip("0") or "0"
        if len(digits) > _MAX_DAYS_DIGITS:
            raise InvalidDaysError(f"days must be at most {MAX_HISTORY_DAYS}")
        raw = int(digits)

    if not isinstance(raw, int) or isinstance(raw, bool) or raw < 0:
        raise InvalidDaysError("days must be a non-negative integer")
    if raw > MAX_HISTORY_DAYS:
        raise InvalidDaysError(f"days must be at most {MAX_HISTORY_DAYS}")
    return raw


class HistoryService:
    """Cache-first gateway to the provider's historical weather endpoint.

    Depends on PROTOCOLS, not concrete implementations:
    - CacheStore: Redis in production, an in-memory store in tests
    - WeatherProvider: OpenWeatherMap in production, a stub in tests

    The cache store is injected and shared; this service never closes it.

    Example:
        ```python
        service = HistoryService.create(cache=RedisCacheRepository.create(), provider=provider)
        payload = await service.get_history(location, days=7)
        ```
    """

    def __init__(
        self,
        cache: CacheStore,
        provider: WeatherProvider,
        ttl: int | None = None,
        clock: Callable[[], float] = time.time,
        coalesce_inflight: bool = False,
    ) -> None:
        """Initialize the history service.

        Args:
            cache: Cache backend (required).
            provider: Weather provider (required).
            ttl: Expiry for cache writes in seconds. Defaults to
                ``HISTORY_CACHE_TTL``; only tests pass anything else.
            clock: Returns the current Unix time in seconds.
            coalesce_inflight: Share one upstream call between concurrent
                misses for the same key.
        """
        self._cache = cache
        self._provider = provider
        self._ttl = HISTORY_CACHE_TTL if ttl is None else ttl
        if self._ttl <= 0:
            raise ValueError(f"ttl must be a positive number of seconds, got {self._ttl}")
        self._clock = clock
        self._coalesce = coalesce_inflight
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    @classmethod
    def create(
        cls,
        cache: CacheStore,
        provider: WeatherProvider,
        ttl: int | None = None,
        coalesce_inflight: bool | None = None,
    ) -> "HistoryService":
        """Factory method to create HistoryService with settings defaults.

        Args:
            cache: Cache backend (required).
            provider: Weather provider (required).
            ttl: Entry TTL in seconds. If None, uses ``HISTORY_CACHE_TTL``.
            coalesce_inflight: If None, uses settings.

        Returns:
            Configured HistoryService
        """
        if coalesce_inflight is None:
            coalesce_inflight = settings.history_coalesce_inflight
        return cls(
            cache=cache,
            provider=provider,
            ttl=ttl,
            coalesce_inflight=coalesce_inflight,
        )

    async def get_history(self, location: LocationEntity, days: int) -> Any:
        """Return historical weather for ``location`` covering the last ``days`` days.

        Args:
            location: An existing location (callers resolve it first)
            days: Non-negative day count, see ``parse_days``

        Returns:
            The provider's JSON payload, fresh or from cache

        Raises:
            CacheBackendError: If the cache read or write fails
            UpstreamError: If the provider call fails (nothing is cached)
        """
        key = history_cache_key(location.id, days)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.debug("History cache hit: %s", key)
            return self._deserialize(key, cached)

        logger.info("History cache miss: %s, fetching from provider", key)
        if not self._coalesce:
            return await self._fetch_and_store(key, location, days)

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(key, location, days))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        else:
            logger.debug("Joining in-flight fetch for %s", key)
        return await asyncio.shield(task)

    async def _fetch_and_store(self, key: str, location: LocationEntity, days: int) -> Any:
        start = int(self._clock()) - days * SECONDS_PER_DAY
        payload = await self._provider.fetch_history(location.latitude, location.longitude, start)

        await self._cache.set(key, json.dumps(payload), self._ttl)
        logger.debug("History cached: key=%s ttl=%ds", key, self._ttl)
        return payload

    @staticmethod
    def _deserialize(key: str, raw: str) -> Any:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CacheBackendError(f"Cached value for {key} is not valid JSON") from e

    async def is_healthy(self) -> bool:
        """Check if the cache backend is reachable."""
        return await self._cache.health_check()

    @property
    def ttl(self) -> int:
        """Get the expiry applied to cache writes."""
        return self._ttl
