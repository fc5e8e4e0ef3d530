"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Shared clients (Redis, HTTP, database engine) created once in lifespan
    - Handlers stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Shared clients closed only on shutdown, never by a request
"""

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from weather_cache.config import configure_logging, get_http_client, get_redis_client, settings
from weather_cache.handlers import LocationHandler, WeatherHandler
from weather_cache.repositories import (
    OpenWeatherProvider,
    RedisCacheRepository,
    SqlLocationRepository,
)
from weather_cache.services import HistoryService, LocationService, WeatherService

logger = logging.getLogger(__name__)


def get_location_handler(request: Request) -> LocationHandler:
    """Dependency injection for LocationHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "location_handler", None)
    if handler is None:
        raise RuntimeError("LocationHandler not initialized. Check lifespan setup.")
    return handler


def get_weather_handler(request: Request) -> WeatherHandler:
    """Dependency injection for WeatherHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "weather_handler", None)
    if handler is None:
        raise RuntimeError("WeatherHandler not initialized. Check lifespan setup.")
    return handler


def build_handlers(
    location_service: LocationService,
    weather_service: WeatherService,
    history_service: HistoryService,
) -> tuple[LocationHandler, WeatherHandler]:
    """Wire services into the HTTP handlers."""
    return (
        LocationHandler(location_service=location_service),
        WeatherHandler(
            location_service=location_service,
            weather_service=weather_service,
            history_service=history_service,
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (SQLite store, Redis cache, OpenWeatherMap client)
    2. Services (locations, current weather, history gateway)
    3. Handlers - stored in app.state.location_handler / weather_handler

    Cleanup:
        Removes handlers from app.state, then closes the HTTP client, the
        Redis client and the database engine. Every close runs even if an
        earlier one raises.
    """
    configure_logging(settings.log_level)

    async with AsyncExitStack() as cleanup:
        location_repository = SqlLocationRepository.from_url(settings.database_url)
        cleanup.push_async_callback(location_repository.shutdown)
        await location_repository.startup()

        cache_repository = RedisCacheRepository.create(get_redis_client())
        cleanup.push_async_callback(cache_repository.close)
        if await cache_repository.health_check():
            logger.info("Redis connection successful (%s)", settings.redis_url)
        else:
            logger.warning("Redis unreachable at %s; history requests will fail", settings.redis_url)

        provider = OpenWeatherProvider.create(api_key=settings.api_key, client=get_http_client())
        cleanup.push_async_callback(provider.close)

        location_service = LocationService(store=location_repository)
        history_service = HistoryService.create(
            cache=cache_repository,
            provider=provider,
            coalesce_inflight=settings.history_coalesce_inflight,
        )
        weather_service = WeatherService(provider=provider)

        location_handler, weather_handler = build_handlers(
            location_service, weather_service, history_service
        )
        app.state.location_handler = location_handler
        app.state.weather_handler = weather_handler

        logger.info("Weather cache API started (history TTL %ds)", history_service.ttl)

        try:
            yield
        finally:
            del app.state.weather_handler
            del app.state.location_handler

    logger.info("Weather cache API shut down")


# Type aliases for cleaner dependency injection
LocationHandlerDep = Annotated[LocationHandler, Depends(get_location_handler)]
WeatherHandlerDep = Annotated[WeatherHandler, Depends(get_weather_handler)]
