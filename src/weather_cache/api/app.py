import logging
from typing import Any

from fastapi import FastAPI, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_cache.api.dependencies import LocationHandlerDep, WeatherHandlerDep, lifespan
from weather_cache.config import settings
from weather_cache.dto import (
    CreateLocationRequest,
    CurrentWeatherResponse,
    ErrorResponse,
    HealthCheckResponse,
    LocationResponse,
    UpdateLocationRequest,
)
from weather_cache.errors import WeatherCacheError

logger = logging.getLogger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse, "description": "Location not found"},
    500: {"model": ErrorResponse, "description": "Internal or upstream error"},
}

app = FastAPI(
    title="Weather Cache API",
    description="Location registry with live weather and Redis-cached weather history",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(WeatherCacheError)
async def weather_cache_error_handler(request: Request, exc: WeatherCacheError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"error": message or "Invalid request"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Something went wrong!"},
    )


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Weather Cache API",
        "version": "0.1.0",
        "description": "Location registry with live weather and Redis-cached weather history",
        "endpoints": {
            "locations": "/locations",
            "weather": "/weather/{location_id}",
            "history": "/history/{location_id}?days=N",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: WeatherHandlerDep) -> dict:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/locations", response_model=LocationResponse, responses=ERROR_RESPONSES)
async def create_location(
    request: CreateLocationRequest, handler: LocationHandlerDep
) -> LocationResponse:
    """Store a new location and return it with its assigned id."""
    return await handler.create_location(request)


@app.get("/locations", response_model=list[LocationResponse], responses=ERROR_RESPONSES)
async def list_locations(handler: LocationHandlerDep) -> list[LocationResponse]:
    """List all stored locations."""
    return await handler.list_locations()


@app.get("/locations/{location_id}", response_model=LocationResponse, responses=ERROR_RESPONSES)
async def get_location(location_id: int, handler: LocationHandlerDep) -> LocationResponse:
    return await handler.get_location(location_id)


@app.put("/locations/{location_id}", response_model=LocationResponse, responses=ERROR_RESPONSES)
async def update_location(
    location_id: int, request: UpdateLocationRequest, handler: LocationHandlerDep
) -> LocationResponse:
    return await handler.update_location(location_id, request)


@app.delete(
    "/locations/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
)
async def delete_location(location_id: int, handler: LocationHandlerDep) -> Response:
    await handler.delete_location(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.get(
    "/weather/{location_id}",
    response_model=CurrentWeatherResponse,
    responses=ERROR_RESPONSES,
)
async def get_current_weather(
    location_id: int, handler: WeatherHandlerDep
) -> CurrentWeatherResponse:
    """Current temperature, humidity and wind speed at a stored location."""
    return await handler.get_current_weather(location_id)


@app.get(
    "/history/{location_id}",
    response_model=None,
    responses={400: {"model": ErrorResponse, "description": "Invalid days"}, **ERROR_RESPONSES},
)
async def get_history(
    location_id: int,
    handler: WeatherHandlerDep,
    days: str | None = Query(None, description="Number of days of hourly history to return"),
) -> Any:
    """Hourly history for the last ``days`` days, served from cache for 24 hours."""
    return await handler.get_history(location_id, days)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
