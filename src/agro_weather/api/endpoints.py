"""API endpoints for the agro weather service."""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Query

from agro_weather.config import (
    FORECAST_DAYS, REFERENCE_TIMEZONE, SERVICE_NAME, SERVICE_VERSION,
    SPLIT_UPSTREAM_REQUESTS, TOMORROW_IO_API_KEY
)
from agro_weather.weather.models import WeatherResult
from agro_weather.weather.service import WeatherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])


async def get_weather_service() -> AsyncIterator[WeatherService]:
    """Dependency yielding a weather service that is closed after the request."""
    async with WeatherService() as weather_service:
        yield weather_service


@router.get("/", response_model=WeatherResult)
async def get_weather(
    lat: float = Query(
        ...,
        ge=-90,
        le=90,
        description="Latitude in decimal degrees"
    ),
    lon: float = Query(
        ...,
        ge=-180,
        le=180,
        description="Longitude in decimal degrees"
    ),
    timezone_option: str = Query(
        "utc",
        pattern="^(utc|local)$",
        description="Timezone option: 'utc' (configured reference zone) or 'local' (auto-detected)"
    ),
    weather_service: WeatherService = Depends(get_weather_service)
) -> WeatherResult:
    """Get current conditions and a fixed-length daily forecast.

    Upstream failures degrade to placeholder data instead of an error
    response, so a valid request always yields a complete result.

    Args:
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        timezone_option: 'utc' (default) or 'local' for auto-detected timezone
        weather_service: Injected weather service

    Returns:
        WeatherResult with current conditions and forecast days
    """
    result = await weather_service.get_weather(lat, lon, timezone_option=timezone_option)

    if result.fallback_reasons:
        logger.warning(f"Serving degraded weather for ({lat}, {lon}): {', '.join(result.fallback_reasons)}")
    else:
        logger.info(f"Successfully retrieved weather with {len(result.forecast)} forecast days")
    return result


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "agro-weather"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including forecast shape and upstream settings
    """
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "forecast_days": FORECAST_DAYS,
        "reference_timezone": REFERENCE_TIMEZONE,
        "credential_configured": bool(TOMORROW_IO_API_KEY),
        "fetch_mode": "split" if SPLIT_UPSTREAM_REQUESTS else "combined",
        "data_source": "tomorrow.io timelines API"
    }
