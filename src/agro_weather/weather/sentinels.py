"""Placeholder records used when upstream data is missing."""

from datetime import date, timedelta
from typing import Iterable

from agro_weather.weather.models import CurrentWeather, DailyForecast, WeatherResult

CURRENT_UNAVAILABLE = "Unavailable"
DAILY_UNAVAILABLE = "N/A"


def sentinel_current() -> CurrentWeather:
    """Return a current-conditions record that carries no data."""
    return CurrentWeather(
        temperature_c=0,
        humidity_pct=0,
        wind_speed_kmh=0.0,
        weather_code=0,
        precipitation_probability_pct=0,
        uv_index=0,
        pressure_hpa=0,
        description=CURRENT_UNAVAILABLE,
    )


def sentinel_daily(day: date) -> DailyForecast:
    """Return a daily record for ``day`` that carries no data."""
    return DailyForecast(
        date=day.isoformat(),
        temp_max_c=0,
        temp_min_c=0,
        weather_code=0,
        description=DAILY_UNAVAILABLE,
        precipitation_probability_pct=0,
    )


def sentinel_result(
    today: date,
    days: int,
    timezone_str: str = "UTC",
    reasons: Iterable[str] = ()
) -> WeatherResult:
    """Build a fully-populated result with no data in it.

    Args:
        today: First forecast date
        days: Number of forecast entries
        timezone_str: Time zone ``today`` was computed in
        reasons: Error kinds that led to the fallback

    Returns:
        WeatherResult with sentinel current conditions and ``days`` sentinel
        forecast entries dated ``today`` onwards
    """
    return WeatherResult(
        current=sentinel_current(),
        forecast=[sentinel_daily(today + timedelta(days=offset)) for offset in range(days)],
        timezone=timezone_str,
        fallback_reasons=list(reasons),
    )
