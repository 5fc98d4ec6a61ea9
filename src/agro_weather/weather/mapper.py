"""Mapping of raw tomorrow.io values onto canonical weather records."""

from datetime import datetime, timezone, tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Mapping, Optional

from agro_weather.weather.models import CurrentWeather, DailyForecast

MS_TO_KMH = Decimal("3.6")

# https://docs.tomorrow.io/reference/data-layers-weather-codes
WEATHER_CODES: Dict[int, str] = {
    0: "Unknown",
    1000: "Clear",
    1001: "Cloudy",
    1100: "Mostly Clear",
    1101: "Partly Cloudy",
    1102: "Mostly Cloudy",
    2000: "Fog",
    2100: "Light Fog",
    4000: "Drizzle",
    4001: "Rain",
    4200: "Light Rain",
    4201: "Heavy Rain",
    5000: "Snow",
    5001: "Flurries",
    5100: "Light Snow",
    5101: "Heavy Snow",
    6000: "Freezing Drizzle",
    6001: "Freezing Rain",
    6200: "Light Freezing Rain",
    6201: "Heavy Freezing Rain",
    7000: "Ice Pellets",
    7101: "Heavy Ice Pellets",
    7102: "Light Ice Pellets",
    8000: "Thunderstorm",
}

Values = Mapping[str, Optional[float]]


def describe_weather_code(code: int) -> str:
    """Return the description of a weather code.

    Five-digit day/night codes (e.g. 10000 "Clear, Sunny" by day) are
    described by their four-digit base code. Unknown codes are described as
    ``"Code {n}"``.
    """
    if code in WEATHER_CODES:
        return WEATHER_CODES[code]
    if code >= 10000 and code // 10 in WEATHER_CODES:
        return WEATHER_CODES[code // 10]
    return f"Code {code}"


def _round(value: Optional[float]) -> int:
    """Round half away from zero; absent values become 0."""
    if value is None:
        return 0
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _first(values: Values, *names: str) -> Optional[float]:
    """Return the first populated field among ``names``."""
    for name in names:
        value = values.get(name)
        if value is not None:
            return value
    return None


def ms_to_kmh(speed_ms: Optional[float]) -> float:
    """Convert m/s to km/h rounded to one decimal."""
    if speed_ms is None:
        return 0.0
    return float((Decimal(str(speed_ms)) * MS_TO_KMH).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def map_current(values: Values) -> CurrentWeather:
    """Map the values of a current interval onto a CurrentWeather record.

    Args:
        values: Raw field values in metric units

    Returns:
        Fully-populated CurrentWeather
    """
    code = _round(values.get("weatherCode"))
    return CurrentWeather(
        temperature_c=_round(values.get("temperature")),
        humidity_pct=_round(values.get("humidity")),
        wind_speed_kmh=ms_to_kmh(values.get("windSpeed")),
        weather_code=code,
        precipitation_probability_pct=_round(values.get("precipitationProbability")),
        uv_index=_round(values.get("uvIndex")),
        pressure_hpa=_round(_first(values, "pressureSeaLevel", "pressureSurfaceLevel")),
        description=describe_weather_code(code),
    )


def map_daily(start_time: datetime, values: Values, zone: tzinfo = timezone.utc) -> DailyForecast:
    """Map the values of a daily interval onto a DailyForecast record.

    Args:
        start_time: Interval start (timezone-aware)
        values: Raw field values in metric units
        zone: Time zone the calendar date is taken in

    Returns:
        Fully-populated DailyForecast
    """
    code = _round(_first(values, "weatherCodeDay", "weatherCode"))
    return DailyForecast(
        date=start_time.astimezone(zone).date().isoformat(),
        temp_max_c=_round(values.get("temperatureMax")),
        temp_min_c=_round(values.get("temperatureMin")),
        weather_code=code,
        description=describe_weather_code(code),
        precipitation_probability_pct=_round(
            _first(values, "precipitationProbabilityAvg", "precipitationProbability")
        ),
    )
