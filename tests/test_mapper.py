from datetime import datetime, timezone
import zoneinfo

import pytest

from agro_weather.weather.mapper import describe_weather_code, map_current, map_daily, ms_to_kmh


@pytest.mark.parametrize("speed_ms, expected", [
    (10, 36.0),
    (3.4, 12.2),
    (0.25, 0.9),
    (None, 0.0),
])
def test_wind_speed_converted_to_kmh(speed_ms, expected):
    assert ms_to_kmh(speed_ms) == expected


def test_map_current_rounds_and_converts():
    current = map_current({
        "temperature": 24.6,
        "humidity": 61.2,
        "windSpeed": 10,
        "weatherCode": 4001,
        "precipitationProbability": 45.5,
        "uvIndex": 2.4,
        "pressureSeaLevel": 1012.7,
    })

    assert current.temperature_c == 25
    assert current.humidity_pct == 61
    assert current.wind_speed_kmh == 36.0
    assert current.weather_code == 4001
    assert current.precipitation_probability_pct == 46
    assert current.uv_index == 2
    assert current.pressure_hpa == 1013
    assert current.description == "Rain"


def test_map_current_defaults_absent_fields_to_zero():
    current = map_current({"temperature": -3.5})

    assert current.temperature_c == -4
    assert current.humidity_pct == 0
    assert current.wind_speed_kmh == 0.0
    assert current.weather_code == 0
    assert current.pressure_hpa == 0
    assert current.description == "Unknown"


def test_map_current_uses_surface_pressure_when_sea_level_missing():
    current = map_current({"temperature": 20, "pressureSeaLevel": None, "pressureSurfaceLevel": 948.2})

    assert current.pressure_hpa == 948


def test_map_daily_prefers_day_code():
    start = datetime(2026, 10, 19, tzinfo=timezone.utc)
    daily = map_daily(start, {
        "temperatureMax": 31.5,
        "temperatureMin": 17.49,
        "weatherCodeDay": 4200,
        "weatherCode": 1000,
        "precipitationProbabilityAvg": 60.2,
        "precipitationProbability": 90,
    })

    assert daily.date == "2026-10-19"
    assert daily.temp_max_c == 32
    assert daily.temp_min_c == 17
    assert daily.weather_code == 4200
    assert daily.description == "Light Rain"
    assert daily.precipitation_probability_pct == 60


def test_map_daily_falls_back_to_generic_code_then_unknown():
    start = datetime(2026, 10, 19, tzinfo=timezone.utc)

    generic = map_daily(start, {"temperatureMax": 20, "temperatureMin": 10, "weatherCode": 1001})
    unknown = map_daily(start, {"temperatureMax": 20, "temperatureMin": 10})

    assert (generic.weather_code, generic.description) == (1001, "Cloudy")
    assert (unknown.weather_code, unknown.description) == (0, "Unknown")
    assert unknown.precipitation_probability_pct == 0


def test_map_daily_takes_date_in_reference_zone():
    start = datetime(2026, 10, 18, 22, 0, tzinfo=timezone.utc)

    daily = map_daily(start, {"temperatureMax": 20, "temperatureMin": 10}, zoneinfo.ZoneInfo("Asia/Kolkata"))

    assert daily.date == "2026-10-19"


@pytest.mark.parametrize("code, expected", [
    (1000, "Clear"),
    (8000, "Thunderstorm"),
    (10000, "Clear"),
    (42010, "Heavy Rain"),
    (9999, "Code 9999"),
    (11030, "Code 11030"),
])
def test_describe_weather_code(code, expected):
    assert describe_weather_code(code) == expected
