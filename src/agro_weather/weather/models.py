"""Data models for the agro weather service."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for canonical output models serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinate(BaseModel):
    """Location the weather is requested for."""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class CurrentWeather(CamelModel):
    """Current conditions model."""
    temperature_c: float = Field(..., description="Temperature in Celsius")
    humidity_pct: float = Field(..., description="Relative humidity in percent")
    wind_speed_kmh: float = Field(..., description="Wind speed in km/h")
    weather_code: int = Field(..., description="tomorrow.io weather code")
    precipitation_probability_pct: float = Field(..., description="Precipitation probability in percent")
    uv_index: float = Field(..., description="UV index")
    pressure_hpa: float = Field(..., description="Sea level pressure in hPa")
    description: str = Field(..., description="Textual description of the weather")


class DailyForecast(CamelModel):
    """Daily forecast model."""
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    temp_max_c: float = Field(..., description="Maximum temperature in Celsius")
    temp_min_c: float = Field(..., description="Minimum temperature in Celsius")
    weather_code: int = Field(..., description="tomorrow.io weather code for the day")
    description: str = Field(..., description="Textual description of the weather for the day")
    precipitation_probability_pct: float = Field(..., description="Average precipitation probability in percent")


class WeatherResult(CamelModel):
    """Weather response model: current conditions plus a fixed-length forecast."""
    current: CurrentWeather = Field(..., description="Current conditions")
    forecast: List[DailyForecast] = Field(..., description="Consecutive daily forecasts starting today")
    timezone: str = Field(..., description="Time zone the forecast dates are expressed in")
    fallback_reasons: List[str] = Field(
        default_factory=list,
        description="Error kinds that caused placeholder data to be substituted"
    )


class RawInterval(BaseModel):
    """Raw interval from the tomorrow.io timelines API."""
    start_time: datetime = Field(..., alias="startTime", description="Interval start timestamp")
    values: Dict[str, Optional[FiniteFloat]] = Field(default_factory=dict, description="Field values")

    @field_validator("start_time")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Timeline(BaseModel):
    """One timeline of the upstream response."""
    timestep: Optional[str] = Field(None, description="Timestep the intervals were sampled at")
    intervals: List[RawInterval] = Field(..., description="Time-stamped field values")


class TimelinesData(BaseModel):
    timelines: List[Timeline] = Field(..., min_length=1)


class TimelinesResponse(BaseModel):
    """Raw response from the tomorrow.io timelines API."""
    data: TimelinesData = Field(..., description="Response payload")

    def intervals(self) -> List[RawInterval]:
        """Return the intervals of every timeline in returned order."""
        return [interval for timeline in self.data.timelines for interval in timeline.intervals]
