"""Weather service: fetch, normalize and degrade gracefully."""

import asyncio
import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, List, Optional, Sequence, Union

from agro_weather.config import FORECAST_DAYS, REFERENCE_TIMEZONE, SPLIT_UPSTREAM_REQUESTS
from agro_weather.weather.calendar import align
from agro_weather.weather.classifier import classify
from agro_weather.weather.client import (
    CURRENT_FIELDS, CURRENT_TIMESTEP, DAILY_FIELDS, DAILY_TIMESTEP, TomorrowIoClient
)
from agro_weather.weather.errors import NoUsableIntervals, WeatherError
from agro_weather.weather.mapper import map_current, map_daily
from agro_weather.weather.models import (
    Coordinate, CurrentWeather, DailyForecast, RawInterval, WeatherResult
)
from agro_weather.weather.sentinels import sentinel_current, sentinel_result
from agro_weather.weather.timezones import TimezoneResolver, load_zone

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Fetched = Union[List[RawInterval], BaseException]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeatherService:
    """Service producing a fixed-shape weather result for a coordinate."""

    def __init__(
        self,
        client: Optional[TomorrowIoClient] = None,
        *,
        days: int = FORECAST_DAYS,
        timezone_str: str = REFERENCE_TIMEZONE,
        split_requests: bool = SPLIT_UPSTREAM_REQUESTS,
        clock: Clock = utc_now,
        timezone_resolver: Optional[TimezoneResolver] = None
    ):
        """Initialize the weather service.

        Args:
            client: Upstream client instance (creates default if None)
            days: Number of forecast days in every result
            timezone_str: Reference time zone for "today"
            split_requests: Fetch current and daily data with two concurrent calls
            clock: Returns the current timezone-aware instant
            timezone_resolver: Resolver for the 'local' time zone option
                (created on first use if None)
        """
        self.client = client or TomorrowIoClient()
        self.days = days
        self.timezone_str = timezone_str
        self.split_requests = split_requests
        self.clock = clock
        self._timezone_resolver = timezone_resolver

    @property
    def timezone_resolver(self) -> TimezoneResolver:
        if self._timezone_resolver is None:
            self._timezone_resolver = TimezoneResolver()
        return self._timezone_resolver

    async def get_weather(
        self,
        lat: float,
        lon: float,
        timezone_option: str = "utc"
    ) -> WeatherResult:
        """Get current conditions and a calendar-aligned forecast.

        Upstream failures never propagate: the affected part of the result is
        replaced with placeholder data and the error kind is listed in
        ``fallback_reasons``.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            timezone_option: 'utc' uses the configured reference time zone,
                'local' the time zone at the coordinate

        Returns:
            WeatherResult with exactly ``days`` forecast entries

        Raises:
            ValidationError: If the coordinates are out of range
        """
        coordinate = Coordinate(latitude=lat, longitude=lon)
        zone = load_zone(self._reference_timezone(coordinate, timezone_option))
        timezone_str = zone.key
        now = self.clock()
        today = now.astimezone(zone).date()
        reasons: List[str] = []

        if self.split_requests:
            current_fetched, daily_fetched = await asyncio.gather(
                self._fetch(coordinate, today, zone, timezone_str, (CURRENT_TIMESTEP,), CURRENT_FIELDS),
                self._fetch(coordinate, today, zone, timezone_str, (DAILY_TIMESTEP,), DAILY_FIELDS),
                return_exceptions=True
            )
        else:
            try:
                current_fetched = daily_fetched = await self._fetch(
                    coordinate, today, zone, timezone_str,
                    (CURRENT_TIMESTEP, DAILY_TIMESTEP), CURRENT_FIELDS + DAILY_FIELDS
                )
            except Exception as e:
                self._record_fallback("result", e, reasons)
                return sentinel_result(today, self.days, timezone_str, reasons)

        try:
            current = self._current_from(current_fetched, now)
        except Exception as e:
            self._record_fallback("current conditions", e, reasons)
            current = sentinel_current()

        try:
            forecast = self._forecast_from(daily_fetched, now, today, zone)
        except Exception as e:
            self._record_fallback("forecast", e, reasons)
            forecast = align([], today, self.days)

        logger.info(
            f"Weather for ({lat}, {lon}) in {timezone_str}: "
            f"current={current.description}, {len(forecast)} forecast days"
        )
        return WeatherResult(
            current=current,
            forecast=forecast,
            timezone=timezone_str,
            fallback_reasons=reasons
        )

    def _reference_timezone(self, coordinate: Coordinate, timezone_option: str) -> str:
        if timezone_option != "local":
            return self.timezone_str
        try:
            return self.timezone_resolver.get_timezone(coordinate.latitude, coordinate.longitude)
        except Exception as e:
            logger.error(f"Timezone lookup failed, using {self.timezone_str}: {e}")
            return self.timezone_str

    async def _fetch(
        self,
        coordinate: Coordinate,
        today: date,
        zone: tzinfo,
        timezone_str: str,
        timesteps: Sequence[str],
        fields: Sequence[str]
    ) -> List[RawInterval]:
        start_time = datetime.combine(today, time.min, tzinfo=zone)
        return await self.client.get_intervals(
            coordinate,
            timesteps=timesteps,
            fields=fields,
            start_time=start_time,
            end_time=start_time + timedelta(days=self.days),
            timezone_str=timezone_str
        )

    def _current_from(self, fetched: Fetched, now: datetime) -> CurrentWeather:
        if isinstance(fetched, BaseException):
            raise fetched

        candidate = classify(fetched, now).current_candidate
        if candidate is None:
            raise NoUsableIntervals(f"No current conditions among {len(fetched)} intervals")
        return map_current(candidate.values)

    def _forecast_from(self, fetched: Fetched, now: datetime, today: date, zone: tzinfo) -> List[DailyForecast]:
        if isinstance(fetched, BaseException):
            raise fetched

        candidates = classify(fetched, now).daily_candidates
        if not candidates:
            raise NoUsableIntervals(f"No daily summaries among {len(fetched)} intervals")

        records = [map_daily(interval.start_time, interval.values, zone) for interval in candidates]
        return align(records, today, self.days)

    def _record_fallback(self, part: str, error: Exception, reasons: List[str]):
        if isinstance(error, WeatherError):
            logger.warning(f"Using placeholder {part}: {error.reason}: {error}")
            reason = error.reason
        else:
            logger.exception(f"Unexpected error building {part}, using placeholder")
            reason = "unexpected_error"

        if reason not in reasons:
            reasons.append(reason)

    async def aclose(self):
        """Close the weather client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing weather client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
