"""HTTP client for the tomorrow.io timelines API."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import httpx
from pydantic import ValidationError

from agro_weather.config import (
    TOMORROW_IO_API_BASE_URL, TOMORROW_IO_API_KEY, UPSTREAM_TIMEOUT_SECONDS
)
from agro_weather.weather.errors import (
    MalformedResponse, MissingCredential, NetworkFailure, UpstreamHttpError
)
from agro_weather.weather.models import Coordinate, RawInterval, TimelinesResponse

logger = logging.getLogger(__name__)

CURRENT_TIMESTEP = "current"
DAILY_TIMESTEP = "1d"

CURRENT_FIELDS = (
    "temperature", "humidity", "windSpeed", "weatherCode",
    "precipitationProbability", "uvIndex", "pressureSeaLevel",
)
DAILY_FIELDS = (
    "temperatureMax", "temperatureMin", "weatherCodeDay", "weatherCode",
    "precipitationProbabilityAvg",
)


def _utc_iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class TomorrowIoClient:
    """Async client for fetching timelines from tomorrow.io."""

    def __init__(
        self,
        api_key: Optional[str] = TOMORROW_IO_API_KEY,
        base_url: str = TOMORROW_IO_API_BASE_URL,
        timeout: float = UPSTREAM_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize the weather client.

        Args:
            api_key: tomorrow.io API key
            base_url: Timelines endpoint URL
            timeout: Overall limit in seconds for each upstream call
            transport: Optional httpx transport (used to stub the upstream)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport
        )

    async def get_intervals(
        self,
        coordinate: Coordinate,
        *,
        timesteps: Sequence[str],
        fields: Sequence[str],
        start_time: datetime,
        end_time: datetime,
        timezone_str: str = "UTC"
    ) -> List[RawInterval]:
        """Fetch timeline intervals for a coordinate.

        Args:
            coordinate: Location to query
            timesteps: Timesteps to request, e.g. ("current", "1d")
            fields: Field names to request
            start_time: Start of the requested window
            end_time: End of the requested window
            timezone_str: Time zone daily intervals are aligned to

        Returns:
            Intervals of every returned timeline, in returned order

        Raises:
            MissingCredential: If no API key is configured
            NetworkFailure: If the request could not be completed
            UpstreamHttpError: If the upstream answers with a non-2xx status
            MalformedResponse: If the body is not the expected JSON shape
        """
        context = f"timesteps={','.join(timesteps)} location={coordinate.latitude},{coordinate.longitude}"

        if not self.api_key:
            raise MissingCredential("TOMORROW_IO_API_KEY is not set", context)

        params = {
            "location": f"{coordinate.latitude},{coordinate.longitude}",
            "fields": ",".join(dict.fromkeys(fields)),
            "timesteps": ",".join(timesteps),
            "units": "metric",
            "timezone": timezone_str,
            "startTime": _utc_iso(start_time),
            "endTime": _utc_iso(end_time),
            "apikey": self.api_key,
        }

        logger.info(f"Fetching weather for {context}")

        try:
            response = await asyncio.wait_for(
                self.client.get(self.base_url, params=params), timeout=self.timeout
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"HTTP error from tomorrow.io: {status} - {e.response.text[:200]}")
            raise UpstreamHttpError(status, f"Upstream answered {status}", context) from e
        except httpx.RequestError as e:
            logger.error(f"Request error to tomorrow.io: {e!r}")
            raise NetworkFailure(f"Request failed: {e.__class__.__name__}", context) from e
        except asyncio.TimeoutError as e:
            logger.error(f"tomorrow.io did not answer within {self.timeout}s")
            raise NetworkFailure(f"No response within {self.timeout}s", context) from e

        try:
            timelines = TimelinesResponse.model_validate(response.json())
        except (ValidationError, ValueError) as e:
            logger.error(f"Invalid API response format: {e}")
            raise MalformedResponse("Unexpected response structure", context) from e

        intervals = timelines.intervals()
        logger.info(f"Fetched {len(intervals)} intervals from {len(timelines.data.timelines)} timelines")
        return intervals

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
