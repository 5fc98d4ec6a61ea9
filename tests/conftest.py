from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
import pytest

from agro_weather.weather.client import TomorrowIoClient
from agro_weather.weather.service import WeatherService

BASE_URL = "https://api.tomorrow.test/v4/timelines"
NOW = datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
TODAY = date(2026, 10, 18)

CURRENT_VALUES = {
    "temperature": 24.6,
    "humidity": 61.2,
    "windSpeed": 3.4,
    "weatherCode": 1100,
    "precipitationProbability": 5,
    "uvIndex": 3,
    "pressureSeaLevel": 1012.7,
}


def iso(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def current_interval(start: datetime = NOW, **overrides) -> Dict[str, Any]:
    values = dict(CURRENT_VALUES, **overrides)
    return {"startTime": iso(start), "values": values}


def daily_interval(day: date, tmax: float = 30.4, tmin: float = 18.5, **overrides) -> Dict[str, Any]:
    # Combined queries fill every requested field, so daily intervals carry temperature too
    values = {
        "temperature": 22.0,
        "temperatureMax": tmax,
        "temperatureMin": tmin,
        "weatherCode": 1000,
        "weatherCodeDay": 10000,
        "precipitationProbabilityAvg": 12.5,
    }
    values.update(overrides)
    start = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return {"startTime": iso(start), "values": values}


def timelines(*groups: List[Dict[str, Any]], timesteps=("current", "1d")) -> Dict[str, Any]:
    """Wrap interval lists into a timelines response, one timeline per group."""
    return {
        "data": {
            "timelines": [
                {"timestep": timestep, "intervals": intervals}
                for timestep, intervals in zip(timesteps, groups)
            ]
        }
    }


def full_payload(days: int = 5) -> Dict[str, Any]:
    return timelines(
        [current_interval()],
        [daily_interval(TODAY + timedelta(days=offset)) for offset in range(days)],
    )


class StubUpstream:
    """httpx.MockTransport handler standing in for tomorrow.io.

    ``routes`` maps the requested ``timesteps`` parameter to an answer;
    the ``"*"`` route answers anything else. An answer is a JSON body, an
    ``httpx.Response`` or an exception to raise.
    """

    def __init__(self, response: Any = None, routes: Optional[Dict[str, Any]] = None):
        self.routes = dict(routes or {})
        self.routes.setdefault("*", response)
        self.requests: List[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        timesteps = request.url.params.get("timesteps")
        answer = self.routes.get(timesteps, self.routes.get("*"))
        if isinstance(answer, Exception):
            raise answer
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)


def make_client(
    upstream: StubUpstream, api_key: Optional[str] = "test-key", timeout: float = 5.0
) -> TomorrowIoClient:
    return TomorrowIoClient(
        api_key=api_key,
        base_url=BASE_URL,
        timeout=timeout,
        transport=httpx.MockTransport(upstream)
    )


def make_service(upstream: StubUpstream, api_key: Optional[str] = "test-key", **kwargs) -> WeatherService:
    kwargs.setdefault("days", 5)
    kwargs.setdefault("timezone_str", "UTC")
    kwargs.setdefault("split_requests", False)
    kwargs.setdefault("clock", lambda: NOW)
    return WeatherService(make_client(upstream, api_key=api_key), **kwargs)


@pytest.fixture
def expected_dates() -> List[str]:
    return [(TODAY + timedelta(days=offset)).isoformat() for offset in range(5)]
