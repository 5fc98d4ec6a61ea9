import httpx
import pytest
from fastapi.testclient import TestClient

from agro_weather.api.endpoints import get_weather_service
from agro_weather.main import app

from conftest import StubUpstream, full_payload, make_service


@pytest.fixture
def use_upstream():
    """Route the weather endpoint to a stubbed upstream."""
    def install(upstream, **kwargs):
        async def override():
            async with make_service(upstream, **kwargs) as service:
                yield service

        app.dependency_overrides[get_weather_service] = override
        return upstream

    yield install
    app.dependency_overrides.clear()


def test_weather_endpoint_returns_camel_case_result(use_upstream, expected_dates):
    use_upstream(StubUpstream(full_payload()))

    with TestClient(app) as client:
        response = client.get("/weather/", params={"lat": 28.6139, "lon": 77.209})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"current", "forecast", "timezone", "fallbackReasons"}
    assert body["current"]["windSpeedKmh"] == 12.2
    assert body["current"]["temperatureC"] == 25
    assert [day["date"] for day in body["forecast"]] == expected_dates
    assert body["forecast"][0]["tempMaxC"] == 30
    assert body["forecast"][0]["precipitationProbabilityPct"] == 13
    assert body["fallbackReasons"] == []


def test_upstream_failure_still_returns_200(use_upstream, expected_dates):
    use_upstream(StubUpstream(httpx.Response(500, text="boom")))

    with TestClient(app) as client:
        response = client.get("/weather/", params={"lat": 28.6139, "lon": 77.209})

    assert response.status_code == 200
    body = response.json()
    assert body["current"]["description"] == "Unavailable"
    assert [day["date"] for day in body["forecast"]] == expected_dates
    assert body["fallbackReasons"] == ["upstream_http_error"]


@pytest.mark.parametrize("params", [
    {"lat": 91, "lon": 0},
    {"lat": 0, "lon": -181},
    {"lat": 10},
    {"lat": 10, "lon": 10, "timezone_option": "mars"},
])
def test_invalid_parameters_are_rejected(use_upstream, params):
    upstream = use_upstream(StubUpstream(full_payload()))

    with TestClient(app) as client:
        response = client.get("/weather/", params=params)

    assert response.status_code == 422
    assert upstream.call_count == 0


def test_health_and_info():
    with TestClient(app) as client:
        health = client.get("/weather/health")
        info = client.get("/weather/info")
        index = client.get("/api")

    assert health.json() == {"status": "healthy", "service": "agro-weather"}
    assert info.status_code == 200
    assert info.json()["forecast_days"] >= 1
    assert index.json()["weather"] == "/weather"
