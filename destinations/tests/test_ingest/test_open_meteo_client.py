"""Tests for the Open-Meteo client with mocked httpx."""

from unittest.mock import patch

import httpx
import pytest
import respx

from destinations.ingest.open_meteo_client import OpenMeteoClient

BASE_URL = "https://test-meteo.example.com/v1/forecast"


@pytest.fixture
def meteo() -> OpenMeteoClient:
    return OpenMeteoClient(base_url=BASE_URL, max_retries=1, retry_base_delay=0.01)


class TestGetForecasts:
    @respx.mock
    def test_single_location_wrapped(self, meteo: OpenMeteoClient, open_meteo_lyon: dict):
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json=open_meteo_lyon))
        payloads = meteo.get_forecasts([(45.764, 4.8357)], "2025-07-01", "2025-07-03")
        assert len(payloads) == 1
        assert payloads[0]["daily"]["time"][0] == "2025-07-01"

    @respx.mock
    def test_batched_params(self, meteo: OpenMeteoClient, open_meteo_lyon: dict):
        route = respx.get(BASE_URL).mock(
            return_value=httpx.Response(200, json=[open_meteo_lyon, open_meteo_lyon])
        )
        payloads = meteo.get_forecasts(
            [(45.764, 4.8357), (45.7719, 4.8902)], "2025-07-01", "2025-07-03"
        )
        assert len(payloads) == 2

        params = route.calls[0].request.url.params
        assert params["latitude"] == "45.7640,45.7719"
        assert params["longitude"] == "4.8357,4.8902"
        assert params["timezone"] == "auto"
        assert params["start_date"] == "2025-07-01"
        assert "weathercode" in params["daily"]
        assert "temperature_2m" in params["hourly"]

    def test_no_coords_no_request(self, meteo: OpenMeteoClient):
        assert meteo.get_forecasts([], "2025-07-01", "2025-07-01") == []

    @respx.mock
    def test_retry_on_429(self, meteo: OpenMeteoClient, open_meteo_lyon: dict):
        route = respx.get(BASE_URL).mock(
            side_effect=[
                httpx.Response(429),
                httpx.Response(200, json=open_meteo_lyon),
            ]
        )
        with patch("destinations.ingest.open_meteo_client.time.sleep"):
            payloads = meteo.get_forecasts([(45.764, 4.8357)], "2025-07-01", "2025-07-03")
        assert len(payloads) == 1
        assert route.call_count == 2

    @respx.mock
    def test_exhausted_retries(self, meteo: OpenMeteoClient):
        respx.get(BASE_URL).mock(return_value=httpx.Response(503))
        with patch("destinations.ingest.open_meteo_client.time.sleep"), pytest.raises(
            httpx.HTTPStatusError
        ):
            meteo.get_forecasts([(45.764, 4.8357)], "2025-07-01", "2025-07-03")

    @respx.mock
    def test_transport_error_retried(self, meteo: OpenMeteoClient, open_meteo_lyon: dict):
        route = respx.get(BASE_URL).mock(
            side_effect=[
                httpx.ConnectError("refused"),
                httpx.Response(200, json=open_meteo_lyon),
            ]
        )
        with patch("destinations.ingest.open_meteo_client.time.sleep"):
            meteo.get_forecasts([(45.764, 4.8357)], "2025-07-01", "2025-07-03")
        assert route.call_count == 2

    @respx.mock
    def test_unexpected_payload(self, meteo: OpenMeteoClient):
        respx.get(BASE_URL).mock(return_value=httpx.Response(200, json="nope"))
        with pytest.raises(ValueError):
            meteo.get_forecasts([(45.764, 4.8357)], "2025-07-01", "2025-07-03")
