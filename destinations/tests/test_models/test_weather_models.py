"""Tests for forecast and search models."""

from datetime import date

import pytest

from destinations.models.search import ScoredResult, SearchRequest, SearchResponse
from destinations.models.weather import (
    Condition,
    DailyForecast,
    ForecastSeries,
    HourlySample,
    parse_condition,
    parse_conditions,
)
from destinations.tests.builders import make_day, make_place, make_series


class TestParseCondition:
    def test_known(self):
        assert parse_condition("partly_cloudy") == Condition.PARTLY_CLOUDY

    def test_case_and_whitespace(self):
        assert parse_condition("  Rain ") == Condition.RAIN

    def test_sunny_is_clear(self):
        assert parse_condition("sunny") == Condition.CLEAR

    def test_unknown(self):
        assert parse_condition("foggy") is None

    def test_parse_many_drops_unknown(self):
        assert parse_conditions(["sunny", "clear", "hail"]) == {Condition.CLEAR}


class TestDailyForecast:
    def test_from_extremes_midpoint(self):
        day = DailyForecast.from_extremes("2025-07-01", 10.0, 20.0, Condition.CLEAR)
        assert day.temperature == 15.0

    def test_rejects_implausible(self):
        with pytest.raises(ValueError, match="implausible"):
            DailyForecast.from_extremes("2025-07-01", 10.0, 75.0, Condition.CLEAR)

    def test_rejects_mean_outside_extremes(self):
        with pytest.raises(ValueError):
            DailyForecast("2025-07-01", 30.0, 10.0, 20.0, Condition.CLEAR)

    def test_dict_round_trip_keeps_hourly(self):
        day = make_day(
            hourly=(HourlySample(hour=14, temperature=25.0, condition=Condition.RAIN),)
        )
        data = day.to_dict()
        assert data["minTemperature"] == 18.0
        assert data["hourlyData"][0]["condition"] == "rain"
        assert DailyForecast.from_dict(data) == day

    def test_hour_out_of_range(self):
        with pytest.raises(ValueError):
            HourlySample(hour=24, temperature=10.0, condition=Condition.CLEAR)


class TestForecastSeries:
    def test_average_is_unfiltered_mean(self):
        series = make_series(
            "node/1",
            [make_day("2025-07-01", 10.0, 20.0), make_day("2025-07-02", 20.0, 30.0)],
        )
        assert series.average_temperature == 20.0
        assert len(series) == 2

    def test_empty(self):
        series = ForecastSeries.build("node/1", [])
        assert series.average_temperature == 0.0
        assert len(series) == 0

    def test_wire_keys(self):
        data = make_series("node/1", [make_day()]).to_dict()
        assert set(data) == {"locationId", "forecasts", "averageTemperature", "weatherScore"}


class TestSearchRequest:
    def test_aliases(self):
        req = SearchRequest.model_validate(
            {
                "centerLatitude": 45.764,
                "centerLongitude": 4.8357,
                "searchRadius": 20,
                "startDate": "2025-07-01",
                "endDate": "2025-07-03",
                "desiredConditions": ["clear"],
            }
        )
        assert req.search_radius == 20.0
        assert req.start_date == date(2025, 7, 1)
        assert req.time_slots == []
        assert not req.has_temperature_preference

    def test_single_bound_is_a_preference(self):
        req = SearchRequest(
            center_latitude=0, center_longitude=0, search_radius=10,
            start_date=date(2025, 7, 1), end_date=date(2025, 7, 1),
            desired_max_temperature=25.0,
        )
        assert req.has_temperature_preference


class TestSearchResponse:
    def test_failure_shape(self):
        assert SearchResponse.failure("boom").to_dict() == {"results": [], "error": "boom"}

    def test_message_only_when_set(self):
        data = SearchResponse(message="nothing here").to_dict()
        assert data["message"] == "nothing here"
        assert data["error"] is None

    def test_result_serialization(self):
        result = ScoredResult(
            location=make_place("node/1", "Lyon", 1.2),
            weather_forecast=make_series("node/1", [make_day()]),
            overall_score=80.0,
        )
        data = SearchResponse(results=[result]).to_dict()
        assert data["results"][0]["location"]["name"] == "Lyon"
        assert data["results"][0]["overallScore"] == 80.0
