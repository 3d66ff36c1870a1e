"""Tests for hour-of-day filtering of daily forecasts."""

from destinations.models.weather import Condition, HourlySample
from destinations.scoring.hourly import filter_day
from destinations.tests.builders import make_day


def _hourly_day():
    samples = (
        HourlySample(hour=3, temperature=12.0, condition=Condition.CLEAR),
        HourlySample(hour=9, temperature=18.0, condition=Condition.CLOUDY),
        HourlySample(hour=14, temperature=26.0, condition=Condition.RAIN),
        HourlySample(hour=15, temperature=28.0, condition=Condition.RAIN),
        HourlySample(hour=20, temperature=22.0, condition=Condition.CLEAR),
    )
    return make_day(min_temp=12.0, max_temp=28.0, condition=Condition.CLEAR, hourly=samples)


class TestFilterDay:
    def test_no_hours_uses_whole_day(self):
        filtered = filter_day(_hourly_day(), set())
        assert filtered.min_temp == 12.0
        assert filtered.max_temp == 28.0
        assert filtered.avg_temp == 20.0
        assert filtered.condition == Condition.CLEAR

    def test_no_hourly_data_uses_whole_day(self):
        day = make_day(min_temp=10.0, max_temp=20.0, condition=Condition.SNOW)
        filtered = filter_day(day, {12, 13})
        assert filtered.avg_temp == 15.0
        assert filtered.condition == Condition.SNOW

    def test_afternoon_selection(self):
        filtered = filter_day(_hourly_day(), {12, 13, 14, 15, 16, 17})
        assert filtered.min_temp == 26.0
        assert filtered.max_temp == 28.0
        assert filtered.avg_temp == 27.0
        assert filtered.condition == Condition.RAIN

    def test_no_matching_samples_uses_whole_day(self):
        filtered = filter_day(_hourly_day(), {11})
        assert filtered.min_temp == 12.0
        assert filtered.condition == Condition.CLEAR

    def test_dominant_condition_tie_goes_to_first_seen(self):
        filtered = filter_day(_hourly_day(), {9, 20})
        assert filtered.condition == Condition.CLOUDY
