"""Destination scorer: composite 0-100 desirability of a forecast series."""

import math

from destinations.config.schema import ScoringConfig
from destinations.models.weather import Condition, DailyForecast, ForecastSeries
from destinations.scoring.conditions import condition_match_score
from destinations.scoring.hourly import filter_day

# Compared against when the user expresses no condition preference.
IMPLICIT_DESIRED_CONDITION = Condition.CLEAR


class DestinationScorer:
    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()

    def desired_midpoint(
        self, desired_min: float | None, desired_max: float | None
    ) -> float:
        low = self.config.default_desired_min_c if desired_min is None else desired_min
        high = self.config.default_desired_max_c if desired_max is None else desired_max
        return (low + high) / 2

    def temperature_fit(self, actual_avg: float, desired_midpoint: float) -> float:
        """100 * exp(-|deviation| / scale): 100 for a perfect match, ~36.8 at one scale."""
        deviation = abs(actual_avg - desired_midpoint)
        return 100.0 * math.exp(-deviation / self.config.temperature_scale_c)

    def condition_fit(self, actual: Condition, desired: set[Condition]) -> float:
        """Best compatibility of ``actual`` with any desired condition."""
        if not desired:
            return condition_match_score(actual, IMPLICIT_DESIRED_CONDITION)
        return max(condition_match_score(actual, d) for d in desired)

    def score_day(
        self,
        day: DailyForecast,
        desired_midpoint: float,
        desired_conditions: set[Condition],
        selected_hours: set[int],
    ) -> float:
        filtered = filter_day(day, selected_hours)
        actual_avg = (filtered.min_temp + filtered.max_temp) / 2
        cfg = self.config
        return (
            cfg.temperature_weight * self.temperature_fit(actual_avg, desired_midpoint)
            + cfg.condition_weight * self.condition_fit(filtered.condition, desired_conditions)
            + cfg.stability_weight * cfg.stability_score
        )

    def score(
        self,
        series: ForecastSeries,
        desired_min: float | None,
        desired_max: float | None,
        desired_conditions: set[Condition],
        selected_hours: set[int],
    ) -> float:
        """Mean day score over every day of the series; 0 for an empty series.

        Pure: no I/O, and the series is not modified.
        """
        if not series.forecasts:
            return 0.0
        midpoint = self.desired_midpoint(desired_min, desired_max)
        total = sum(
            self.score_day(day, midpoint, desired_conditions, selected_hours)
            for day in series.forecasts
        )
        return total / len(series.forecasts)
