"""Reduce a day's hourly samples to the hours the user cares about."""

from collections import Counter
from dataclasses import dataclass

from destinations.models.weather import Condition, DailyForecast


@dataclass(frozen=True)
class FilteredWeather:
    avg_temp: float
    min_temp: float
    max_temp: float
    condition: Condition


def filter_day(day: DailyForecast, hours: set[int]) -> FilteredWeather:
    """Aggregate the hourly samples of ``day`` that fall in ``hours``.

    Falls back to the whole-day values when no hours are selected, the day
    has no hourly data, or none of its samples fall in the selection. The
    dominant condition is the most frequent one; ties go to the condition
    seen first.
    """
    whole_day = FilteredWeather(
        avg_temp=day.temperature,
        min_temp=day.min_temperature,
        max_temp=day.max_temperature,
        condition=day.condition,
    )
    if not hours or not day.hourly:
        return whole_day

    selected = [h for h in day.hourly if h.hour in hours]
    if not selected:
        return whole_day

    temps = [h.temperature for h in selected]
    # most_common keeps insertion order among equal counts
    dominant = Counter(h.condition for h in selected).most_common(1)[0][0]
    return FilteredWeather(
        avg_temp=sum(temps) / len(temps),
        min_temp=min(temps),
        max_temp=max(temps),
        condition=dominant,
    )
