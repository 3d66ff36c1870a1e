"""Weather condition classification, compatibility scoring and filtering.

Raw WMO weather codes are translated into the five-value ``Condition`` set
as soon as forecasts are ingested; nothing downstream sees numeric codes.
"""

import math
from collections.abc import Iterable

from destinations.models.weather import Condition, DailyForecast

# Inclusive WMO code ranges. Anything not listed is treated as cloudy.
_WMO_CODE_RANGES: list[tuple[int, int, Condition]] = [
    (0, 0, Condition.CLEAR),
    (1, 3, Condition.PARTLY_CLOUDY),
    (45, 48, Condition.CLOUDY),
    (51, 67, Condition.RAIN),
    (71, 77, Condition.SNOW),
    (80, 82, Condition.RAIN),
    (85, 86, Condition.SNOW),
    (95, 99, Condition.RAIN),
]

DEFAULT_CONDITION = Condition.CLOUDY

SAME_CONDITION_SCORE = 100.0
CLEAR_PARTLY_CLOUDY_SCORE = 85.0
CLEAR_CLOUDY_SCORE = 65.0
RAIN_SCORE = 35.0
UNRELATED_SCORE = 50.0

DEFAULT_MAJORITY_RATIO = 0.5


def classify_weather_code(code: int) -> Condition:
    """Map a WMO weather code to a Condition. Total: unknown codes are cloudy."""
    for low, high, condition in _WMO_CODE_RANGES:
        if low <= code <= high:
            return condition
    return DEFAULT_CONDITION


def condition_match_score(actual: Condition, desired: Condition) -> float:
    """Compatibility score in [0, 100] between an observed and a desired condition.

    Rules, first match wins:
        1. identical conditions -> 100
        2. clear / partly_cloudy in either order -> 85
        3. clear / cloudy in either order -> 65
        4. rain on either side -> 35
        5. anything else -> 50
    """
    if actual == desired:
        return SAME_CONDITION_SCORE
    pair = {actual, desired}
    if pair == {Condition.CLEAR, Condition.PARTLY_CLOUDY}:
        return CLEAR_PARTLY_CLOUDY_SCORE
    if pair == {Condition.CLEAR, Condition.CLOUDY}:
        return CLEAR_CLOUDY_SCORE
    if Condition.RAIN in pair:
        return RAIN_SCORE
    return UNRELATED_SCORE


def conditions_match(actual: Condition, desired: Condition) -> bool:
    """Loose day-level match used by the condition filter.

    Partly cloudy days are good enough for someone asking for clear skies.
    """
    if actual == desired:
        return True
    return actual == Condition.PARTLY_CLOUDY and desired == Condition.CLEAR


def matches_desired_conditions(
    forecasts: Iterable[DailyForecast],
    desired: set[Condition],
    majority_ratio: float = DEFAULT_MAJORITY_RATIO,
) -> bool:
    """Whether enough days of a series match any of the desired conditions.

    An empty desired set always matches; an empty series never does.
    The threshold is ceil(majority_ratio * days), so a few off days in a
    multi-day window are tolerated.
    """
    if not desired:
        return True
    days = list(forecasts)
    if not days:
        return False

    matching = sum(
        1 for day in days if any(conditions_match(day.condition, d) for d in desired)
    )
    required = math.ceil(majority_ratio * len(days))
    return matching >= required
