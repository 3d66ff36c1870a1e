"""Parse Open-Meteo payloads into validated daily forecasts."""

import logging
from datetime import datetime
from typing import Any

from destinations.models.common import is_plausible_temperature
from destinations.models.weather import DailyForecast, HourlySample
from destinations.scoring.conditions import classify_weather_code

logger = logging.getLogger(__name__)


def parse_forecast(data: dict) -> list[DailyForecast]:
    """Transform one location's Open-Meteo payload into DailyForecasts.

    Days without both extremes, with implausible temperatures or with
    min > max are dropped. Hourly samples are attached to the day of their
    local timestamp.
    """
    hourly_by_date = _parse_hourly(data.get("hourly") or {})

    daily = data.get("daily") or {}
    times = daily.get("time") or []
    tmax = daily.get("temperature_2m_max") or []
    tmin = daily.get("temperature_2m_min") or []
    codes = daily.get("weathercode") or []

    days: list[DailyForecast] = []
    for i, date_str in enumerate(times):
        high = _safe_float(tmax, i)
        low = _safe_float(tmin, i)
        if high is None or low is None:
            continue
        if not (is_plausible_temperature(high) and is_plausible_temperature(low)):
            logger.debug("Dropping implausible day %s (%s..%s)", date_str, low, high)
            continue
        if low > high:
            logger.warning("Dropping day %s with min %.1f > max %.1f", date_str, low, high)
            continue

        days.append(
            DailyForecast.from_extremes(
                date=str(date_str),
                min_temperature=low,
                max_temperature=high,
                condition=classify_weather_code(_safe_int(codes, i) or 0),
                hourly=hourly_by_date.get(str(date_str), []),
            )
        )
    return days


def _parse_hourly(hourly: dict) -> dict[str, list[HourlySample]]:
    times = hourly.get("time") or []
    temps = hourly.get("temperature_2m") or []
    codes = hourly.get("weathercode") or []

    by_date: dict[str, list[HourlySample]] = {}
    for i, stamp in enumerate(times):
        temp = _safe_float(temps, i)
        if temp is None or not is_plausible_temperature(temp):
            continue
        try:
            dt = datetime.fromisoformat(stamp)
        except (TypeError, ValueError):
            continue
        by_date.setdefault(dt.date().isoformat(), []).append(
            HourlySample(
                hour=dt.hour,
                temperature=temp,
                condition=classify_weather_code(_safe_int(codes, i) or 0),
            )
        )
    return by_date


def _safe_float(arr: list[Any], idx: int) -> float | None:
    try:
        v = arr[idx]
        return None if v is None else float(v)
    except (IndexError, TypeError, ValueError):
        return None


def _safe_int(arr: list[Any], idx: int) -> int | None:
    try:
        v = arr[idx]
        return None if v is None else int(v)
    except (IndexError, TypeError, ValueError):
        return None
