"""Forecast data models: conditions, daily forecasts and forecast series."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum

from destinations.models.common import LocationId, is_plausible_temperature

logger = logging.getLogger(__name__)

_TEMP_TOLERANCE = 1e-6


class Condition(StrEnum):
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    CLOUDY = "cloudy"
    RAIN = "rain"
    SNOW = "snow"


# Older clients still send "sunny" for clear skies.
LEGACY_CONDITION_SYNONYMS: dict[str, Condition] = {"sunny": Condition.CLEAR}


def parse_condition(value: str) -> Condition | None:
    """Parse a user-supplied condition name. Returns None if unknown."""
    key = (value or "").strip().lower()
    if key in LEGACY_CONDITION_SYNONYMS:
        return LEGACY_CONDITION_SYNONYMS[key]
    try:
        return Condition(key)
    except ValueError:
        return None


def parse_conditions(values: list[str]) -> set[Condition]:
    """Parse a list of condition names, dropping unknown ones."""
    parsed: set[Condition] = set()
    for v in values:
        cond = parse_condition(v)
        if cond is None:
            logger.warning("Ignoring unknown weather condition %r", v)
            continue
        parsed.add(cond)
    return parsed


@dataclass(frozen=True)
class HourlySample:
    hour: int  # 0-23, local time of the location
    temperature: float
    condition: Condition

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")

    def to_dict(self) -> dict:
        return {
            "hour": self.hour,
            "temperature": self.temperature,
            "condition": self.condition.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HourlySample":
        return cls(
            hour=int(data["hour"]),
            temperature=float(data["temperature"]),
            condition=Condition(data["condition"]),
        )


@dataclass(frozen=True)
class DailyForecast:
    date: str  # YYYY-MM-DD
    temperature: float
    min_temperature: float
    max_temperature: float
    condition: Condition
    hourly: tuple[HourlySample, ...] = ()

    def __post_init__(self) -> None:
        for value in (self.min_temperature, self.max_temperature):
            if not is_plausible_temperature(value):
                raise ValueError(
                    f"implausible temperature {value} on {self.date}"
                )
        if not (
            self.min_temperature - _TEMP_TOLERANCE
            <= self.temperature
            <= self.max_temperature + _TEMP_TOLERANCE
        ):
            raise ValueError(
                f"expected min <= mean <= max on {self.date}, got "
                f"{self.min_temperature} / {self.temperature} / {self.max_temperature}"
            )

    @classmethod
    def from_extremes(
        cls,
        date: str,
        min_temperature: float,
        max_temperature: float,
        condition: Condition,
        hourly: tuple[HourlySample, ...] | list[HourlySample] = (),
    ) -> "DailyForecast":
        """Build a day whose mean is the midpoint of its extremes."""
        return cls(
            date=date,
            temperature=(min_temperature + max_temperature) / 2,
            min_temperature=min_temperature,
            max_temperature=max_temperature,
            condition=condition,
            hourly=tuple(hourly),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "temperature": self.temperature,
            "minTemperature": self.min_temperature,
            "maxTemperature": self.max_temperature,
            "condition": self.condition.value,
            "hourlyData": [h.to_dict() for h in self.hourly],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DailyForecast":
        return cls(
            date=data["date"],
            temperature=float(data["temperature"]),
            min_temperature=float(data["minTemperature"]),
            max_temperature=float(data["maxTemperature"]),
            condition=Condition(data["condition"]),
            hourly=tuple(HourlySample.from_dict(h) for h in data.get("hourlyData", [])),
        )


@dataclass
class ForecastSeries:
    location_id: LocationId
    forecasts: list[DailyForecast] = field(default_factory=list)
    average_temperature: float = 0.0
    weather_score: float = 0.0

    @classmethod
    def build(
        cls, location_id: LocationId, forecasts: list[DailyForecast]
    ) -> "ForecastSeries":
        """Create a series with its unfiltered mean temperature."""
        avg = (
            sum(f.temperature for f in forecasts) / len(forecasts)
            if forecasts
            else 0.0
        )
        return cls(
            location_id=location_id,
            forecasts=list(forecasts),
            average_temperature=avg,
        )

    def __len__(self) -> int:
        return len(self.forecasts)

    def to_dict(self) -> dict:
        return {
            "locationId": self.location_id,
            "forecasts": [f.to_dict() for f in self.forecasts],
            "averageTemperature": self.average_temperature,
            "weatherScore": self.weather_score,
        }
