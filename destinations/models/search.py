"""Request and response models for the destination search surface."""

from dataclasses import dataclass, field
from datetime import date

from pydantic import BaseModel, Field

from destinations.models.location import CandidateLocation
from destinations.models.weather import ForecastSeries


class SearchRequest(BaseModel):
    """Typed search payload. Field aliases match the wire format."""

    model_config = {"extra": "ignore", "populate_by_name": True, "allow_inf_nan": False}

    center_latitude: float = Field(alias="centerLatitude")
    center_longitude: float = Field(alias="centerLongitude")
    search_radius: float = Field(alias="searchRadius")
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    desired_min_temperature: float | None = Field(
        default=None, alias="desiredMinTemperature"
    )
    desired_max_temperature: float | None = Field(
        default=None, alias="desiredMaxTemperature"
    )
    desired_conditions: list[str] = Field(
        default_factory=list, alias="desiredConditions"
    )
    time_slots: list[str] = Field(default_factory=list, alias="timeSlots")

    @property
    def has_temperature_preference(self) -> bool:
        return (
            self.desired_min_temperature is not None
            or self.desired_max_temperature is not None
        )


@dataclass
class ScoredResult:
    location: CandidateLocation
    weather_forecast: ForecastSeries
    overall_score: float

    def to_dict(self) -> dict:
        return {
            "location": self.location.to_dict(),
            "weatherForecast": self.weather_forecast.to_dict(),
            "overallScore": self.overall_score,
        }


@dataclass
class SearchResponse:
    results: list[ScoredResult] = field(default_factory=list)
    error: str | None = None
    message: str | None = None

    @classmethod
    def failure(cls, error: str) -> "SearchResponse":
        return cls(results=[], error=error)

    def to_dict(self) -> dict:
        data: dict = {
            "results": [r.to_dict() for r in self.results],
            "error": self.error,
        }
        if self.message is not None:
            data["message"] = self.message
        return data
