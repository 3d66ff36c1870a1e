"""Search run diagnostics."""

from dataclasses import dataclass, field
from enum import StrEnum


class ExclusionReason(StrEnum):
    NO_FORECAST = "NO_FORECAST"
    CONDITION_MISMATCH = "CONDITION_MISMATCH"
    TEMPERATURE_OUT_OF_RANGE = "TEMPERATURE_OUT_OF_RANGE"


@dataclass
class SearchSummary:
    request_id: str
    radius_km: float = 0.0
    candidates_found: int = 0
    forecasts_received: int = 0
    candidates_scored: int = 0
    exclusions: dict[str, int] = field(default_factory=dict)
    results_returned: int = 0
    best_score: float = 0.0
    best_label: str = ""
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)

    @property
    def excluded_count(self) -> int:
        return sum(self.exclusions.values())
