"""Search summarizer: aggregates pipeline diagnostics into a SearchSummary."""

from destinations.models.reporting import ExclusionReason, SearchSummary
from destinations.models.search import ScoredResult


class SearchSummarizer:
    def __init__(self, request_id: str):
        self.summary = SearchSummary(request_id=request_id)

    def record_discovery(self, radius_km: float, candidates_found: int) -> None:
        self.summary.radius_km = radius_km
        self.summary.candidates_found = candidates_found

    def record_forecasts(self, forecasts_received: int) -> None:
        self.summary.forecasts_received = forecasts_received

    def record_scored(self) -> None:
        self.summary.candidates_scored += 1

    def record_exclusion(self, reason: ExclusionReason) -> None:
        key = reason.value
        self.summary.exclusions[key] = self.summary.exclusions.get(key, 0) + 1

    def record_results(self, results: list[ScoredResult]) -> None:
        self.summary.results_returned = len(results)
        if results:
            best = results[0]
            self.summary.best_score = best.overall_score
            self.summary.best_label = (
                f"{best.location.name} ({best.location.distance:.1f}km)"
            )

    def record_duration(self, seconds: float) -> None:
        self.summary.duration_seconds = seconds

    def record_error(self, error: str) -> None:
        self.summary.errors.append(error)

    def finalize(self) -> SearchSummary:
        return self.summary
