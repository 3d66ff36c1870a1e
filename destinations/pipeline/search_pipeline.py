"""Search pipeline: validate, discover, fetch, filter-and-score, rank."""

import logging
import time
import uuid

from pydantic import ValidationError

from destinations.config.schema import EngineConfig
from destinations.errors import RequestValidationError, SearchError
from destinations.ingest.city_discovery import CityDiscovery
from destinations.ingest.weather_batch import WeatherBatch
from destinations.models.location import CandidateLocation
from destinations.models.reporting import ExclusionReason, SearchSummary
from destinations.models.search import ScoredResult, SearchRequest, SearchResponse
from destinations.models.weather import Condition, ForecastSeries, parse_conditions
from destinations.pipeline.ranking import rank_results
from destinations.pipeline.validation import validate_request
from destinations.reporting.formatters import format_summary_text
from destinations.reporting.run_summarizer import SearchSummarizer
from destinations.scoring.conditions import matches_desired_conditions
from destinations.scoring.scorer import DestinationScorer
from destinations.scoring.time_slots import resolve_hours
from destinations.storage.cache import Cache

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Search failed due to an internal error. Please try again later."


class SearchPipeline:
    def __init__(
        self,
        config: EngineConfig,
        discovery: CityDiscovery,
        weather: WeatherBatch,
        scorer: DestinationScorer | None = None,
        cache: Cache | None = None,
    ):
        self.config = config
        self.discovery = discovery
        self.weather = weather
        self.scorer = scorer or DestinationScorer(config.scoring)
        self.cache = cache

    def run(self, request: SearchRequest) -> SearchResponse:
        response, _ = self.run_with_summary(request)
        return response

    def run_with_summary(
        self, request: SearchRequest
    ) -> tuple[SearchResponse, SearchSummary]:
        """Execute one search. Never raises: failures become error responses."""
        start_time = time.monotonic()
        summarizer = SearchSummarizer(str(uuid.uuid4()))

        try:
            response = self._execute(request, summarizer)
        except RequestValidationError as e:
            logger.info("Rejected search request: %s", e)
            summarizer.record_error(str(e))
            response = SearchResponse.failure(e.user_message)
        except SearchError as e:
            logger.error("Search failed: %s", e)
            summarizer.record_error(str(e))
            response = SearchResponse.failure(e.user_message)
        except Exception as e:
            logger.exception("Search pipeline failed")
            summarizer.record_error(str(e))
            response = SearchResponse.failure(GENERIC_ERROR)

        summarizer.record_duration(time.monotonic() - start_time)
        summary = summarizer.finalize()
        logger.info("\n%s", format_summary_text(summary))
        return response, summary

    def _execute(
        self, request: SearchRequest, summarizer: SearchSummarizer
    ) -> SearchResponse:
        # 1. VALIDATE
        errors = validate_request(request, self.config.search)
        if errors:
            raise RequestValidationError(errors[0])

        # 2. DISCOVER
        candidates, radius = self._discover(request)
        summarizer.record_discovery(radius, len(candidates))
        if not candidates:
            return SearchResponse(
                results=[],
                message=f"No populated places found within {radius:g} km",
            )
        candidates = candidates[: self.config.search.max_candidates]

        # 3. FETCH
        series_by_id = self.weather.fetch(
            candidates, request.start_date.isoformat(), request.end_date.isoformat()
        )
        summarizer.record_forecasts(len(series_by_id))

        # 4. FILTER AND SCORE
        results = self._filter_and_score(request, candidates, series_by_id, summarizer)

        # 5. SORT, 6. TRUNCATE
        ranked = rank_results(
            results,
            tie_epsilon=self.config.search.score_tie_epsilon,
            max_results=self.config.search.max_results,
        )
        summarizer.record_results(ranked)
        return SearchResponse(results=ranked)

    def _discover(self, request: SearchRequest) -> tuple[list[CandidateLocation], float]:
        search = self.config.search
        if search.expand_radius:
            return self.discovery.find_with_expansion(
                request.center_latitude,
                request.center_longitude,
                request.search_radius,
                min_candidates=search.min_candidates,
                growth_factor=search.radius_growth_factor,
                max_radius_km=min(
                    request.search_radius * search.max_radius_ratio,
                    search.max_radius_km,
                ),
            )
        places = self.discovery.find_nearby(
            request.center_latitude, request.center_longitude, request.search_radius
        )
        return places, request.search_radius

    def _filter_and_score(
        self,
        request: SearchRequest,
        candidates: list[CandidateLocation],
        series_by_id: dict[str, ForecastSeries],
        summarizer: SearchSummarizer,
    ) -> list[ScoredResult]:
        desired = parse_conditions(request.desired_conditions)
        hours = resolve_hours(request.time_slots)

        results: list[ScoredResult] = []
        for candidate in candidates:
            series = series_by_id.get(candidate.id)
            if series is None or not series.forecasts:
                summarizer.record_exclusion(ExclusionReason.NO_FORECAST)
                continue

            # Scored before filtering so excluded candidates still show in diagnostics.
            series.weather_score = self.scorer.score(
                series,
                request.desired_min_temperature,
                request.desired_max_temperature,
                desired,
                hours,
            )
            summarizer.record_scored()

            reason = self._exclusion_reason(request, series, desired)
            if reason is not None:
                logger.debug(
                    "Excluded %s (%s) score=%.1f", candidate.name, reason, series.weather_score
                )
                summarizer.record_exclusion(reason)
                continue

            results.append(
                ScoredResult(
                    location=candidate,
                    weather_forecast=series,
                    overall_score=series.weather_score,
                )
            )
        return results

    def _exclusion_reason(
        self,
        request: SearchRequest,
        series: ForecastSeries,
        desired: set[Condition],
    ) -> ExclusionReason | None:
        scoring = self.config.scoring
        if desired and not matches_desired_conditions(
            series.forecasts, desired, scoring.condition_majority_ratio
        ):
            return ExclusionReason.CONDITION_MISMATCH

        if request.has_temperature_preference:
            tolerance = scoring.temperature_tolerance_c
            avg = series.average_temperature
            low = request.desired_min_temperature
            high = request.desired_max_temperature
            if low is not None and avg < low - tolerance:
                return ExclusionReason.TEMPERATURE_OUT_OF_RANGE
            if high is not None and avg > high + tolerance:
                return ExclusionReason.TEMPERATURE_OUT_OF_RANGE
        return None

    def close(self) -> None:
        close = getattr(self.cache, "close", None)
        if close is not None:
            close()


def parse_request(data: dict) -> SearchRequest:
    """Parse a raw wire payload. Raises RequestValidationError on bad input."""
    try:
        return SearchRequest.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "request"
        message = f"Invalid search request: {field}: {first.get('msg', 'invalid value')}"
        raise RequestValidationError(message) from e


def search_destinations(data: dict, pipeline: SearchPipeline) -> dict:
    """Wire-level entry point: raw payload in, ``{results, error}`` dict out."""
    try:
        request = parse_request(data)
    except RequestValidationError as e:
        logger.info("Rejected search payload: %s", e)
        return SearchResponse.failure(e.user_message).to_dict()
    return pipeline.run(request).to_dict()
