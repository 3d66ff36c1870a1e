"""Weather batch: forecasts for a whole candidate list in one upstream call."""

import logging

import httpx

from destinations.errors import CollaboratorUnavailable
from destinations.ingest.forecast_parser import parse_forecast
from destinations.ingest.open_meteo_client import OpenMeteoClient
from destinations.models.location import CandidateLocation
from destinations.models.weather import DailyForecast, ForecastSeries
from destinations.storage.cache import Cache, NullCache

logger = logging.getLogger(__name__)

SERVICE_NAME = "Weather forecast"


def weather_cache_key(lat: float, lon: float, start_date: str, end_date: str) -> str:
    return f"weather_{lat:.2f}_{lon:.2f}_{start_date}_{end_date}"


class WeatherBatch:
    def __init__(self, client: OpenMeteoClient, cache: Cache | None = None):
        self.client = client
        self.cache = cache or NullCache()

    def fetch(
        self, candidates: list[CandidateLocation], start_date: str, end_date: str
    ) -> dict[str, ForecastSeries]:
        """Map candidate id -> ForecastSeries.

        Cached candidates are served from the cache; all misses go out in a
        single request. Candidates without usable data are left out.
        """
        days_by_id: dict[str, list[DailyForecast]] = {}
        misses: list[CandidateLocation] = []

        for c in candidates:
            cached = self.cache.get(
                weather_cache_key(c.latitude, c.longitude, start_date, end_date)
            )
            if cached is None:
                misses.append(c)
            else:
                days_by_id[c.id] = [DailyForecast.from_dict(d) for d in cached]

        if misses:
            logger.info(
                "Fetching forecasts for %d locations (%d cached)",
                len(misses), len(candidates) - len(misses),
            )
            try:
                payloads = self.client.get_forecasts(
                    [(c.latitude, c.longitude) for c in misses], start_date, end_date
                )
            except (httpx.HTTPError, ValueError) as e:
                logger.error("Weather batch failed: %s", e)
                raise CollaboratorUnavailable(SERVICE_NAME, [e]) from e

            if len(payloads) != len(misses):
                logger.warning(
                    "Open-Meteo returned %d payloads for %d locations",
                    len(payloads), len(misses),
                )

            for c, payload in zip(misses, payloads):
                days = parse_forecast(payload)
                days_by_id[c.id] = days
                self.cache.set(
                    weather_cache_key(c.latitude, c.longitude, start_date, end_date),
                    [d.to_dict() for d in days],
                )

        return {
            loc_id: ForecastSeries.build(loc_id, days)
            for loc_id, days in days_by_id.items()
            if days
        }
