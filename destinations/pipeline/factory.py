"""Wire a SearchPipeline from config: cache, upstream clients, scorer."""

import logging

from destinations.config.loader import config_hash
from destinations.config.schema import EngineConfig
from destinations.ingest.city_discovery import CityDiscovery
from destinations.ingest.failover import BackoffPolicy
from destinations.ingest.open_meteo_client import OpenMeteoClient
from destinations.ingest.overpass_client import OverpassClient
from destinations.ingest.weather_batch import WeatherBatch
from destinations.pipeline.search_pipeline import SearchPipeline
from destinations.scoring.scorer import DestinationScorer
from destinations.storage.cache import NullCache, SqliteCache
from destinations.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)


def build_cache(config: EngineConfig) -> SqliteCache | NullCache:
    if not config.cache.enabled:
        return NullCache()
    conn = connect(config.cache.db_path)
    applied = run_migrations(conn)
    if applied:
        logger.info("Applied cache migrations: %s", ", ".join(applied))
    return SqliteCache(conn, ttl_seconds=config.cache.ttl_hours * 3600)


def build_pipeline(config: EngineConfig) -> SearchPipeline:
    logger.info("Building search pipeline (config %s)", config_hash(config))
    cache = build_cache(config)

    disc = config.discovery
    overpass = OverpassClient(
        endpoints=list(disc.endpoints),
        policy=BackoffPolicy(
            max_attempts=disc.max_attempts,
            base_delay_s=disc.retry_base_delay_s,
            max_delay_s=disc.retry_max_delay_s,
        ),
        timeout=disc.timeout_s,
        user_agent=disc.user_agent,
    )

    wx = config.weather
    open_meteo = OpenMeteoClient(
        base_url=wx.base_url,
        user_agent=disc.user_agent,
        timeout=wx.timeout_s,
        max_retries=wx.max_retries,
        retry_base_delay=wx.retry_base_delay_s,
    )

    return SearchPipeline(
        config,
        discovery=CityDiscovery(overpass, cache),
        weather=WeatherBatch(open_meteo, cache),
        scorer=DestinationScorer(config.scoring),
        cache=cache,
    )
