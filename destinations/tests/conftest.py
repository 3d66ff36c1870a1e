"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from destinations.config.schema import EngineConfig
from destinations.storage.cache import SqliteCache
from destinations.storage.database import connect, run_migrations

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """A migrated SQLite database in a temp directory."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def cache(tmp_db: sqlite3.Connection) -> SqliteCache:
    return SqliteCache(tmp_db, ttl_seconds=24 * 3600)


@pytest.fixture
def default_config(tmp_path: Path) -> EngineConfig:
    """Default EngineConfig with the cache pointed at a temp file."""
    return EngineConfig(cache={"db_path": str(tmp_path / "cache.db")})


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "scoring": {"stability_score": 60.0},
        "search": {"max_radius_km": 150.0, "expand_radius": True},
        "cache": {"db_path": str(tmp_path / "cache.db")},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def overpass_lyon() -> dict:
    with open(FIXTURE_DIR / "overpass_lyon.json") as f:
        return json.load(f)


@pytest.fixture
def open_meteo_lyon() -> dict:
    with open(FIXTURE_DIR / "open_meteo_lyon.json") as f:
        return json.load(f)
