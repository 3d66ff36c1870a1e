"""Tests for config loading and get/set."""

from pathlib import Path

import pytest

from destinations.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from destinations.config.schema import EngineConfig


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.scoring.stability_score == 60.0
        assert config.search.max_radius_km == 150.0
        assert config.search.expand_radius is True

    def test_unset_sections_use_defaults(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.discovery.max_attempts == 4
        assert config.cache.ttl_hours == 24.0

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        assert load_config(tmp_path / "missing.yaml") == EngineConfig()

    def test_none_uses_defaults(self):
        assert load_config(None).search.max_results == 50

    def test_shipped_default_config(self):
        shipped = Path(__file__).parents[3] / "ops" / "configs" / "default.yaml"
        assert load_config(shipped).scoring == EngineConfig().scoring


class TestConfigHash:
    def test_deterministic(self):
        assert config_hash(EngineConfig()) == config_hash(EngineConfig())

    def test_changes_with_content(self):
        changed = set_config_value(EngineConfig(), "search.max_results", "10")
        assert config_hash(changed) != config_hash(EngineConfig())


class TestGetSet:
    def test_get_nested(self):
        assert get_config_value(EngineConfig(), "scoring.stability_score") == 70.0

    def test_get_list_item(self):
        endpoint = get_config_value(EngineConfig(), "discovery.endpoints.0")
        assert endpoint.startswith("https://")

    def test_get_missing(self):
        with pytest.raises(KeyError):
            get_config_value(EngineConfig(), "scoring.nope")

    def test_set_coerces_types(self):
        config = EngineConfig()
        config = set_config_value(config, "search.max_results", "10")
        config = set_config_value(config, "search.expand_radius", "true")
        config = set_config_value(config, "scoring.temperature_tolerance_c", "3.5")
        assert config.search.max_results == 10
        assert config.search.expand_radius is True
        assert config.scoring.temperature_tolerance_c == 3.5

    def test_set_revalidates(self):
        with pytest.raises(ValueError):
            set_config_value(EngineConfig(), "search.max_results", "0")

    def test_set_missing_key(self):
        with pytest.raises(KeyError):
            set_config_value(EngineConfig(), "search.nope", "1")


class TestSaveConfig:
    def test_round_trip(self, tmp_path: Path):
        config = set_config_value(EngineConfig(), "scoring.temperature_tolerance_c", "3.0")
        path = tmp_path / "nested" / "saved.yaml"
        save_config(config, path)
        assert load_config(path) == config

    def test_overwrites_existing(self, config_yaml_path: Path):
        config = set_config_value(load_config(config_yaml_path), "search.max_results", "7")
        save_config(config, config_yaml_path)
        reloaded = load_config(config_yaml_path)
        assert reloaded.search.max_results == 7
        assert reloaded.scoring.stability_score == 60.0
