"""YAML config loader with runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from destinations.config.schema import EngineConfig


def load_config(path: str | Path | None) -> EngineConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields the defaults.
    """
    if path is None:
        return EngineConfig()
    path = Path(path)
    if not path.exists():
        return EngineConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return EngineConfig(**raw)


def config_hash(config: EngineConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: EngineConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'scoring.stability_score'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: EngineConfig, dotted_key: str, value: Any) -> EngineConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new EngineConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if part not in target:
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.strip().lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return EngineConfig(**data)


def save_config(config: EngineConfig, path: str | Path) -> None:
    """Write the full config back to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
