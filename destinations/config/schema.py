"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, model_validator

from destinations.config.defaults import (
    DEFAULT_OPEN_METEO_URL,
    DEFAULT_OVERPASS_ENDPOINTS,
    DEFAULT_USER_AGENT,
)


class ScoringConfig(BaseModel):
    model_config = {"extra": "forbid"}

    # Generic "warm and pleasant" target when the user gives no range.
    default_desired_min_c: float = 20.0
    default_desired_max_c: float = 30.0
    # Characteristic scale of the exponential temperature-fit decay.
    temperature_scale_c: float = Field(default=10.0, gt=0.0)
    # Placeholder for a future day-to-day variance term.
    stability_score: float = Field(default=70.0, ge=0.0, le=100.0)
    temperature_weight: float = Field(default=0.35, ge=0.0, le=1.0)
    condition_weight: float = Field(default=0.50, ge=0.0, le=1.0)
    stability_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    # Share of days that must match the desired conditions (rounded up).
    condition_majority_ratio: float = Field(default=0.5, gt=0.0, le=1.0)
    # Slack around the desired range before a candidate is excluded.
    temperature_tolerance_c: float = Field(default=5.0, ge=0.0)

    @model_validator(mode="after")
    def _weights_sum_to_one(self) -> "ScoringConfig":
        total = self.temperature_weight + self.condition_weight + self.stability_weight
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"scoring weights must sum to 1.0, got {total}")
        if self.default_desired_min_c > self.default_desired_max_c:
            raise ValueError("default_desired_min_c must not exceed default_desired_max_c")
        return self


class SearchConfig(BaseModel):
    model_config = {"extra": "forbid"}

    max_radius_km: float = Field(default=200.0, gt=0.0)
    max_candidates: int = Field(default=60, ge=1)
    max_results: int = Field(default=50, ge=1)
    score_tie_epsilon: float = Field(default=0.01, ge=0.0)
    expand_radius: bool = False
    min_candidates: int = Field(default=20, ge=1)
    radius_growth_factor: float = Field(default=1.5, gt=1.0)
    max_radius_ratio: float = Field(default=3.0, ge=1.0)


class DiscoveryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    endpoints: list[str] = Field(
        default_factory=lambda: list(DEFAULT_OVERPASS_ENDPOINTS), min_length=1
    )
    timeout_s: float = Field(default=35.0, gt=0.0)
    max_attempts: int = Field(default=4, ge=1)
    retry_base_delay_s: float = Field(default=1.0, ge=0.0)
    retry_max_delay_s: float = Field(default=8.0, ge=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = DEFAULT_OPEN_METEO_URL
    timeout_s: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay_s: float = Field(default=1.0, ge=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    db_path: str = "data/cache.db"
    ttl_hours: float = Field(default=24.0, gt=0.0)


class EngineConfig(BaseModel):
    model_config = {"extra": "forbid"}

    scoring: ScoringConfig = ScoringConfig()
    search: SearchConfig = SearchConfig()
    discovery: DiscoveryConfig = DiscoveryConfig()
    weather: WeatherConfig = WeatherConfig()
    cache: CacheConfig = CacheConfig()
