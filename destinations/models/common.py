"""Common types and helpers shared across models."""

import time
from typing import TypeAlias

LocationId: TypeAlias = str

# Plausible surface air temperature range; anything outside is API noise.
MIN_PLAUSIBLE_TEMP_C = -60.0
MAX_PLAUSIBLE_TEMP_C = 60.0


def epoch_seconds() -> float:
    return time.time()


def is_plausible_temperature(value: float) -> bool:
    return MIN_PLAUSIBLE_TEMP_C <= value <= MAX_PLAUSIBLE_TEMP_C
