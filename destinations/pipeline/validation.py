"""Request validation checks, run before any discovery or scoring."""

import math

from destinations.config.schema import SearchConfig
from destinations.models.search import SearchRequest


def validate_request(request: SearchRequest, config: SearchConfig) -> list[str]:
    """Return user-facing messages for every violated constraint, in check order.

    Comparisons are written so that NaN fails them.
    """
    errors: list[str] = []

    if not request.search_radius > 0:
        errors.append("Search radius must be positive")
    elif not request.search_radius <= config.max_radius_km:
        errors.append(
            f"Search radius must not exceed {config.max_radius_km:g} km"
        )

    if not -90.0 <= request.center_latitude <= 90.0:
        errors.append("Center latitude must be between -90 and 90")
    if not -180.0 <= request.center_longitude <= 180.0:
        errors.append("Center longitude must be between -180 and 180")

    if request.start_date > request.end_date:
        errors.append("Start date must be on or before end date")

    low = request.desired_min_temperature
    high = request.desired_max_temperature
    for label, value in (("Minimum", low), ("Maximum", high)):
        if value is not None and not math.isfinite(value):
            errors.append(f"{label} temperature must be a finite number")
    if low is not None and high is not None and low > high:
        errors.append("Minimum temperature must not exceed maximum temperature")

    return errors
