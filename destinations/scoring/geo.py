"""Great-circle distance and bounding-box helpers."""

import math

EARTH_RADIUS_KM = 6371.0
KM_PER_DEGREE_LAT = 111.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance (Haversine) in kilometers."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def bounding_box(
    lat: float, lon: float, radius_km: float
) -> tuple[float, float, float, float]:
    """Approximate (south, west, north, east) box enclosing a radius.

    The longitude span is widened by 1/cos(lat); near the poles the span
    is capped to the full globe.
    """
    lat_delta = radius_km / KM_PER_DEGREE_LAT
    cos_lat = math.cos(math.radians(lat))
    if cos_lat < 1e-6:
        lon_delta = 180.0
    else:
        lon_delta = min(180.0, radius_km / (KM_PER_DEGREE_LAT * cos_lat))
    return (
        max(-90.0, lat - lat_delta),
        max(-180.0, lon - lon_delta),
        min(90.0, lat + lat_delta),
        min(180.0, lon + lon_delta),
    )
