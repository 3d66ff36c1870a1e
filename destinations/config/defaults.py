"""Default upstream endpoints."""

# Public Overpass mirrors, tried in order.
DEFAULT_OVERPASS_ENDPOINTS: list[str] = [
    "https://overpass-api.de/api/interpreter",
    "https://overpass.kumi.systems/api/interpreter",
    "https://overpass.private.coffee/api/interpreter",
]

DEFAULT_OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

DEFAULT_USER_AGENT = "destinations-engine/0.1.0"
