"""City discovery: populated places around a center, with TTL cache."""

import logging

from destinations.errors import CollaboratorUnavailable
from destinations.ingest.overpass_client import OverpassClient
from destinations.models.location import CandidateLocation
from destinations.scoring.geo import bounding_box, haversine_km
from destinations.storage.cache import Cache, NullCache

logger = logging.getLogger(__name__)

PLACE_TYPES = ("city", "town", "village")


def cities_cache_key(lat: float, lon: float, radius_km: float) -> str:
    return f"cities_{lat:.2f}_{lon:.2f}_{round(radius_km)}"


def build_places_query(lat: float, lon: float, radius_km: float, timeout_s: int = 30) -> str:
    """Overpass QL for city/town/village nodes and ways in the radius bounding box."""
    south, west, north, east = bounding_box(lat, lon, radius_km)
    bbox = f"{south},{west},{north},{east}"
    selectors = "\n".join(
        f'  {kind}["place"="{place}"]({bbox});'
        for kind in ("node", "way")
        for place in PLACE_TYPES
    )
    return f"[out:json][timeout:{timeout_s}];\n(\n{selectors}\n);\nout center;\n"


def parse_places(
    data: dict, origin_lat: float, origin_lon: float, radius_km: float
) -> list[CandidateLocation]:
    """Turn an Overpass response into candidates within the radius, nearest first."""
    places: list[CandidateLocation] = []

    for el in data.get("elements") or []:
        tags = el.get("tags") or {}
        if tags.get("place") not in PLACE_TYPES:
            continue

        name = tags.get("name") or tags.get("name:fr") or ""
        if not name.strip():
            continue

        if el.get("type") == "node":
            lat, lon = el.get("lat"), el.get("lon")
        else:
            center = el.get("center") or {}
            lat, lon = center.get("lat"), center.get("lon")
        if lat is None or lon is None:
            continue

        distance = haversine_km(origin_lat, origin_lon, float(lat), float(lon))
        if distance > radius_km:
            continue

        places.append(
            CandidateLocation(
                id=f"{el.get('type', 'node')}/{el.get('id')}",
                name=name.strip(),
                latitude=float(lat),
                longitude=float(lon),
                distance=distance,
                country=tags.get("addr:country") or tags.get("is_in:country"),
            )
        )

    places.sort(key=lambda p: p.distance)

    # A place is often mapped both as a node and as a way; keep the nearest.
    seen: set[tuple[str, str | None]] = set()
    uniq: list[CandidateLocation] = []
    for p in places:
        k = (p.name.lower(), p.country)
        if k in seen:
            continue
        seen.add(k)
        uniq.append(p)
    return uniq


class CityDiscovery:
    def __init__(self, client: OverpassClient, cache: Cache | None = None):
        self.client = client
        self.cache = cache or NullCache()

    def find_nearby(
        self, lat: float, lon: float, radius_km: float
    ) -> list[CandidateLocation]:
        """Places within ``radius_km`` of the center, nearest first.

        Serves fresh cache hits; on backend exhaustion falls back to a stale
        cache entry, and raises CollaboratorUnavailable if there is none.
        """
        key = cities_cache_key(lat, lon, radius_km)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Cache hit for cities %s", key)
            return [CandidateLocation.from_dict(c) for c in cached]

        try:
            data = self.client.query(build_places_query(lat, lon, radius_km))
        except CollaboratorUnavailable:
            stale = self.cache.get_stale(key)
            if stale is None:
                raise
            logger.warning("Place search unavailable, serving stale cache %s", key)
            return [CandidateLocation.from_dict(c) for c in stale]

        places = parse_places(data, lat, lon, radius_km)
        if places:
            self.cache.set(key, [p.to_dict() for p in places])
        logger.info("Discovered %d places within %.1fkm", len(places), radius_km)
        return places

    def find_with_expansion(
        self,
        lat: float,
        lon: float,
        radius_km: float,
        min_candidates: int,
        growth_factor: float,
        max_radius_km: float,
    ) -> tuple[list[CandidateLocation], float]:
        """Grow the radius until ``min_candidates`` places are found or the cap is hit.

        Returns the places and the radius that produced them.
        """
        radius = min(radius_km, max_radius_km)
        places = self.find_nearby(lat, lon, radius)
        while len(places) < min_candidates and radius < max_radius_km:
            radius = min(radius * growth_factor, max_radius_km)
            logger.info(
                "Expanding search radius to %.1fkm (found %d places)", radius, len(places)
            )
            places = self.find_nearby(lat, lon, radius)
        return places, radius
