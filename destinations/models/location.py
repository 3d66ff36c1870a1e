"""Candidate location model produced by city discovery."""

from dataclasses import dataclass

from destinations.models.common import LocationId


@dataclass(frozen=True)
class CandidateLocation:
    id: LocationId
    name: str
    latitude: float
    longitude: float
    distance: float  # km from the search center
    country: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "distance": self.distance,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateLocation":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            distance=float(data["distance"]),
            country=data.get("country"),
        )
