"""Theatre records returned by the theatre lookup."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TheatreLocation:
    """Where a theatre is, and how far it is from the search origin."""

    latitude: float | None = None
    longitude: float | None = None
    distance_meters: float | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None


@dataclass(frozen=True)
class Theatre:
    """
    A cinema venue. Identity is theatre_id.

    Theatres are never mutated after the locator builds them.
    """

    theatre_id: int
    name: str
    location: TheatreLocation = field(default_factory=TheatreLocation)

    @property
    def distance_km(self) -> float | None:
        if self.location.distance_meters is None:
            return None
        return round(self.location.distance_meters / 1000, 1)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Theatre":
        """
        Build a theatre from an entry of the upstream nearbyTheatres list.

        Raises:
            ValueError: If the entry carries no theatreId
        """
        theatre_id = data.get("theatreId")
        if theatre_id is None:
            raise ValueError("theatre entry has no theatreId")

        loc = data.get("location") or {}
        location = TheatreLocation(
            latitude=loc.get("latitude"),
            longitude=loc.get("longitude"),
            distance_meters=loc.get("distanceToOriginInMeters"),
            address=loc.get("address"),
            city=loc.get("city"),
            postal_code=loc.get("postalCode"),
        )
        name = data.get("theatreName") or data.get("name") or f"Theatre {theatre_id}"
        return cls(theatre_id=theatre_id, name=name, location=location)
