"""Search area supplied by the caller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchArea:
    """
    A geographic point and radius used to query nearby theatres.

    The optional location context is forwarded to the theatre lookup; the
    upstream uses it to disambiguate border areas.
    """

    name: str
    latitude: float
    longitude: float
    radius_km: float
    city: str = ""
    region: str = ""
    region_code: str = ""
    country: str = "Canada"
    postal_code: str = ""

    def __post_init__(self) -> None:
        """Validate coordinates and radius."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"longitude out of range: {self.longitude}")
        if self.radius_km <= 0:
            raise ValueError(f"radius_km must be positive: {self.radius_km}")

    def context(self) -> dict[str, str]:
        """Location context fields that are set, keyed by upstream parameter name."""
        fields = {
            "city": self.city,
            "region": self.region,
            "regionCode": self.region_code,
            "country": self.country,
            "postalCode": self.postal_code,
        }
        return {key: value for key, value in fields.items() if value}
