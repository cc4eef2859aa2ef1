"""Pydantic schemas for search areas."""

from pydantic import BaseModel, ConfigDict, Field

from crowdplex.models import SearchArea


class SearchAreaSchema(BaseModel):
    """A search point and radius, as sent by clients."""

    model_config = ConfigDict(from_attributes=True)

    name: str = "Your Location"
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    radius_km: float = Field(8, gt=0)
    city: str = ""
    region: str = ""
    region_code: str = ""
    country: str = "Canada"
    postal_code: str = ""

    def to_area(self) -> SearchArea:
        return SearchArea(**self.model_dump())
