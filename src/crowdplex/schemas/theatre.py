"""Pydantic schemas for theatre data."""

from pydantic import BaseModel, ConfigDict


class TheatreLocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    latitude: float | None = None
    longitude: float | None = None
    distance_meters: float | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None


class TheatreResponse(BaseModel):
    """Theatre response schema."""

    model_config = ConfigDict(from_attributes=True)

    theatre_id: int
    name: str
    distance_km: float | None = None
    location: TheatreLocationResponse
