"""Pydantic schemas for the movie ranking endpoint."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from crowdplex.models import RankingStatus
from crowdplex.schemas.area import SearchAreaSchema
from crowdplex.schemas.theatre import TheatreResponse


class SessionResponse(BaseModel):
    """One screening, with occupancy when seat data was fetched."""

    model_config = ConfigDict(from_attributes=True)

    session_id: int
    theatre_id: int
    theatre_name: str
    start_time: datetime
    auditorium: str | None = None
    experience_types: list[str] = []
    seats_remaining: int | None = None
    is_sold_out: bool
    seat_map_url: str | None = None

    # Present only for enriched sessions
    total_seats: int | None = None
    occupied_seats: int | None = None
    available_seats: int | None = None
    occupancy_pct: int | None = None


class MovieRankingResponse(BaseModel):
    """A movie with its aggregate popularity figures."""

    model_config = ConfigDict(from_attributes=True)

    movie_id: int
    name: str
    poster_url: str | None = None
    runtime_minutes: int | None = None
    presentation_type: str | None = None
    available_count: int
    average_occupancy: int | None = None
    total_seats_booked: int | None = None
    total_seats_available: int | None = None
    earliest_start_time: datetime
    sessions: list[SessionResponse]


class RankingRequest(BaseModel):
    """Body of a ranking request."""

    model_config = ConfigDict(populate_by_name=True)

    areas: list[SearchAreaSchema] = Field(..., min_length=1)
    show_date: date = Field(default_factory=date.today, alias="date")


class RankingResponse(BaseModel):
    """Response for the ranking endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    status: RankingStatus
    message: str = ""
    show_date: date = Field(..., alias="date")
    theatres: list[TheatreResponse]
    movies: list[MovieRankingResponse]
    total_movies: int
    total_sessions: int
    enriched_sessions: int
