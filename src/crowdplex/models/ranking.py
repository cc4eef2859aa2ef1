"""Ranked movie output of the pipeline."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from crowdplex.models.session import Session
from crowdplex.models.theatre import Theatre


@dataclass(frozen=True)
class MovieRanking:
    """Aggregate occupancy metrics for one movie across all its sessions."""

    movie_id: int
    name: str
    poster_url: str | None
    runtime_minutes: int | None
    presentation_type: str | None
    sessions: list[Session]
    available_count: int
    earliest_start_time: datetime
    average_occupancy: int | None = None
    total_seats_booked: int | None = None
    total_seats_available: int | None = None


class RankingStatus(str, Enum):
    OK = "ok"
    NO_THEATRES = "no_theatres"
    NO_SHOWTIMES = "no_showtimes"


@dataclass
class RankingResult:
    """Outcome of one pipeline run, including the terminal empty states."""

    status: RankingStatus
    theatres: list[Theatre] = field(default_factory=list)
    movies: list[MovieRanking] = field(default_factory=list)
    session_count: int = 0
    enriched_count: int = 0
