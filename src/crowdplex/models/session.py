"""Flat session records and their seat-occupancy snapshot."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class SeatSnapshot:
    """Seat counts for one session, derived from the live seat map."""

    total_seats: int
    occupied_seats: int
    available_seats: int
    occupancy_pct: int


@dataclass
class Session:
    """
    One bookable screening of a movie at a theatre.

    Created by the showtime collector. The seat enricher attaches a
    SeatSnapshot in place; the four occupancy values are read through it, so
    they are either all present or all absent.
    """

    movie_id: int
    movie_name: str
    theatre_id: int
    theatre_name: str
    session_id: int
    start_time: datetime
    poster_url: str | None = None
    runtime_minutes: int | None = None
    presentation_type: str | None = None
    seats_remaining: int | None = None
    is_sold_out: bool = False
    auditorium: str | None = None
    seat_map_url: str | None = None
    experience_types: list[str] = field(default_factory=list)
    seats: SeatSnapshot | None = None

    @property
    def key(self) -> tuple[int, int]:
        """Composite identity used to merge seat data back onto sessions."""
        return (self.theatre_id, self.session_id)

    @property
    def has_occupancy(self) -> bool:
        return self.seats is not None

    @property
    def total_seats(self) -> int | None:
        return self.seats.total_seats if self.seats else None

    @property
    def occupied_seats(self) -> int | None:
        return self.seats.occupied_seats if self.seats else None

    @property
    def available_seats(self) -> int | None:
        return self.seats.available_seats if self.seats else None

    @property
    def occupancy_pct(self) -> int | None:
        return self.seats.occupancy_pct if self.seats else None
