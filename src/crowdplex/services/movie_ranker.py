"""Group sessions by movie and rank movies by how full their screenings are."""

import logging
from enum import Enum

from crowdplex.models import MovieRanking, Session
from crowdplex.utils.rounding import round_half_up

logger = logging.getLogger(__name__)


class SoldOutPolicy(str, Enum):
    """
    Which signal decides whether a session is sold out.

    UPSTREAM: the showtimes flag, or seatsRemaining == 0, as collected.
    LIVE_SEATS: the live seat map when one was fetched (no Available seats
    left in a non-empty map), otherwise UPSTREAM.
    """

    UPSTREAM = "upstream"
    LIVE_SEATS = "live_seats"


def is_sold_out(session: Session, policy: SoldOutPolicy = SoldOutPolicy.UPSTREAM) -> bool:
    if policy is SoldOutPolicy.LIVE_SEATS and session.has_occupancy:
        if session.seats.total_seats > 0:
            return session.seats.available_seats == 0
    return session.is_sold_out


def build_ranking(
    sessions: list[Session], policy: SoldOutPolicy = SoldOutPolicy.UPSTREAM
) -> MovieRanking:
    """
    Aggregate one movie's sessions.

    Display metadata comes from the first session. Occupancy figures only
    consider sessions that carry seat data; sessions without it are left out
    of the mean rather than counted as empty.
    """
    first = sessions[0]
    with_seats = [s for s in sessions if s.has_occupancy]

    average_occupancy = None
    if with_seats:
        average_occupancy = round_half_up(
            sum(s.seats.occupancy_pct for s in with_seats) / len(with_seats)
        )

    booked = sum(s.seats.occupied_seats for s in with_seats)
    capacity = sum(s.seats.total_seats for s in with_seats)

    earliest = first
    for s in sessions[1:]:
        if s.start_time < earliest.start_time:
            earliest = s

    return MovieRanking(
        movie_id=first.movie_id,
        name=first.movie_name,
        poster_url=first.poster_url,
        runtime_minutes=first.runtime_minutes,
        presentation_type=first.presentation_type,
        sessions=list(sessions),
        available_count=sum(1 for s in sessions if not is_sold_out(s, policy)),
        earliest_start_time=earliest.start_time,
        average_occupancy=average_occupancy,
        total_seats_booked=booked if booked > 0 else None,
        total_seats_available=capacity if capacity > 0 else None,
    )


def ranking_sort_key(movie: MovieRanking) -> tuple:
    """Movies with seat data first, fullest first, then soonest showtime."""
    has_data = movie.average_occupancy is not None
    return (
        not has_data,
        -movie.average_occupancy if has_data else 0,
        movie.earliest_start_time,
    )


def rank_movies(
    sessions: list[Session], policy: SoldOutPolicy = SoldOutPolicy.UPSTREAM
) -> list[MovieRanking]:
    """
    Group sessions by movie_id and order the movies by popularity.

    The sort is stable: movies that compare equal keep first-seen order.
    """
    groups: dict[int, list[Session]] = {}
    for session in sessions:
        groups.setdefault(session.movie_id, []).append(session)

    rankings = [build_ranking(group, policy) for group in groups.values()]
    rankings.sort(key=ranking_sort_key)

    logger.info(f"Ranked {len(rankings)} movies")
    return rankings
