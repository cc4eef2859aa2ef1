"""Attach live seat occupancy to the soonest sessions."""

import logging
from typing import Any

from crowdplex.models import SeatSnapshot, Session
from crowdplex.services.cineplex_client import ShowtimeProvider
from crowdplex.services.progress import ProgressCallback, notify
from crowdplex.utils.batch import run_bounded
from crowdplex.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_MAX_SESSIONS = 200
DEFAULT_CONCURRENCY = 15


def snapshot_from_seat_map(seat_availabilities: dict[str, str] | None) -> SeatSnapshot:
    """
    Count seats by state.

    Every key is a seat. Seats in states other than Available/Occupied count
    towards the total only. An empty map yields 0% rather than dividing by zero.
    """
    states = list((seat_availabilities or {}).values())
    total = len(states)
    occupied = states.count("Occupied")
    available = states.count("Available")
    occupancy = round_half_up(occupied / total * 100) if total > 0 else 0
    return SeatSnapshot(
        total_seats=total,
        occupied_seats=occupied,
        available_seats=available,
        occupancy_pct=occupancy,
    )


def select_priority_sessions(sessions: list[Session], max_sessions: int) -> list[Session]:
    """Soonest sessions first, capped. Sorts a copy; ties keep their input order."""
    return sorted(sessions, key=lambda s: s.start_time)[:max_sessions]


async def enrich_sessions(
    client: ShowtimeProvider,
    sessions: list[Session],
    max_sessions: int = DEFAULT_MAX_SESSIONS,
    concurrency: int = DEFAULT_CONCURRENCY,
    progress: ProgressCallback | None = None,
) -> int:
    """
    Fetch seat maps for the priority subset and attach them to `sessions` in place.

    Results are merged by (theatre_id, session_id), never by position, since
    the subset is in start-time order and `sessions` is not. Sessions outside
    the subset, or whose fetch failed, keep no occupancy data.

    Args:
        client: Upstream seat-state lookup
        sessions: All collected sessions (left in their original order)
        max_sessions: Size of the priority subset
        concurrency: Maximum seat lookups in flight
        progress: Optional (stage, current, total) callback

    Returns:
        Number of sessions that received occupancy data
    """
    subset = select_priority_sessions(sessions, max_sessions)
    notify(progress, "seats", 0, len(subset))

    async def fetch(session: Session) -> SeatSnapshot:
        data: dict[str, Any] = await client.lookup_seat_state(session.theatre_id, session.session_id)
        return snapshot_from_seat_map(data.get("seatAvailabilities"))

    results = await run_bounded(
        subset,
        fetch,
        concurrency,
        on_progress=lambda done, total: notify(progress, "seats", done, total),
        label=lambda s: f"session {s.theatre_id}/{s.session_id}",
    )

    snapshots = {r.item.key: r.value for r in results if r.success and r.value is not None}

    enriched = 0
    for session in sessions:
        snapshot = snapshots.get(session.key)
        if snapshot is not None:
            session.seats = snapshot
            enriched += 1

    logger.info(
        f"Seat data for {enriched} of {len(sessions)} sessions "
        f"({len(subset)} requested, {len(results) - len(snapshots)} failed)"
    )
    return enriched
