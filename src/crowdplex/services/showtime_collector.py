"""Fetch showtimes per theatre and flatten them into session records."""

import logging
from datetime import date
from typing import Any

from crowdplex.models import Session, Theatre
from crowdplex.services.cineplex_client import ShowtimeProvider
from crowdplex.services.progress import ProgressCallback, notify
from crowdplex.utils.batch import run_bounded
from crowdplex.utils.dates import parse_start_time

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 5


def flatten_showtimes(payload: list[dict[str, Any]], theatre: Theatre) -> list[Session]:
    """
    Walk theatre → dates → movies → experiences → sessions into flat records.

    Each session inherits its movie's display metadata and its experience's
    type tags. Sessions without a usable start time are skipped.

    Args:
        payload: Upstream showtimes response for one theatre
        theatre: The theatre the request was made for (fallback identity)

    Returns:
        One Session per leaf session
    """
    sessions: list[Session] = []

    for theatre_data in payload or []:
        theatre_id = theatre_data.get("theatreId", theatre.theatre_id)
        theatre_name = theatre_data.get("theatre") or theatre.name

        for date_data in theatre_data.get("dates") or []:
            for movie in date_data.get("movies") or []:
                poster_url = movie.get("mediumPosterImageUrl") or movie.get("smallPosterImageUrl")

                for experience in movie.get("experiences") or []:
                    experience_types = list(experience.get("experienceTypes") or [])

                    for raw in experience.get("sessions") or []:
                        start_time = parse_start_time(raw.get("showStartDateTime"))
                        if start_time is None:
                            logger.warning(
                                f"Skipping session {raw.get('vistaSessionId')} at {theatre_name}: "
                                f"bad start time {raw.get('showStartDateTime')!r}"
                            )
                            continue

                        seats_remaining = raw.get("seatsRemaining")
                        sessions.append(
                            Session(
                                movie_id=movie.get("id"),
                                movie_name=movie.get("name", ""),
                                poster_url=poster_url,
                                runtime_minutes=movie.get("runtimeInMinutes"),
                                presentation_type=movie.get("presentationType"),
                                theatre_id=theatre_id,
                                theatre_name=theatre_name,
                                start_time=start_time,
                                seats_remaining=seats_remaining,
                                is_sold_out=bool(raw.get("isSoldOut")) or seats_remaining == 0,
                                auditorium=raw.get("auditorium"),
                                seat_map_url=raw.get("seatMapUrl"),
                                session_id=raw.get("vistaSessionId"),
                                experience_types=experience_types,
                            )
                        )

    return sessions


async def collect_sessions(
    client: ShowtimeProvider,
    theatres: list[Theatre],
    show_date: date,
    concurrency: int = DEFAULT_CONCURRENCY,
    progress: ProgressCallback | None = None,
) -> list[Session]:
    """
    Fetch showtimes for every theatre and return all sessions as one flat list.

    Failed theatres are logged by the batch runner and contribute nothing.
    Sessions are returned in theatre order, whatever order the fetches
    completed in.
    """
    notify(progress, "showtimes", 0, len(theatres))

    async def fetch(theatre: Theatre) -> list[dict[str, Any]]:
        return await client.lookup_showtimes(theatre.theatre_id, show_date)

    results = await run_bounded(
        theatres,
        fetch,
        concurrency,
        on_progress=lambda done, total: notify(progress, "showtimes", done, total),
        label=lambda t: f"theatre {t.theatre_id} ({t.name})",
    )

    payloads = {r.item.theatre_id: r.value for r in results if r.success and r.value}
    failures = sum(1 for r in results if not r.success)
    if failures:
        logger.warning(f"Showtimes unavailable for {failures} of {len(theatres)} theatres")

    sessions: list[Session] = []
    for theatre in theatres:
        payload = payloads.get(theatre.theatre_id)
        if payload:
            sessions.extend(flatten_showtimes(payload, theatre))

    logger.info(f"Found {len(sessions)} total sessions")
    return sessions
