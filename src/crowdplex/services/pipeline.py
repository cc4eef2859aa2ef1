"""End-to-end ranking pipeline: theatres → sessions → seats → ranked movies."""

import logging
from datetime import date

from crowdplex.config import Settings, settings as default_settings
from crowdplex.exceptions import PipelineError
from crowdplex.models import RankingResult, RankingStatus, SearchArea
from crowdplex.services.cineplex_client import ShowtimeProvider
from crowdplex.services.movie_ranker import SoldOutPolicy, rank_movies
from crowdplex.services.progress import ProgressCallback
from crowdplex.services.seat_enricher import enrich_sessions
from crowdplex.services.showtime_collector import collect_sessions
from crowdplex.services.theatre_locator import locate_theatres

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    RankingStatus.OK: "",
    RankingStatus.NO_THEATRES: (
        "No theatres found in the selected areas. Try selecting different areas."
    ),
    RankingStatus.NO_SHOWTIMES: "No showtimes found for the selected date at nearby theatres.",
}


async def rank_movies_nearby(
    client: ShowtimeProvider,
    areas: list[SearchArea],
    show_date: date,
    progress: ProgressCallback | None = None,
    settings: Settings = default_settings,
) -> RankingResult:
    """
    Rank the movies showing near the given areas by crowd popularity.

    Per-area, per-theatre and per-session upstream failures are tolerated.
    Finding no theatres or no sessions ends the run early with an empty
    result and the matching status.

    Args:
        client: Upstream theatre/showtime/seat lookups
        areas: One or more search areas
        show_date: Day to rank
        progress: Optional (stage, current, total) callback; never awaited
        settings: Concurrency limits, seat cap and sold-out policy

    Returns:
        RankingResult with status, theatres and ranked movies

    Raises:
        ValueError: If no areas are given
        PipelineError: If a stage fails unexpectedly
    """
    if not areas:
        raise ValueError("At least one search area is required")

    try:
        theatres = await locate_theatres(client, areas, progress=progress)
        if not theatres:
            return RankingResult(status=RankingStatus.NO_THEATRES)

        sessions = await collect_sessions(
            client,
            theatres,
            show_date,
            concurrency=settings.showtime_concurrency,
            progress=progress,
        )
        if not sessions:
            return RankingResult(status=RankingStatus.NO_SHOWTIMES, theatres=theatres)

        enriched = await enrich_sessions(
            client,
            sessions,
            max_sessions=settings.seat_session_cap,
            concurrency=settings.seat_concurrency,
            progress=progress,
        )

        movies = rank_movies(sessions, SoldOutPolicy(settings.sold_out_policy))
    except Exception as e:
        logger.error(f"Ranking pipeline failed for {show_date}: {e}", exc_info=True)
        raise PipelineError(f"Failed to load showtimes: {e}") from e

    return RankingResult(
        status=RankingStatus.OK,
        theatres=theatres,
        movies=movies,
        session_count=len(sessions),
        enriched_count=enriched,
    )
