"""Movie ranking endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from crowdplex.api.dependencies import enforce_rate_limit, get_cineplex_client
from crowdplex.areas import METRO_AREAS
from crowdplex.exceptions import PipelineError
from crowdplex.schemas import (
    MovieRankingResponse,
    RankingRequest,
    RankingResponse,
    SearchAreaSchema,
    TheatreResponse,
)
from crowdplex.services.cineplex_client import CineplexClient
from crowdplex.services.pipeline import STATUS_MESSAGES, rank_movies_nearby

logger = logging.getLogger(__name__)
router = APIRouter()


def log_progress(stage: str, current: int, total: int) -> None:
    logger.debug(f"Ranking progress: {stage} {current}/{total}")


@router.post(
    "/rankings",
    response_model=RankingResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def create_ranking(
    request: RankingRequest,
    client: CineplexClient = Depends(get_cineplex_client),
) -> RankingResponse:
    """
    Rank the movies showing near the requested areas by seat occupancy.

    Empty outcomes (no theatres in range, no showtimes that day) are normal
    responses with a status and message, not errors.
    """
    areas = [area.to_area() for area in request.areas]

    try:
        result = await rank_movies_nearby(client, areas, request.show_date, progress=log_progress)
    except PipelineError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return RankingResponse(
        status=result.status,
        message=STATUS_MESSAGES[result.status],
        date=request.show_date,
        theatres=[TheatreResponse.model_validate(t) for t in result.theatres],
        movies=[MovieRankingResponse.model_validate(m) for m in result.movies],
        total_movies=len(result.movies),
        total_sessions=result.session_count,
        enriched_sessions=result.enriched_count,
    )


@router.get("/areas", response_model=dict[str, list[SearchAreaSchema]])
async def get_metro_areas() -> dict[str, list[SearchAreaSchema]]:
    """Preset search areas grouped by metro."""
    return {
        metro: [SearchAreaSchema.model_validate(area) for area in areas]
        for metro, areas in METRO_AREAS.items()
    }
