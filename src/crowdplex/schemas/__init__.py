"""Pydantic schemas for API requests and responses."""

from crowdplex.schemas.area import SearchAreaSchema
from crowdplex.schemas.ranking import (
    MovieRankingResponse,
    RankingRequest,
    RankingResponse,
    SessionResponse,
)
from crowdplex.schemas.theatre import TheatreLocationResponse, TheatreResponse

__all__ = [
    "MovieRankingResponse",
    "RankingRequest",
    "RankingResponse",
    "SearchAreaSchema",
    "SessionResponse",
    "TheatreLocationResponse",
    "TheatreResponse",
]
