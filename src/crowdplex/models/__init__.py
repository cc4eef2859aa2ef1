"""Domain records passed between pipeline stages."""

from crowdplex.models.area import SearchArea
from crowdplex.models.ranking import MovieRanking, RankingResult, RankingStatus
from crowdplex.models.session import SeatSnapshot, Session
from crowdplex.models.theatre import Theatre, TheatreLocation

__all__ = [
    "MovieRanking",
    "RankingResult",
    "RankingStatus",
    "SearchArea",
    "SeatSnapshot",
    "Session",
    "Theatre",
    "TheatreLocation",
]
