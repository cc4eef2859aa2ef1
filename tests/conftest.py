"""Shared test fixtures."""

from datetime import date
from typing import Any

import pytest
from fastapi import FastAPI

from crowdplex.api.errors import register_exception_handlers
from crowdplex.api.routes import cineplex, health, rankings
from crowdplex.exceptions import UpstreamError
from crowdplex.services.cache import TTLCache
from crowdplex.services.rate_limiter import RateLimiter


class FakeProvider:
    """
    In-memory stand-in for the Cineplex client.

    theatres: {(lat, lon): [theatre dicts]}
    showtimes: {theatre_id: nested showtimes payload}
    seats: {(theatre_id, session_id): seat map}
    Anything listed in the fail_* sets raises UpstreamError(503).
    """

    def __init__(
        self,
        theatres: dict[tuple[float, float], list[dict[str, Any]]] | None = None,
        showtimes: dict[int, list[dict[str, Any]]] | None = None,
        seats: dict[tuple[int, int], dict[str, str]] | None = None,
        fail_areas: set[tuple[float, float]] | None = None,
        fail_theatres: set[int] | None = None,
        fail_seats: set[tuple[int, int]] | None = None,
    ) -> None:
        self.theatres = theatres or {}
        self.showtimes = showtimes or {}
        self.seats = seats or {}
        self.fail_areas = fail_areas or set()
        self.fail_theatres = fail_theatres or set()
        self.fail_seats = fail_seats or set()
        self.seat_calls: list[tuple[int, int]] = []
        self.showtime_calls: list[tuple[int, date]] = []

    async def lookup_theatres(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        context: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        if (latitude, longitude) in self.fail_areas:
            raise UpstreamError(503)
        return {"nearbyTheatres": self.theatres.get((latitude, longitude), [])}

    async def lookup_showtimes(self, theatre_id: int, show_date: date) -> list[dict[str, Any]]:
        self.showtime_calls.append((theatre_id, show_date))
        if theatre_id in self.fail_theatres:
            raise UpstreamError(503)
        return self.showtimes.get(theatre_id, [])

    async def lookup_seat_state(self, theatre_id: int, session_id: int) -> dict[str, Any]:
        self.seat_calls.append((theatre_id, session_id))
        if (theatre_id, session_id) in self.fail_seats:
            raise UpstreamError(503)
        return {"seatAvailabilities": self.seats.get((theatre_id, session_id), {})}


def showtimes_payload(
    theatre_id: int,
    theatre_name: str,
    movies: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """
    Build an upstream showtimes response.

    Each movie dict has id, name and sessions, a list of
    (session_id, start "YYYY-MM-DDTHH:MM:SS", seats_remaining, is_sold_out),
    plus optional experience_types and poster.
    """
    return [
        {
            "theatreId": theatre_id,
            "theatre": theatre_name,
            "dates": [
                {
                    "startDate": "2026-02-01T00:00:00",
                    "movies": [
                        {
                            "id": movie["id"],
                            "name": movie["name"],
                            "mediumPosterImageUrl": movie.get("poster"),
                            "runtimeInMinutes": movie.get("runtime", 120),
                            "presentationType": "2D",
                            "experiences": [
                                {
                                    "experienceTypes": movie.get("experience_types", ["Regular"]),
                                    "sessions": [
                                        {
                                            "vistaSessionId": session_id,
                                            "showStartDateTime": start,
                                            "seatsRemaining": remaining,
                                            "isSoldOut": sold_out,
                                            "auditorium": "Aud 1",
                                            "seatMapUrl": f"https://example.com/seats/{session_id}",
                                        }
                                        for session_id, start, remaining, sold_out in movie["sessions"]
                                    ],
                                }
                            ],
                        }
                        for movie in movies
                    ],
                }
            ],
        }
    ]


@pytest.fixture
def make_showtimes():
    return showtimes_payload


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def test_app(fake_provider: FakeProvider) -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, for API tests."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(health.router)
    app.include_router(cineplex.router, prefix="/api")
    app.include_router(rankings.router, prefix="/api")

    app.state.cache = TTLCache()
    app.state.rate_limiter = RateLimiter(max_requests=100, window_seconds=60)
    app.state.cineplex_client = fake_provider
    return app
