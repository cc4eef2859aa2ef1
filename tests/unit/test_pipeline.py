"""Tests for the end-to-end ranking pipeline."""

from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from crowdplex.config import Settings
from crowdplex.exceptions import PipelineError
from crowdplex.models import RankingStatus, SearchArea
from crowdplex.services.pipeline import STATUS_MESSAGES, rank_movies_nearby

SHOW_DATE = date(2026, 2, 1)
AREA = SearchArea("Downtown Vancouver", 49.2827, -123.1207, 8)
CENTRE = (AREA.latitude, AREA.longitude)


def theatre(theatre_id: int, name: str) -> dict:
    return {
        "theatreId": theatre_id,
        "theatreName": name,
        "location": {"latitude": 49.28, "longitude": -123.12, "distanceToOriginInMeters": 1500},
    }


@pytest.fixture
def stocked_provider(fake_provider, make_showtimes):
    """Two theatres, two movies; Dune is busier than Wicked."""
    fake_provider.theatres = {CENTRE: [theatre(1, "Metrotown"), theatre(2, "Scotiabank")]}
    fake_provider.showtimes = {
        1: make_showtimes(
            1,
            "Metrotown",
            [
                {"id": 10, "name": "Wicked", "sessions": [(101, "2026-02-01T18:00:00", 30, False)]},
                {"id": 20, "name": "Dune", "sessions": [(102, "2026-02-01T19:00:00", 5, False)]},
            ],
        ),
        2: make_showtimes(
            2,
            "Scotiabank",
            [{"id": 20, "name": "Dune", "sessions": [(201, "2026-02-01T21:00:00", 0, True)]}],
        ),
    }
    fake_provider.seats = {
        (1, 101): {"A1": "Occupied", "A2": "Available", "A3": "Available", "A4": "Available"},
        (1, 102): {"A1": "Occupied", "A2": "Occupied", "A3": "Occupied", "A4": "Available"},
        (2, 201): {"A1": "Occupied", "A2": "Occupied"},
    }
    return fake_provider


class TestRankMoviesNearby:
    async def test_ranks_movies_by_occupancy(self, stocked_provider) -> None:
        result = await rank_movies_nearby(stocked_provider, [AREA], SHOW_DATE)

        assert result.status == RankingStatus.OK
        assert [t.theatre_id for t in result.theatres] == [1, 2]
        assert [m.name for m in result.movies] == ["Dune", "Wicked"]
        assert result.session_count == 3
        assert result.enriched_count == 3

        dune = result.movies[0]
        # (75 + 100) / 2 rounds half up
        assert dune.average_occupancy == 88
        assert dune.total_seats_booked == 5
        assert dune.total_seats_available == 6
        assert dune.available_count == 1
        assert {s.theatre_id for s in dune.sessions} == {1, 2}

    async def test_no_theatres(self, fake_provider) -> None:
        result = await rank_movies_nearby(fake_provider, [AREA], SHOW_DATE)

        assert result.status == RankingStatus.NO_THEATRES
        assert result.movies == []
        assert fake_provider.showtime_calls == []
        assert STATUS_MESSAGES[result.status].startswith("No theatres found")

    async def test_no_showtimes_keeps_theatres(self, fake_provider) -> None:
        fake_provider.theatres = {CENTRE: [theatre(1, "Metrotown")]}

        result = await rank_movies_nearby(fake_provider, [AREA], SHOW_DATE)

        assert result.status == RankingStatus.NO_SHOWTIMES
        assert [t.name for t in result.theatres] == ["Metrotown"]
        assert result.movies == []
        assert fake_provider.seat_calls == []

    async def test_upstream_failures_degrade_not_abort(self, stocked_provider) -> None:
        stocked_provider.fail_theatres = {2}
        stocked_provider.fail_seats = {(1, 101)}

        result = await rank_movies_nearby(stocked_provider, [AREA], SHOW_DATE)

        assert result.status == RankingStatus.OK
        assert result.session_count == 2
        assert result.enriched_count == 1
        # Wicked lost its only seat map, so it falls behind Dune
        assert [(m.name, m.average_occupancy) for m in result.movies] == [("Dune", 75), ("Wicked", None)]

    async def test_seat_cap_from_settings(self, stocked_provider) -> None:
        result = await rank_movies_nearby(
            stocked_provider, [AREA], SHOW_DATE, settings=Settings(seat_session_cap=1)
        )

        assert stocked_provider.seat_calls == [(1, 101)]
        assert result.enriched_count == 1

    async def test_live_seats_policy(self, stocked_provider) -> None:
        stocked_provider.seats[(1, 102)] = {"A1": "Occupied"}

        result = await rank_movies_nearby(
            stocked_provider, [AREA], SHOW_DATE, settings=Settings(sold_out_policy="live_seats")
        )

        dune = next(m for m in result.movies if m.name == "Dune")
        assert dune.available_count == 0

    async def test_progress_covers_every_stage(self, stocked_provider) -> None:
        stages: list[str] = []
        await rank_movies_nearby(
            stocked_provider, [AREA], SHOW_DATE, progress=lambda stage, *_: stages.append(stage)
        )
        assert list(dict.fromkeys(stages)) == ["theatres", "showtimes", "seats"]

    async def test_broken_progress_callback_does_not_fail_run(self, stocked_provider) -> None:
        def broken(stage: str, current: int, total: int) -> None:
            raise RuntimeError("display closed")

        result = await rank_movies_nearby(stocked_provider, [AREA], SHOW_DATE, progress=broken)
        assert result.status == RankingStatus.OK

    async def test_unreadable_area_does_not_abort_run(self, stocked_provider) -> None:
        stocked_provider.lookup_theatres = AsyncMock(
            side_effect=[ValueError("Expecting value"), {"nearbyTheatres": [theatre(1, "Metrotown")]}]
        )
        other = SearchArea("Burnaby", 49.2488, -122.9805, 8)

        result = await rank_movies_nearby(stocked_provider, [other, AREA], SHOW_DATE)

        assert result.status == RankingStatus.OK
        assert [t.theatre_id for t in result.theatres] == [1]

    async def test_unexpected_failure_becomes_pipeline_error(self, stocked_provider) -> None:
        with patch(
            "crowdplex.services.pipeline.rank_movies", side_effect=KeyError("movie_id")
        ):
            with pytest.raises(PipelineError, match="Failed to load showtimes") as exc_info:
                await rank_movies_nearby(stocked_provider, [AREA], SHOW_DATE)

        assert isinstance(exc_info.value.__cause__, KeyError)

    async def test_requires_an_area(self, fake_provider) -> None:
        with pytest.raises(ValueError):
            await rank_movies_nearby(fake_provider, [], SHOW_DATE)
