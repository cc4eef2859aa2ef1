"""Tests for movie grouping and popularity ranking."""

from datetime import datetime, timedelta

from crowdplex.models import SeatSnapshot, Session
from crowdplex.services.movie_ranker import SoldOutPolicy, build_ranking, is_sold_out, rank_movies

BASE_TIME = datetime(2026, 2, 1, 12, 0)
_next_id = iter(range(1, 10_000))


def make_session(
    movie_id: int,
    minutes: int = 0,
    occupancy: int | None = None,
    total: int = 100,
    sold_out: bool = False,
    name: str | None = None,
) -> Session:
    session = Session(
        movie_id=movie_id,
        movie_name=name or f"Movie {movie_id}",
        theatre_id=1,
        theatre_name="Theatre",
        session_id=next(_next_id),
        start_time=BASE_TIME + timedelta(minutes=minutes),
        is_sold_out=sold_out,
    )
    if occupancy is not None:
        occupied = round(total * occupancy / 100)
        session.seats = SeatSnapshot(
            total_seats=total,
            occupied_seats=occupied,
            available_seats=total - occupied,
            occupancy_pct=occupancy,
        )
    return session


class TestBuildRanking:
    def test_average_ignores_sessions_without_data(self) -> None:
        ranking = build_ranking([make_session(1, occupancy=80), make_session(1)])
        assert ranking.average_occupancy == 80

    def test_average_is_rounded_mean(self) -> None:
        ranking = build_ranking(
            [make_session(1, occupancy=50), make_session(1, occupancy=51)]
        )
        # 50.5 rounds half up
        assert ranking.average_occupancy == 51

    def test_average_undefined_without_any_data(self) -> None:
        ranking = build_ranking([make_session(1), make_session(1)])
        assert ranking.average_occupancy is None
        assert ranking.total_seats_booked is None
        assert ranking.total_seats_available is None

    def test_seat_totals_sum_enriched_sessions(self) -> None:
        ranking = build_ranking(
            [make_session(1, occupancy=50, total=200), make_session(1, occupancy=10, total=100), make_session(1)]
        )
        assert ranking.total_seats_booked == 110
        assert ranking.total_seats_available == 300

    def test_zero_booked_seats_is_undefined(self) -> None:
        ranking = build_ranking([make_session(1, occupancy=0, total=100)])
        assert ranking.average_occupancy == 0
        assert ranking.total_seats_booked is None
        assert ranking.total_seats_available == 100

    def test_available_count_excludes_sold_out(self) -> None:
        ranking = build_ranking(
            [make_session(1), make_session(1, sold_out=True), make_session(1)]
        )
        assert ranking.available_count == 2

    def test_earliest_start_and_first_seen_metadata(self) -> None:
        ranking = build_ranking(
            [make_session(1, minutes=90, name="First Name"), make_session(1, minutes=15, name="Other")]
        )
        assert ranking.earliest_start_time == BASE_TIME + timedelta(minutes=15)
        assert ranking.name == "First Name"
        assert len(ranking.sessions) == 2


class TestSoldOutPolicy:
    def test_upstream_policy_uses_collected_flag(self) -> None:
        session = make_session(1, occupancy=100, total=50, sold_out=False)
        assert is_sold_out(session, SoldOutPolicy.UPSTREAM) is False

    def test_live_policy_prefers_seat_map(self) -> None:
        full = make_session(1, occupancy=100, total=50, sold_out=False)
        stale_flag = make_session(1, occupancy=40, total=50, sold_out=True)
        assert is_sold_out(full, SoldOutPolicy.LIVE_SEATS) is True
        assert is_sold_out(stale_flag, SoldOutPolicy.LIVE_SEATS) is False

    def test_live_policy_falls_back_without_seat_data(self) -> None:
        assert is_sold_out(make_session(1, sold_out=True), SoldOutPolicy.LIVE_SEATS) is True

    def test_live_policy_ignores_empty_seat_map(self) -> None:
        session = make_session(1, sold_out=True)
        session.seats = SeatSnapshot(total_seats=0, occupied_seats=0, available_seats=0, occupancy_pct=0)
        assert is_sold_out(session, SoldOutPolicy.LIVE_SEATS) is True


class TestRankMovies:
    def test_partial_data_movie_beats_lower_full_data_movie(self) -> None:
        sessions = [
            make_session(2, occupancy=60),
            make_session(1, occupancy=80),
            make_session(1),
        ]
        ranked = rank_movies(sessions)
        assert [m.movie_id for m in ranked] == [1, 2]
        assert ranked[0].average_occupancy == 80

    def test_movies_with_data_precede_movies_without(self) -> None:
        sessions = [
            make_session(1, minutes=0),
            make_session(2, minutes=500, occupancy=5),
            make_session(3, minutes=10),
        ]
        ranked = rank_movies(sessions)
        assert [m.movie_id for m in ranked] == [2, 1, 3]

    def test_defined_averages_are_non_increasing(self) -> None:
        sessions = [make_session(i, occupancy=occ) for i, occ in enumerate([20, 90, 55, 90, 0, 71])]
        averages = [m.average_occupancy for m in rank_movies(sessions)]
        assert averages == sorted(averages, reverse=True)

    def test_equal_occupancy_breaks_tie_by_earliest_show(self) -> None:
        sessions = [
            make_session(1, minutes=120, occupancy=50),
            make_session(2, minutes=30, occupancy=50),
        ]
        assert [m.movie_id for m in rank_movies(sessions)] == [2, 1]

    def test_full_ties_keep_first_seen_order(self) -> None:
        sessions = [make_session(7, minutes=0), make_session(3, minutes=0), make_session(5, minutes=0)]
        assert [m.movie_id for m in rank_movies(sessions)] == [7, 3, 5]

    def test_one_ranking_per_movie(self) -> None:
        sessions = [make_session(1), make_session(2), make_session(1), make_session(2), make_session(3)]
        ranked = rank_movies(sessions)
        assert sorted(m.movie_id for m in ranked) == [1, 2, 3]
        assert sum(len(m.sessions) for m in ranked) == 5

    def test_empty_input(self) -> None:
        assert rank_movies([]) == []

    def test_live_policy_changes_available_count(self) -> None:
        sessions = [make_session(1, occupancy=100, total=10), make_session(1)]
        assert rank_movies(sessions)[0].available_count == 2
        assert rank_movies(sessions, SoldOutPolicy.LIVE_SEATS)[0].available_count == 1
