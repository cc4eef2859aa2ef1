"""Rank the movies showing near a location from the command line."""

import argparse
import asyncio
import logging
import sys
from datetime import date

from crowdplex.areas import METRO_AREAS, find_areas
from crowdplex.exceptions import PipelineError
from crowdplex.models import RankingResult, RankingStatus, SearchArea
from crowdplex.services.cineplex_client import CineplexClient
from crowdplex.services.pipeline import STATUS_MESSAGES, rank_movies_nearby

STAGE_LABELS = {
    "theatres": "Finding theatres in area",
    "showtimes": "Loading showtimes...",
    "seats": "Checking seat availability...",
}


def print_progress(stage: str, current: int, total: int) -> None:
    print(f"\r{STAGE_LABELS.get(stage, stage)} {current}/{total}", end="", file=sys.stderr, flush=True)
    if current == total:
        print(file=sys.stderr)


def print_ranking(result: RankingResult, limit: int) -> None:
    print(
        f"Found {len(result.theatres)} theatre{'s' if len(result.theatres) != 1 else ''} nearby "
        f"• Showing {len(result.movies)} movie{'s' if len(result.movies) != 1 else ''} "
        f"({result.enriched_count}/{result.session_count} sessions with seat data)\n"
    )
    for rank, movie in enumerate(result.movies[:limit], start=1):
        occupancy = f"{movie.average_occupancy:>3}%" if movie.average_occupancy is not None else "   ?"
        seats = ""
        if movie.total_seats_booked is not None and movie.total_seats_available is not None:
            seats = f"  {movie.total_seats_booked:,}/{movie.total_seats_available:,} seats"
        first = movie.earliest_start_time.strftime("%H:%M")
        print(
            f"{rank:>3}. {occupancy}  {movie.name:<45} "
            f"{movie.available_count} showing{'s' if movie.available_count != 1 else ''}, "
            f"first {first}{seats}"
        )


async def rank(areas: list[SearchArea], show_date: date, limit: int, timeout: float | None) -> int:
    """Run the pipeline and print the result; returns the process exit code."""
    async with CineplexClient() as client:
        try:
            result = await asyncio.wait_for(
                rank_movies_nearby(client, areas, show_date, progress=print_progress),
                timeout=timeout,
            )
        except (PipelineError, asyncio.TimeoutError) as e:
            print(f"\nERROR: {str(e) or 'timed out'}", file=sys.stderr)
            return 2

    if result.status is not RankingStatus.OK:
        print(STATUS_MESSAGES[result.status])
        return 1

    print_ranking(result, limit)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Rank nearby Cineplex movies by how full their screenings are."
    )
    parser.add_argument(
        "--metro",
        metavar="NAME",
        help=f"Preset metro or area name (metros: {', '.join(METRO_AREAS)})",
    )
    parser.add_argument("--lat", type=float, help="Latitude of a custom search point")
    parser.add_argument("--lon", type=float, help="Longitude of a custom search point")
    parser.add_argument(
        "--radius", type=float, default=8, metavar="KM", help="Search radius in km (default: 8)"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=date.today(),
        metavar="YYYY-MM-DD",
        help="Date to rank (default: today)",
    )
    parser.add_argument(
        "--limit", type=int, default=20, metavar="N", help="Movies to print (default: 20)"
    )
    parser.add_argument(
        "--timeout", type=float, default=None, metavar="SECONDS", help="Abort the whole run after this long"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log pipeline details")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )

    if args.metro:
        areas = find_areas(args.metro)
        if not areas:
            parser.error(f"Unknown metro or area: {args.metro}")
    elif args.lat is not None and args.lon is not None:
        try:
            areas = [SearchArea("Custom location", args.lat, args.lon, args.radius)]
        except ValueError as e:
            parser.error(str(e))
    else:
        parser.error("Give either --metro or both --lat and --lon")

    sys.exit(asyncio.run(rank(areas, args.date, args.limit, args.timeout)))


if __name__ == "__main__":
    main()
