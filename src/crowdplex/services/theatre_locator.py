"""Find theatres across one or more search areas."""

import dataclasses
import logging

from crowdplex.models import SearchArea, Theatre
from crowdplex.services.cineplex_client import ShowtimeProvider
from crowdplex.services.progress import ProgressCallback, notify
from crowdplex.utils.geo import haversine_meters

logger = logging.getLogger(__name__)


def _with_distance(theatre: Theatre, area: SearchArea) -> Theatre:
    """Fill in the distance from the area centre when the upstream left it out."""
    loc = theatre.location
    if loc.distance_meters is not None or loc.latitude is None or loc.longitude is None:
        return theatre
    distance = haversine_meters(area.latitude, area.longitude, loc.latitude, loc.longitude)
    return dataclasses.replace(
        theatre, location=dataclasses.replace(loc, distance_meters=round(distance))
    )


async def locate_theatres(
    client: ShowtimeProvider,
    areas: list[SearchArea],
    progress: ProgressCallback | None = None,
) -> list[Theatre]:
    """
    Look up theatres for every area and merge them by theatre_id.

    Areas are queried in order; the first occurrence of a theatre wins. A
    failing area is logged and skipped, so partial results are possible.

    Args:
        client: Upstream theatre lookup
        areas: Search areas to query
        progress: Optional (stage, current, total) callback

    Returns:
        Unique theatres in first-seen order (empty if none were found)
    """
    theatres: dict[int, Theatre] = {}

    for i, area in enumerate(areas, start=1):
        notify(progress, "theatres", i, len(areas))
        try:
            data = await client.lookup_theatres(
                area.latitude, area.longitude, area.radius_km, area.context()
            )
            entries = data.get("nearbyTheatres") or []
        except Exception as e:
            logger.warning(f"Failed to fetch theatres for {area.name}: {e}")
            continue

        for entry in entries:
            try:
                theatre = Theatre.from_api(entry)
            except ValueError as e:
                logger.warning(f"Skipping malformed theatre in {area.name}: {e}")
                continue
            if theatre.theatre_id not in theatres:
                theatres[theatre.theatre_id] = _with_distance(theatre, area)

    logger.info(f"Found {len(theatres)} unique theatres across {len(areas)} area(s)")
    return list(theatres.values())
