"""Pass-through endpoints for the Cineplex theatre, showtime and seat APIs."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from crowdplex.api.dependencies import enforce_rate_limit, get_cineplex_client
from crowdplex.services.cineplex_client import CineplexClient
from crowdplex.services.seat_enricher import snapshot_from_seat_map
from crowdplex.utils.dates import parse_showtime_date

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(enforce_rate_limit)])


@router.get("/theatres")
async def get_theatres(
    latitude: float = Query(..., description="Decimal latitude"),
    longitude: float = Query(..., description="Decimal longitude"),
    accuracy_km: float = Query(5, alias="accuracyKm", gt=0, description="Search radius in km"),
    city: str = Query("", description="City name"),
    region: str = Query("", description="Region / province name"),
    region_code: str = Query("", alias="regionCode", description="Region code, e.g. BC"),
    country: str = Query("Canada", description="Country"),
    postal_code: str = Query("", alias="postalCode", description="Postal code"),
    client: CineplexClient = Depends(get_cineplex_client),
) -> dict[str, Any]:
    """
    Find theatres near a location.

    Returns the upstream payload; theatres are under "nearbyTheatres".
    """
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise HTTPException(status_code=400, detail="Invalid latitude or longitude values")

    context = {
        "city": city,
        "region": region,
        "regionCode": region_code,
        "country": country,
        "postalCode": postal_code,
    }
    return await client.lookup_theatres(
        latitude, longitude, accuracy_km, {k: v for k, v in context.items() if v}
    )


@router.get("/showtimes")
async def get_showtimes(
    theatre_id: int = Query(..., alias="theatreId", description="Theatre ID from /api/theatres"),
    date_param: str = Query(..., alias="date", description="Date in M/D/YYYY format"),
    client: CineplexClient = Depends(get_cineplex_client),
) -> list[dict[str, Any]]:
    """Fetch one theatre's showtimes for one day, as the upstream nests them."""
    try:
        show_date = parse_showtime_date(date_param)
    except ValueError:
        raise HTTPException(status_code=400, detail="date must be in M/D/YYYY format")

    return await client.lookup_showtimes(theatre_id, show_date)


@router.get("/seat-availability")
async def get_seat_availability(
    theatre_id: int = Query(..., alias="theatreId", description="Theatre ID"),
    showtime_id: int = Query(..., alias="showtimeId", description="Vista session ID"),
    client: CineplexClient = Depends(get_cineplex_client),
) -> dict[str, Any]:
    """
    Fetch the seat map for one showtime, with seat counts and occupancy added.
    """
    data = await client.lookup_seat_state(theatre_id, showtime_id)
    snapshot = snapshot_from_seat_map(data.get("seatAvailabilities"))
    return {
        **data,
        "totalSeats": snapshot.total_seats,
        "occupiedSeats": snapshot.occupied_seats,
        "availableSeats": snapshot.available_seats,
        "occupancyPercentage": snapshot.occupancy_pct,
    }
