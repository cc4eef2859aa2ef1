"""Cineplex API client for theatres, showtimes and seat availability."""

import logging
from datetime import date
from typing import Any, Protocol

import httpx

from crowdplex.config import settings
from crowdplex.exceptions import UpstreamError
from crowdplex.services.cache import TTLCache
from crowdplex.utils.dates import format_showtime_date

logger = logging.getLogger(__name__)


class ShowtimeProvider(Protocol):
    """The three upstream lookups the ranking pipeline depends on."""

    async def lookup_theatres(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        context: dict[str, str] | None = None,
    ) -> dict[str, Any]: ...

    async def lookup_showtimes(self, theatre_id: int, show_date: date) -> list[dict[str, Any]]: ...

    async def lookup_seat_state(self, theatre_id: int, session_id: int) -> dict[str, Any]: ...


class CineplexClient:
    """
    Client for the Cineplex theatrical and ticketing APIs.

    Responses are cached in the injected TTLCache (theatres 5 min, showtimes
    2 min, seats 1 min by default). Non-success responses raise UpstreamError
    carrying the upstream status; transport failures propagate as
    httpx.HTTPError. Nothing is retried here.
    """

    def __init__(
        self,
        api_key: str | None = None,
        cache: TTLCache | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize Cineplex client.

        Args:
            api_key: Subscription key (uses settings if not provided)
            cache: Response cache (a private one is created if not provided)
            http_client: Shared httpx client (one is created and owned if not provided)
        """
        self.api_key = api_key or settings.cineplex_api_key
        if not self.api_key:
            logger.warning("Cineplex API key not configured")

        self.cache = cache if cache is not None else TTLCache()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(settings.request_timeout)
        )

    async def __aenter__(self) -> "CineplexClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "*/*",
            "Accept-Language": "en",
            "Ocp-Apim-Subscription-Key": self.api_key,
            "Referer": "https://www.cineplex.com/",
            "Origin": "https://www.cineplex.com",
            "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
        }

    async def lookup_theatres(
        self,
        latitude: float,
        longitude: float,
        radius_km: float,
        context: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        Find theatres around a point.

        Args:
            latitude: Search centre latitude
            longitude: Search centre longitude
            radius_km: Search radius in kilometres
            context: Optional city/region/regionCode/country/postalCode hints

        Returns:
            Upstream payload; theatres are under "nearbyTheatres"
        """
        context = dict(context or {})
        country = context.pop("country", "Canada")
        radius = f"{radius_km:g}"

        # The upstream reads both camelCase and PascalCase spellings
        params: list[tuple[str, str]] = [
            ("language", "en"),
            ("latitude", str(latitude)),
            ("longitude", str(longitude)),
            ("accuracyKm", radius),
            ("Latitude", str(latitude)),
            ("Longitude", str(longitude)),
            ("AccuracyKm", radius),
            ("Country", country),
        ]
        for name in ("city", "region", "regionCode", "postalCode"):
            value = context.get(name)
            if value:
                params.append((name, value))
                params.append((name[0].upper() + name[1:], value))

        return await self._get_json(
            f"{settings.cineplex_theatrical_url}/theatres",
            params=params,
            cache_key=f"theatres:{latitude}:{longitude}:{radius}",
            ttl=settings.theatre_cache_ttl,
        )

    async def lookup_showtimes(self, theatre_id: int, show_date: date) -> list[dict[str, Any]]:
        """
        Fetch the showtimes of one theatre for one day.

        Returns:
            Nested theatre → dates → movies → experiences → sessions list
        """
        date_str = format_showtime_date(show_date)
        data = await self._get_json(
            f"{settings.cineplex_theatrical_url}/showtimes",
            params={"language": "en", "locationId": str(theatre_id), "date": date_str},
            cache_key=f"showtimes:{theatre_id}:{date_str}",
            ttl=settings.showtime_cache_ttl,
        )
        return data or []

    async def lookup_seat_state(self, theatre_id: int, session_id: int) -> dict[str, Any]:
        """
        Fetch the live seat map of one session.

        Returns:
            Upstream payload; seat states are under "seatAvailabilities"
        """
        url = (
            f"{settings.cineplex_ticketing_url}/theatre/{theatre_id}"
            f"/showtime/{session_id}/seat-availability"
        )
        return await self._get_json(
            url,
            params=None,
            cache_key=f"seats:{theatre_id}:{session_id}",
            ttl=settings.seat_cache_ttl,
        )

    async def _get_json(
        self,
        url: str,
        params: Any,
        cache_key: str,
        ttl: int,
    ) -> Any:
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache HIT {cache_key}")
            return cached

        logger.debug(f"Cache MISS {cache_key}")
        response = await self._http.get(url, params=params, headers=self.headers)
        if response.is_error:
            logger.error(f"Cineplex API returned {response.status_code} for {url}")
            raise UpstreamError(response.status_code)

        data = response.json()
        self.cache.set(cache_key, data, ttl)
        return data
