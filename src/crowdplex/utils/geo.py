"""Geolocation utilities for theatre distances."""

import math

EARTH_RADIUS_METERS = 6_371_000.0


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points, in metres.

    Used when the theatre lookup omits distanceToOriginInMeters.

    Example:
        >>> # Downtown Vancouver to Burnaby (~11 km)
        >>> 10_000 < haversine_meters(49.2827, -123.1207, 49.2488, -122.9805) < 12_000
        True
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(a))
