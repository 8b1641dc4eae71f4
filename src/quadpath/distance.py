"""Great-circle distance between coordinates."""

import math


EARTH_RADIUS_M = 6371000.0  # Mean Earth radius in meters


def distance(a, b) -> float:
    """
    Haversine distance between two coordinates in meters.

    Args:
        a: First point (anything with lng/lat attributes, in degrees)
        b: Second point

    Returns:
        Great-circle distance in meters
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lng = math.radians(b.lng - a.lng)

    h = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(delta_lng / 2) ** 2
    )
    h = min(1.0, h)  # rounding near antipodes
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_M * c
