"""Great-circle distance between coordinates."""

import math

from lead_proximity.core.models import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(origin: Coordinate, target: Coordinate) -> float:
    """Haversine distance in kilometers."""
    lat1 = math.radians(origin.lat)
    lat2 = math.radians(target.lat)
    d_lat = math.radians(target.lat - origin.lat)
    d_lng = math.radians(target.lng - origin.lng)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # rounding can push near-antipodal pairs just above 1
    a = min(a, 1.0)
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
