"""
Distance calculation utilities.

The routing core works in kilometers; ``haversine_distance`` keeps the
meter-based signature for callers that deal in map distances.
"""

import math
from typing import Sequence

from .models import GeoPoint

EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = 6371000.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1, lon1: First point coordinates
        lat2, lon2: Second point coordinates

    Returns:
        Distance in meters
    """
    return _central_angle(lat1, lon1, lat2, lon2) * EARTH_RADIUS_M


def haversine_km(p1: GeoPoint, p2: GeoPoint) -> float:
    """
    Great circle distance between two GeoPoints.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Distance in kilometers
    """
    return _central_angle(p1.lat, p1.lng, p2.lat, p2.lng) * EARTH_RADIUS_KM


def _central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (math.sin(delta_lat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2)
    return 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def calculate_route_distance(points: Sequence) -> float:
    """
    Calculate the total length of a polyline.

    Args:
        points: Ordered objects with ``lat`` and ``lng`` attributes

    Returns:
        Total distance in kilometers
    """
    total_distance = 0.0

    for i in range(len(points) - 1):
        total_distance += _central_angle(
            points[i].lat, points[i].lng,
            points[i + 1].lat, points[i + 1].lng
        ) * EARTH_RADIUS_KM

    return total_distance
