"""
GeoJSON export of synthesized routes for map clients.
"""

import logging
from typing import Any, Dict, Iterable

import geojson

from ..data.models import Route

logger = logging.getLogger(__name__)


def route_to_geojson(route: Route) -> geojson.FeatureCollection:
    """
    Convert a route to a GeoJSON FeatureCollection.

    The collection holds the route LineString, one Point per danger point,
    and the start and end Points. GeoJSON positions are (lon, lat).

    Args:
        route: Route to export

    Returns:
        GeoJSON FeatureCollection
    """
    coords = [[wp.lng, wp.lat] for wp in route.waypoints]

    line_feature = geojson.Feature(
        geometry=geojson.LineString(coords),
        properties={
            "type": "route",
            "route_id": route.id,
            "name": route.name,
            "safety_score": route.safety_score,
            "distance_km": round(route.distance_km, 3),
            "estimated_minutes": route.estimated_time.minutes,
            "color": route.color,
            "recommended": route.recommended
        }
    )

    danger_features = [
        geojson.Feature(
            geometry=geojson.Point([point.lng, point.lat]),
            properties={
                "type": "danger",
                "severity": point.severity,
                "safety_score": round(point.safety_score, 1),
                "index": point.index
            }
        )
        for point in route.dangerous_points
    ]

    start_feature = geojson.Feature(
        geometry=geojson.Point(coords[0]),
        properties={"type": "start", "name": "Start Point"}
    )
    end_feature = geojson.Feature(
        geometry=geojson.Point(coords[-1]),
        properties={"type": "end", "name": "End Point"}
    )

    collection = geojson.FeatureCollection([line_feature] + danger_features + [start_feature, end_feature])
    if not collection.is_valid:
        logger.warning(f"Generated invalid GeoJSON for route {route.id}: {collection.errors()}")
    return collection


def routes_to_geojson(routes: Iterable[Route]) -> Dict[str, Any]:
    """Map of route id to its FeatureCollection."""
    return {route.id: route_to_geojson(route) for route in routes}
