"""
Synthesis of the three route alternatives (safest, fastest, balanced).
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional

from .waypoint_generator import WaypointGenerator
from ..scoring.point_scorer import PointSafetyScorer, ScoringContext
from ...config.routing_config import RoutingConfig
from ...data.distance_utils import calculate_route_distance
from ...data.models import EstimatedTime, GeoPoint, Route, Waypoint
from ...data.rounding import round_int

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouteProfile:
    """How one route alternative is generated and presented."""
    id: str
    name: str
    description: str
    color: str
    icon: str
    waypoint_count: int
    substitution_threshold: Optional[float] = None
    substitution_radius_km: Optional[float] = None


def build_route_profiles(config: RoutingConfig) -> List[RouteProfile]:
    """Route profiles in generation order."""
    return [
        RouteProfile(
            id='safest',
            name='Ruta Más Segura',
            description='Prioriza tu seguridad evitando zonas de riesgo',
            color='#10b981',
            icon='🛡️',
            waypoint_count=config.safest_waypoints,
            substitution_threshold=config.safest_substitution_threshold,
            substitution_radius_km=config.safest_substitution_radius_km
        ),
        RouteProfile(
            id='fastest',
            name='Ruta Más Rápida',
            description='Camino más directo, menor tiempo de viaje',
            color='#3b82f6',
            icon='⚡',
            waypoint_count=config.fastest_waypoints
        ),
        RouteProfile(
            id='balanced',
            name='Ruta Equilibrada',
            description='Balance óptimo entre seguridad y tiempo',
            color='#f59e0b',
            icon='⚖️',
            waypoint_count=config.balanced_waypoints,
            substitution_threshold=config.balanced_substitution_threshold,
            substitution_radius_km=config.balanced_substitution_radius_km
        )
    ]


def estimate_time(distance_km: float, mode: str = 'walking',
                  config: Optional[RoutingConfig] = None) -> EstimatedTime:
    """
    Estimate travel time for a distance.

    Args:
        distance_km: Distance in kilometers
        mode: One of the configured travel modes (walking, transit, driving, cycling)
        config: Source of travel speeds

    Returns:
        EstimatedTime with fractional hours and rounded minutes

    Raises:
        ValueError: If the mode has no configured speed
    """
    speeds = (config or RoutingConfig()).travel_speeds_kmh
    if mode not in speeds:
        raise ValueError(f"Unknown travel mode '{mode}'. Expected one of: {', '.join(speeds)}")
    hours = distance_km / speeds[mode]
    return EstimatedTime(hours=hours, minutes=round_int(hours * 60))


def calculate_route_safety_score(waypoints: List[Waypoint]) -> int:
    if not waypoints:
        return 0
    return round_int(sum(wp.safety_score for wp in waypoints) / len(waypoints))


def identify_dangerous_points(waypoints: List[Waypoint], config: RoutingConfig) -> List[Waypoint]:
    """Copies of the waypoints scoring below the danger threshold, tagged with severity."""
    dangerous = []
    for index, wp in enumerate(waypoints):
        if wp.safety_score < config.danger_threshold:
            severity = 'high' if wp.safety_score < config.high_severity_threshold else 'medium'
            dangerous.append(replace(wp, index=index, severity=severity))
    return dangerous


class RouteSynthesizer:
    """
    Builds the safest, fastest and balanced routes between two points.

    The safest and balanced routes swap low-scoring waypoints for the
    nearest known safe zone when one lies within their search radius;
    otherwise the jittered point is kept as is.
    """

    def __init__(self, scorer: PointSafetyScorer, config: Optional[RoutingConfig] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the synthesizer.

        Args:
            scorer: Point scorer backed by the report and evaluation stores
            config: Routing configuration parameters
            rng: Random source for waypoint jitter
        """
        self.config = config or scorer.config
        self.config.validate()
        self.scorer = scorer
        self.generator = WaypointGenerator(scorer, self.config, rng)
        self.profiles = build_route_profiles(self.config)

    def synthesize(self, start: GeoPoint, end: GeoPoint) -> List[Route]:
        """
        Calculate the three route alternatives.

        Args:
            start: Route start
            end: Route end

        Returns:
            Routes sorted by safety score (highest first); the first is recommended
        """
        logger.info(f"Synthesizing routes from ({start.lat:.5f}, {start.lng:.5f}) "
                    f"to ({end.lat:.5f}, {end.lng:.5f})")

        context = self.scorer.snapshot()
        routes = [self._build_route(profile, start, end, context) for profile in self.profiles]

        # Stable sort: equal scores keep generation order
        routes.sort(key=lambda route: route.safety_score, reverse=True)
        for position, route in enumerate(routes):
            route.recommended = position == 0

        logger.info("Route scores: " + ", ".join(f"{r.id}={r.safety_score}" for r in routes))
        return routes

    def _build_route(self, profile: RouteProfile, start: GeoPoint, end: GeoPoint,
                     context: ScoringContext) -> Route:
        interior = self.generator.generate(start, end, profile.waypoint_count, context)

        if profile.substitution_threshold is not None:
            interior = [
                self._substitute(wp, profile.substitution_threshold,
                                 profile.substitution_radius_km, context)
                for wp in interior
            ]

        waypoints = [self._endpoint(start, context)] + interior + [self._endpoint(end, context)]
        distance_km = calculate_route_distance(waypoints)

        return Route(
            id=profile.id,
            name=profile.name,
            description=profile.description,
            waypoints=waypoints,
            safety_score=calculate_route_safety_score(waypoints),
            distance_km=distance_km,
            estimated_time=estimate_time(distance_km, self.config.routing_mode, self.config),
            dangerous_points=identify_dangerous_points(waypoints, self.config),
            color=profile.color,
            icon=profile.icon
        )

    def _substitute(self, waypoint: Waypoint, threshold: float, radius_km: float,
                    context: ScoringContext) -> Waypoint:
        if waypoint.safety_score >= threshold:
            return waypoint

        safe_zones = self.scorer.find_nearest_safe_zones(waypoint.point, radius_km, context)
        if not safe_zones:
            logger.debug(f"No safe zone within {radius_km} km of weak waypoint "
                         f"({waypoint.lat:.5f}, {waypoint.lng:.5f})")
            return waypoint

        location = safe_zones[0][0].location
        return Waypoint(
            lat=location.lat,
            lng=location.lng,
            safety_score=self.scorer.score_point(location, context)
        )

    def _endpoint(self, point: GeoPoint, context: ScoringContext) -> Waypoint:
        return Waypoint(lat=point.lat, lng=point.lng,
                        safety_score=self.scorer.score_point(GeoPoint(point.lat, point.lng), context))
