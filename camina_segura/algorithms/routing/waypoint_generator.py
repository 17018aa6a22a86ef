"""
Jittered straight-line waypoint generation.

There is no street network behind these points: each waypoint is a linear
interpolation between the endpoints nudged by a small random offset, which
gives the route a walked-path shape without road data.
"""

import logging
import random
from typing import List, Optional

from ..scoring.point_scorer import PointSafetyScorer, ScoringContext
from ...config.routing_config import RoutingConfig
from ...data.models import GeoPoint, Waypoint

logger = logging.getLogger(__name__)


class WaypointGenerator:

    def __init__(self, scorer: PointSafetyScorer, config: Optional[RoutingConfig] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the generator.

        Args:
            scorer: Scorer used to annotate each waypoint
            config: Jitter parameters
            rng: Random source; pass a seeded ``random.Random`` for repeatable routes
        """
        self.scorer = scorer
        self.config = config or scorer.config
        self.rng = rng or random.Random()

    def generate(self, start: GeoPoint, end: GeoPoint, count: int,
                 context: Optional[ScoringContext] = None) -> List[Waypoint]:
        """
        Generate interior waypoints between two points.

        Waypoint ``i`` (1-based) sits at fraction ``i / (count + 1)`` of the
        straight line, offset on each axis by up to half the jitter span.

        Args:
            start: Route start
            end: Route end
            count: Number of interior waypoints
            context: Scoring snapshot shared across the routing call

        Returns:
            ``count`` scored waypoints in travel order
        """
        if count < 0:
            raise ValueError("count must not be negative")
        if context is None:
            context = self.scorer.snapshot()

        variation = self.config.jitter_degrees
        waypoints = []

        for i in range(1, count + 1):
            fraction = i / (count + 1)
            lat = start.lat + (end.lat - start.lat) * fraction
            lng = start.lng + (end.lng - start.lng) * fraction

            jittered = GeoPoint(
                lat + (self.rng.random() - 0.5) * variation,
                lng + (self.rng.random() - 0.5) * variation
            )
            waypoints.append(Waypoint(
                lat=jittered.lat,
                lng=jittered.lng,
                safety_score=self.scorer.score_point(jittered, context)
            ))

        logger.debug(f"Generated {len(waypoints)} waypoints")
        return waypoints
