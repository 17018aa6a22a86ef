"""
Route history log and usage statistics.
"""

import logging
from collections import Counter
from typing import List, Optional

import numpy as np

from ..clock import Clock, SystemClock
from ..config.routing_config import RoutingConfig
from ..data.models import GeoPoint, Location, Route, RouteHistoryRecord, RouteStatistics
from ..data.rounding import round_half_up, round_int
from ..data.stores import HistoryStore, new_record_id

logger = logging.getLogger(__name__)

DEFAULT_START_ADDRESS = 'Ubicación de inicio'
DEFAULT_END_ADDRESS = 'Destino'
UNKNOWN_AREA = 'Desconocido'


class RouteHistory:
    """Records confirmed routes and derives statistics from them."""

    def __init__(self, store: HistoryStore, clock: Optional[Clock] = None,
                 config: Optional[RoutingConfig] = None):
        self.store = store
        self.clock = clock or SystemClock()
        self.config = config or RoutingConfig()

    def save(self, route: Route, start: GeoPoint, end: GeoPoint) -> RouteHistoryRecord:
        """
        Append a confirmed route at the head of the log.

        The store keeps only the most recent ``history_limit`` records.

        Args:
            route: Route the user picked
            start: Start point, optionally a Location with an address
            end: End point, optionally a Location with an address

        Returns:
            The stored record
        """
        now = self.clock.now()
        record = RouteHistoryRecord(
            id=new_record_id(now, self.store.ids()),
            timestamp=now,
            start=_as_location(start, DEFAULT_START_ADDRESS),
            end=_as_location(end, DEFAULT_END_ADDRESS),
            selected_route_id=route.id,
            safety_score=route.safety_score,
            distance_km=route.distance_km,
            duration_minutes=route.estimated_time.minutes
        )
        self.store.append(record)
        logger.info(f"Saved route '{route.id}' to history (score {route.safety_score})")
        return record

    def records(self) -> List[RouteHistoryRecord]:
        return self.store.list()

    def statistics(self) -> Optional[RouteStatistics]:
        """
        Aggregate statistics over the stored history.

        Returns:
            RouteStatistics, or None when no route has been saved
        """
        history = self.store.list()
        if not history:
            return None

        scores = np.array([r.safety_score for r in history], dtype=float)
        distances = np.array([r.distance_km for r in history], dtype=float)
        safe_share = np.mean(scores > self.config.safe_route_threshold)
        risky_share = np.mean(scores < self.config.risky_route_threshold)

        return RouteStatistics(
            total_routes=len(history),
            avg_safety_score=round_int(float(np.mean(scores))),
            total_distance_km=round_half_up(float(np.sum(distances)), 1),
            safe_routes_percentage=round_int(float(safe_share) * 100),
            risky_routes_percentage=round_int(float(risky_share) * 100),
            most_common_start_area=self.most_common_area([r.start for r in history]),
            most_common_end_area=self.most_common_area([r.end for r in history])
        )

    def most_common_area(self, locations: List[GeoPoint]) -> str:
        """
        Modal area among locations.

        Areas are cells of coordinates rounded to ``area_precision`` decimals,
        keyed as ``"lat,lng"``. Ties go to the area seen first.
        """
        if not locations:
            return UNKNOWN_AREA
        precision = self.config.area_precision
        areas = Counter(f"{loc.lat:.{precision}f},{loc.lng:.{precision}f}" for loc in locations)
        return areas.most_common(1)[0][0]


def _as_location(point: GeoPoint, default_address: str) -> Location:
    address = getattr(point, 'address', None) or default_address
    return Location(point.lat, point.lng, address)
