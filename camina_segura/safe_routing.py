"""
Safe routing engine: the entry points used by the surrounding application.
"""

import logging
import random
from typing import List, Optional

from .algorithms.recommendations import get_route_recommendations
from .algorithms.routing.route_synthesizer import RouteSynthesizer
from .algorithms.scoring.point_scorer import PointSafetyScorer
from .clock import Clock, SystemClock
from .config.routing_config import RoutingConfig
from .data.models import GeoPoint, Recommendation, Route, RouteHistoryRecord, RouteStatistics
from .data.stores import (
    EvaluationStore, HistoryStore, InMemoryKeyValueStore, KeyValueStore, ReportStore
)
from .history.route_history import RouteHistory

logger = logging.getLogger(__name__)


class SafeRoutingEngine:
    """
    Wires the scorer, synthesizer, recommendations and history together.

    All collaborators are injected; ``from_kv_store`` builds the three
    stores over one key-value store.
    """

    def __init__(self, report_store: ReportStore, evaluation_store: EvaluationStore,
                 history_store: HistoryStore, config: Optional[RoutingConfig] = None,
                 clock: Optional[Clock] = None, rng: Optional[random.Random] = None):
        """
        Initialize the engine.

        Args:
            report_store: Community reports (read-only for routing)
            evaluation_store: Self-evaluations (read-only for routing)
            history_store: Route history log
            config: Routing configuration parameters
            clock: Source of the current time
            rng: Random source for waypoint jitter
        """
        self.config = config or RoutingConfig()
        self.config.validate()
        self.clock = clock or SystemClock()

        self.report_store = report_store
        self.evaluation_store = evaluation_store

        self.scorer = PointSafetyScorer(report_store, evaluation_store, self.config, self.clock)
        self.synthesizer = RouteSynthesizer(self.scorer, self.config, rng)
        self.history = RouteHistory(history_store, self.clock, self.config)

    @classmethod
    def from_kv_store(cls, kv_store: Optional[KeyValueStore] = None,
                      config: Optional[RoutingConfig] = None,
                      clock: Optional[Clock] = None,
                      rng: Optional[random.Random] = None) -> 'SafeRoutingEngine':
        kv_store = kv_store or InMemoryKeyValueStore()
        config = config or RoutingConfig()
        return cls(
            report_store=ReportStore(kv_store),
            evaluation_store=EvaluationStore(kv_store, config.evaluation_limit),
            history_store=HistoryStore(kv_store, config.history_limit),
            config=config,
            clock=clock,
            rng=rng
        )

    def calculate_safe_routes(self, start: GeoPoint, end: GeoPoint) -> List[Route]:
        return self.synthesizer.synthesize(start, end)

    def get_route_recommendations(self, route: Route) -> List[Recommendation]:
        return get_route_recommendations(route, self.report_store, self.clock, self.config)

    def save_route_to_history(self, route: Route, start: GeoPoint, end: GeoPoint) -> RouteHistoryRecord:
        return self.history.save(route, start, end)

    def get_route_statistics(self) -> Optional[RouteStatistics]:
        return self.history.statistics()

    def score_point(self, point: GeoPoint) -> float:
        return self.scorer.score_point(point)
