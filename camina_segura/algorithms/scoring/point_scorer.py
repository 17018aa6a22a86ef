"""
Point safety scoring from community reports, self-evaluations and time of day.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from ...clock import Clock, SystemClock
from ...config.routing_config import RoutingConfig
from ...data.distance_utils import haversine_km
from ...data.models import CommunityReport, GeoPoint, SafetyEvaluation
from ...data.stores import EvaluationStore, ReportStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringContext:
    """One consistent view of the stores and the clock for a scoring run."""
    reports: Tuple[CommunityReport, ...]
    evaluations: Tuple[SafetyEvaluation, ...]
    now: datetime

    @property
    def hour(self) -> int:
        return self.now.hour


class PointSafetyScorer:
    """
    Scores a coordinate from 0 (unsafe) to 100 (safe).

    The score starts at the configured baseline, then nearby community
    reports add or subtract a type weight scaled by how recent they are,
    nearby historical self-evaluations subtract a share of their mean risk,
    and the current hour applies a fixed adjustment.
    """

    def __init__(self, report_store: ReportStore, evaluation_store: EvaluationStore,
                 config: Optional[RoutingConfig] = None, clock: Optional[Clock] = None):
        """
        Initialize the scorer.

        Args:
            report_store: Read-only source of community reports
            evaluation_store: Read-only source of self-evaluations
            config: Scoring parameters
            clock: Source of the current time
        """
        self.report_store = report_store
        self.evaluation_store = evaluation_store
        self.config = config or RoutingConfig()
        self.clock = clock or SystemClock()

    def snapshot(self) -> ScoringContext:
        """Read both stores and the clock once."""
        return ScoringContext(
            reports=tuple(self.report_store.list_reports()),
            evaluations=tuple(self.evaluation_store.list_evaluations()),
            now=self.clock.now()
        )

    def score_point(self, point: GeoPoint, context: Optional[ScoringContext] = None) -> float:
        """
        Calculate the safety score at a specific point.

        Args:
            point: Coordinate to score
            context: Pre-read store snapshot; read fresh when omitted

        Returns:
            Safety score clamped to [min_score, max_score]
        """
        if context is None:
            context = self.snapshot()

        score = self.config.base_score
        score += self.report_adjustment(point, context)
        score -= self.evaluation_penalty(point, context)
        score += self.config.time_of_day_adjustment(context.hour)

        clamped = max(self.config.min_score, min(self.config.max_score, score))
        logger.debug(f"Score at ({point.lat:.5f}, {point.lng:.5f}): {clamped:.1f}")
        return clamped

    def report_adjustment(self, point: GeoPoint, context: ScoringContext) -> float:
        """Sum of type weights of nearby reports, each scaled by its relevance."""
        adjustment = 0.0
        for report in context.reports:
            if haversine_km(point, report.location) >= self.config.report_radius_km:
                continue
            weight = self.config.report_weights.get(
                self.config.canonical_report_type(report.type), 0.0
            )
            adjustment += weight * self.relevance(report, context.now)
        return adjustment

    def relevance(self, report: CommunityReport, now: datetime) -> float:
        """Linear decay from 1 for a fresh report to 0 at the decay window."""
        age_days = max(0.0, report.age_days(now))
        return max(0.0, 1.0 - age_days / self.config.report_decay_days)

    def evaluation_penalty(self, point: GeoPoint, context: ScoringContext) -> float:
        """Configured share of the mean risk of nearby self-evaluations."""
        nearby = [
            evaluation.percentage for evaluation in context.evaluations
            if evaluation.location is not None
            and haversine_km(point, evaluation.location) < self.config.evaluation_radius_km
        ]
        if not nearby:
            return 0.0
        return self.config.evaluation_risk_factor * (sum(nearby) / len(nearby))

    def find_nearest_safe_zones(self, point: GeoPoint, radius_km: float,
                                context: Optional[ScoringContext] = None,
                                limit: Optional[int] = None) -> List[Tuple[CommunityReport, float]]:
        """
        Find safe-zone reports around a point.

        Args:
            point: Search center
            radius_km: Maximum distance in kilometers (inclusive)
            context: Pre-read store snapshot; read fresh when omitted
            limit: Maximum number of results (defaults to config)

        Returns:
            List of (report, distance_km) pairs, nearest first
        """
        if context is None:
            context = self.snapshot()
        if limit is None:
            limit = self.config.safe_zone_search_limit

        candidates = []
        for report in context.reports:
            if self.config.canonical_report_type(report.type) != 'safe_zone':
                continue
            distance = haversine_km(point, report.location)
            if distance <= radius_km:
                candidates.append((report, distance))

        candidates.sort(key=lambda item: item[1])
        return candidates[:limit]
