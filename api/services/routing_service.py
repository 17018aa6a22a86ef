"""
Service layer for the safe routing API.
"""

import logging
import os
import random
from typing import Any, Dict, List, Optional

from camina_segura.algorithms.evaluation import calculate_risk, evaluation_recommendations
from camina_segura.clock import Clock
from camina_segura.config.routing_config import RoutingConfig
from camina_segura.data.data_loader import load_reports, seed_reports
from camina_segura.data.models import CommunityReport, GeoPoint, Location, Route, SafetyEvaluation
from camina_segura.data.stores import KeyValueStore, SQLiteKeyValueStore, new_record_id
from camina_segura.export.geojson_export import route_to_geojson
from camina_segura.safe_routing import SafeRoutingEngine
from api.schemas.routing import (
    HealthResponse, HistoryRequest, HistoryResponse, LocationRequest, RecommendationSchema,
    RouteRequest, RouteSchema, RoutesResponse, StatisticsResponse, StatisticsSchema
)
from api.schemas.community import (
    EvaluationListResponse, EvaluationRequest, EvaluationResponse, EvaluationSchema,
    PointScoreResponse, ReportCreateRequest, ReportListResponse, ReportSchema
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
DB_PATH_ENV = "CAMINA_SEGURA_DB"
SEED_DEMO_ENV = "CAMINA_SEGURA_SEED_DEMO"


class SafeRoutingService:
    """
    Service class that provides safe routing functionality for the API.
    """

    def __init__(self, kv_store: Optional[KeyValueStore] = None,
                 config: Optional[RoutingConfig] = None,
                 clock: Optional[Clock] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize the routing service.

        Args:
            kv_store: Backing store; defaults to SQLite at $CAMINA_SEGURA_DB
            config: Routing configuration parameters
            clock: Source of the current time
            rng: Random source for waypoint jitter
        """
        if kv_store is None:
            db_path = os.environ.get(DB_PATH_ENV, "camina_segura.db")
            kv_store = SQLiteKeyValueStore(db_path)
        self.kv_store = kv_store
        self.storage_path = str(getattr(kv_store, 'db_path', 'memory'))
        self.engine = SafeRoutingEngine.from_kv_store(kv_store, config, clock, rng)

        # Routes from the most recent calculation, keyed by route id
        self.last_routes: Dict[str, Route] = {}

        logger.info(f"Safe routing service initialized (storage: {self.storage_path})")

    def seed_demo_reports(self) -> int:
        """Store the bundled sample reports when no reports exist yet."""
        try:
            reports = load_reports(now=self.engine.clock.now())
        except (FileNotFoundError, ValueError) as e:
            logger.warning(f"Could not load demo reports: {e}")
            return 0
        written = seed_reports(self.engine.report_store, reports)
        if written:
            logger.info(f"Seeded {written} demo community reports")
        return written

    def get_health_status(self) -> HealthResponse:
        """Get the health status of the routing service."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            storage_path=self.storage_path,
            reports_count=len(self.engine.report_store.list_reports()),
            evaluations_count=len(self.engine.evaluation_store.list_evaluations()),
            history_count=len(self.engine.history.records())
        )

    # ───────────────────────────── Routing ─────────────────────────────

    def calculate_routes(self, request: RouteRequest) -> RoutesResponse:
        """
        Calculate the three route alternatives between two points.

        Args:
            request: Route calculation request

        Returns:
            RoutesResponse with routes sorted safest first
        """
        start = _to_location(request.start)
        end = _to_location(request.destination)

        routes = self.engine.calculate_safe_routes(start, end)
        self.last_routes = {route.id: route for route in routes}

        recommended = next((route.id for route in routes if route.recommended), None)
        return RoutesResponse(
            success=True,
            message="Routes calculated successfully",
            routes=[RouteSchema(**route.to_dict()) for route in routes],
            recommended=recommended
        )

    def get_recommendations(self, route_schema: RouteSchema) -> List[RecommendationSchema]:
        route = Route.from_dict(route_schema.model_dump())
        return [RecommendationSchema(**rec.to_dict())
                for rec in self.engine.get_route_recommendations(route)]

    def save_to_history(self, request: HistoryRequest) -> HistoryResponse:
        route = Route.from_dict(request.route.model_dump())
        record = self.engine.save_route_to_history(
            route, _to_location(request.start), _to_location(request.destination)
        )
        return HistoryResponse(success=True, message="Route saved to history", record_id=record.id)

    def get_statistics(self) -> StatisticsResponse:
        stats = self.engine.get_route_statistics()
        if stats is None:
            return StatisticsResponse(statistics=None)
        return StatisticsResponse(statistics=StatisticsSchema(**stats.to_dict()))

    def get_route_geojson(self, route_id: str) -> Optional[Dict[str, Any]]:
        """GeoJSON for a route from the most recent calculation, if any."""
        route = self.last_routes.get(route_id)
        if route is None:
            return None
        return dict(route_to_geojson(route))

    def score_point(self, lat: float, lng: float) -> PointScoreResponse:
        score = self.engine.score_point(GeoPoint(lat, lng))
        return PointScoreResponse(lat=lat, lng=lng, safetyScore=score)

    # ──────────────────────── Community reports ────────────────────────

    def list_reports(self) -> ReportListResponse:
        reports = self.engine.report_store.list_reports()
        return ReportListResponse(
            count=len(reports),
            reports=[ReportSchema(**report.to_dict()) for report in reports]
        )

    def create_report(self, request: ReportCreateRequest) -> ReportSchema:
        now = self.engine.clock.now()
        existing = [item.get('id') for item in self.engine.report_store.load_raw()]
        report = CommunityReport(
            id=new_record_id(now, existing),
            type=request.type,
            location=GeoPoint(request.lat, request.lng),
            timestamp=now,
            is_anonymous=request.isAnonymous,
            title=request.title.strip(),
            description=request.description,
            username=None if request.isAnonymous else request.username
        )
        self.engine.report_store.add(report)
        return ReportSchema(**report.to_dict())

    def mark_report_helpful(self, report_id: str) -> ReportSchema:
        return ReportSchema(**self.engine.report_store.mark_helpful(_parse_id(report_id)).to_dict())

    def verify_report(self, report_id: str) -> ReportSchema:
        return ReportSchema(**self.engine.report_store.verify(_parse_id(report_id)).to_dict())

    # ───────────────────────── Self-evaluations ────────────────────────

    def submit_evaluation(self, request: EvaluationRequest) -> EvaluationResponse:
        """
        Score a questionnaire and store it.

        Raises:
            ValueError: If the answers are invalid
        """
        assessment = calculate_risk(request.answers)
        now = self.engine.clock.now()

        location = None
        if request.lat is not None and request.lng is not None:
            location = GeoPoint(request.lat, request.lng)

        store = self.engine.evaluation_store
        evaluation = SafetyEvaluation(
            id=new_record_id(now, [item.get('id') for item in store.load_raw()]),
            timestamp=now,
            percentage=assessment.percentage,
            location=location,
            responses=assessment.responses,
            level=assessment.level
        )
        store.add(evaluation)

        recommendations = evaluation_recommendations(assessment.responses, assessment.percentage)
        return EvaluationResponse(
            evaluation_id=evaluation.id,
            level=assessment.level,
            percentage=assessment.percentage,
            recommendations=[RecommendationSchema(**rec.to_dict()) for rec in recommendations]
        )

    def list_evaluations(self) -> EvaluationListResponse:
        evaluations = self.engine.evaluation_store.list_evaluations()
        return EvaluationListResponse(
            count=len(evaluations),
            evaluations=[EvaluationSchema(**evaluation.to_dict()) for evaluation in evaluations]
        )


def _to_location(request: LocationRequest) -> Location:
    return Location(request.lat, request.lng, request.address)


def _parse_id(report_id: str):
    return int(report_id) if report_id.isdigit() else report_id


_routing_service: Optional[SafeRoutingService] = None


def get_routing_service() -> SafeRoutingService:
    """Global service instance, created on first use."""
    global _routing_service
    if _routing_service is None:
        _routing_service = SafeRoutingService()
        if os.environ.get(SEED_DEMO_ENV, "").lower() in ("1", "true", "yes"):
            _routing_service.seed_demo_reports()
    return _routing_service
