"""
Advisory messages for a chosen route.

Every rule is checked independently and all matching messages are
returned in rule order, without deduplication or priority sorting.
"""

import logging
from datetime import timedelta
from typing import List, Optional

from ..clock import Clock, SystemClock
from ..config.routing_config import RoutingConfig
from ..data.models import CommunityReport, Recommendation, Route, ensure_aware
from ..data.stores import ReportStore

logger = logging.getLogger(__name__)


def get_route_recommendations(route: Route, report_store: ReportStore,
                              clock: Optional[Clock] = None,
                              config: Optional[RoutingConfig] = None) -> List[Recommendation]:
    """
    Build the advisory list for a route.

    Args:
        route: The route the user is looking at
        report_store: Source of community reports for the recency check
        clock: Source of the current time
        config: Recommendation thresholds

    Returns:
        Recommendations in rule order
    """
    config = config or RoutingConfig()
    now = (clock or SystemClock()).now()
    recommendations = []

    if route.safety_score < config.high_risk_route_threshold:
        recommendations.append(Recommendation(
            priority='high',
            icon='🚨',
            message='Esta ruta tiene zonas de alto riesgo. Considera usar otra alternativa.',
            action='Cambiar ruta'
        ))
    elif route.safety_score < config.alert_route_threshold:
        recommendations.append(Recommendation(
            priority='medium',
            icon='⚠️',
            message='Mantente alerta. Hay algunas zonas con reportes de seguridad.',
            action='Ver puntos de riesgo'
        ))

    high_risk_points = [p for p in route.dangerous_points if p.severity == 'high']
    if high_risk_points:
        recommendations.append(Recommendation(
            priority='high',
            icon='📍',
            message=f'{len(high_risk_points)} zona(s) de alto riesgo en esta ruta.',
            action='Ver detalles'
        ))

    if config.is_night(now.hour):
        recommendations.append(Recommendation(
            priority='high',
            icon='🌙',
            message='Es de noche. Comparte tu ubicación con contactos de confianza.',
            action='Compartir ubicación'
        ))

    if route.distance_km > config.long_route_km:
        recommendations.append(Recommendation(
            priority='medium',
            icon='🚌',
            message='Ruta larga. Considera usar transporte público.',
            action='Ver opciones de transporte'
        ))

    recent = _recent_reports(report_store.list_reports(), now, config.recent_report_hours)
    if not recent and route.safety_score > config.reassurance_score_threshold:
        recommendations.append(Recommendation(
            priority='low',
            icon='✅',
            message='Sin incidentes reportados recientemente en esta zona.',
            action=None
        ))

    logger.debug(f"{len(recommendations)} recommendations for route {route.id}")
    return recommendations


def _recent_reports(reports: List[CommunityReport], now, hours: float) -> List[CommunityReport]:
    cutoff = ensure_aware(now) - timedelta(hours=hours)
    return [r for r in reports if ensure_aware(r.timestamp) > cutoff]
