"""
Scoring and routing algorithms.

This module contains:
- Point safety scoring
- Waypoint generation and route synthesis
- Route recommendations and self-evaluation scoring
"""

from .scoring.point_scorer import PointSafetyScorer, ScoringContext
from .routing.waypoint_generator import WaypointGenerator
from .routing.route_synthesizer import RouteSynthesizer, estimate_time
from .recommendations import get_route_recommendations
from .evaluation import calculate_risk, evaluation_recommendations, RiskAssessment

__all__ = [
    'PointSafetyScorer',
    'ScoringContext',
    'WaypointGenerator',
    'RouteSynthesizer',
    'estimate_time',
    'get_route_recommendations',
    'calculate_risk',
    'evaluation_recommendations',
    'RiskAssessment'
]
