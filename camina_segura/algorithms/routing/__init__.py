from .waypoint_generator import WaypointGenerator
from .route_synthesizer import (
    RouteSynthesizer, RouteProfile, build_route_profiles, estimate_time,
    calculate_route_safety_score, identify_dangerous_points
)

__all__ = [
    'WaypointGenerator',
    'RouteSynthesizer',
    'RouteProfile',
    'build_route_profiles',
    'estimate_time',
    'calculate_route_safety_score',
    'identify_dangerous_points'
]
