"""
Configuration management for safe-routing and safety-scoring parameters.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass
class RoutingConfig:
    """Configuration parameters for the safety scorer and route synthesizer."""

    # Community Report Scoring
    report_radius_km: float = 0.2  # reports closer than this affect a point
    report_decay_days: float = 30.0  # linear relevance decay to zero
    report_weights: Dict[str, float] = field(default_factory=lambda: {
        'harassment': -30.0,
        'suspicious': -25.0,
        'isolated': -15.0,
        'poor_lighting': -10.0,
        'safe_zone': 15.0
    })
    report_type_aliases: Dict[str, str] = field(default_factory=lambda: {
        'lighting': 'poor_lighting',
        'safe': 'safe_zone'
    })

    # Self-Evaluation Scoring
    evaluation_radius_km: float = 0.3
    evaluation_risk_factor: float = 0.3  # score -= factor * mean risk percentage

    # Time Of Day (start hour inclusive, end hour exclusive)
    night_hours: Tuple[int, int] = (22, 6)
    early_morning_hours: Tuple[int, int] = (6, 9)
    evening_hours: Tuple[int, int] = (18, 22)
    night_adjustment: float = -20.0
    early_morning_adjustment: float = 10.0
    evening_adjustment: float = -10.0

    # Score Bounds
    base_score: float = 100.0
    min_score: float = 0.0
    max_score: float = 100.0

    # Waypoint Generation
    jitter_degrees: float = 0.002  # total spread, each axis gets +/- half
    safest_waypoints: int = 8
    fastest_waypoints: int = 3
    balanced_waypoints: int = 5

    # Safe Zone Substitution
    safest_substitution_threshold: float = 40.0
    safest_substitution_radius_km: float = 0.3
    balanced_substitution_threshold: float = 30.0
    balanced_substitution_radius_km: float = 0.2
    safe_zone_search_limit: int = 3

    # Danger Points
    danger_threshold: float = 50.0  # waypoints below this are flagged
    high_severity_threshold: float = 30.0

    # Travel Speeds (km/h)
    travel_speeds_kmh: Dict[str, float] = field(default_factory=lambda: {
        'walking': 5.0,
        'transit': 20.0,
        'driving': 30.0,
        'cycling': 15.0
    })
    routing_mode: str = 'walking'

    # Recommendations
    high_risk_route_threshold: float = 40.0
    alert_route_threshold: float = 60.0
    long_route_km: float = 2.0
    reassurance_score_threshold: float = 70.0
    recent_report_hours: float = 24.0

    # History
    history_limit: int = 50
    evaluation_limit: int = 50
    safe_route_threshold: float = 70.0
    risky_route_threshold: float = 40.0
    area_precision: int = 2  # decimals for lat/lng area buckets (~1.1 km)

    def validate(self) -> None:
        """Validate configuration parameters."""
        if self.report_radius_km <= 0 or self.evaluation_radius_km <= 0:
            raise ValueError("search radii must be positive")
        if self.report_decay_days <= 0:
            raise ValueError("report_decay_days must be positive")
        if not self.min_score <= self.base_score <= self.max_score:
            raise ValueError("base_score must lie within [min_score, max_score]")
        for name in ('safest_substitution_threshold', 'balanced_substitution_threshold',
                     'danger_threshold', 'high_severity_threshold'):
            value = getattr(self, name)
            if not self.min_score <= value <= self.max_score:
                raise ValueError(f"{name} must be between {self.min_score} and {self.max_score}")
        if self.high_severity_threshold > self.danger_threshold:
            raise ValueError("high_severity_threshold must not exceed danger_threshold")
        if min(self.safest_waypoints, self.fastest_waypoints, self.balanced_waypoints) < 1:
            raise ValueError("each route needs at least one interior waypoint")
        if any(speed <= 0 for speed in self.travel_speeds_kmh.values()):
            raise ValueError("travel speeds must be positive")
        if self.routing_mode not in self.travel_speeds_kmh:
            raise ValueError(f"routing_mode '{self.routing_mode}' has no travel speed")
        if self.history_limit < 1 or self.evaluation_limit < 1:
            raise ValueError("history_limit and evaluation_limit must be >= 1")
        if self.jitter_degrees < 0:
            raise ValueError("jitter_degrees must not be negative")

    def canonical_report_type(self, report_type: str) -> str:
        """Map legacy report type spellings onto their canonical names."""
        return self.report_type_aliases.get(report_type, report_type)

    def time_of_day_adjustment(self, hour: int) -> float:
        """Score adjustment for the given wall-clock hour (0-23)."""
        if _in_window(hour, self.night_hours):
            return self.night_adjustment
        if _in_window(hour, self.early_morning_hours):
            return self.early_morning_adjustment
        if _in_window(hour, self.evening_hours):
            return self.evening_adjustment
        return 0.0

    def is_night(self, hour: int) -> bool:
        return _in_window(hour, self.night_hours)

    @classmethod
    def create_default_config(cls) -> 'RoutingConfig':
        """Create the standard configuration used by the app."""
        return cls()

    @classmethod
    def create_cautious_config(cls) -> 'RoutingConfig':
        """
        Create configuration that substitutes more aggressively.

        Safe zones are searched further away and at higher score thresholds,
        so more weak waypoints get pulled toward known safe places.
        """
        return cls(
            safest_substitution_threshold=50.0,
            safest_substitution_radius_km=0.5,
            balanced_substitution_threshold=40.0,
            balanced_substitution_radius_km=0.3,
            report_radius_km=0.3
        )


def _in_window(hour: int, window: Tuple[int, int]) -> bool:
    start, end = window
    if start <= end:
        return start <= hour < end
    # Window wraps past midnight
    return hour >= start or hour < end
