"""
Data records, persistence and distance utilities for safe routing.

This module contains:
- Domain records (points, reports, evaluations, routes, history)
- Local key-value stores for reports, evaluations and history
- Distance calculations
"""

from .models import (
    GeoPoint, Location, CommunityReport, SafetyEvaluation, Waypoint,
    EstimatedTime, Route, Recommendation, RouteHistoryRecord, RouteStatistics
)
from .distance_utils import haversine_distance, haversine_km, calculate_route_distance
from .stores import (
    KeyValueStore, InMemoryKeyValueStore, SQLiteKeyValueStore,
    ReportStore, EvaluationStore, HistoryStore, ReportNotFoundError
)
from .data_loader import load_reports, seed_reports

__all__ = [
    'GeoPoint',
    'Location',
    'CommunityReport',
    'SafetyEvaluation',
    'Waypoint',
    'EstimatedTime',
    'Route',
    'Recommendation',
    'RouteHistoryRecord',
    'RouteStatistics',
    'haversine_distance',
    'haversine_km',
    'calculate_route_distance',
    'KeyValueStore',
    'InMemoryKeyValueStore',
    'SQLiteKeyValueStore',
    'ReportStore',
    'EvaluationStore',
    'HistoryStore',
    'ReportNotFoundError',
    'load_reports',
    'seed_reports'
]
