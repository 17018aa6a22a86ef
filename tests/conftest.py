"""
Shared fixtures: in-memory stores, a frozen clock and seeded randomness.
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from camina_segura.clock import FixedClock
from camina_segura.config.routing_config import RoutingConfig
from camina_segura.data.models import CommunityReport, GeoPoint, SafetyEvaluation
from camina_segura.data.stores import EvaluationStore, HistoryStore, InMemoryKeyValueStore, ReportStore
from camina_segura.algorithms.scoring.point_scorer import PointSafetyScorer
from camina_segura.safe_routing import SafeRoutingEngine

# Afternoon: no time-of-day adjustment applies
NOW = datetime(2025, 3, 12, 14, 0, tzinfo=timezone.utc)

START = GeoPoint(41.3874, 2.1686)
END = GeoPoint(41.3900, 2.1754)
MIDPOINT = GeoPoint((START.lat + END.lat) / 2, (START.lng + END.lng) / 2)


def at_hour(hour: int) -> datetime:
    return NOW.replace(hour=hour)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def report_store(kv_store):
    return ReportStore(kv_store)


@pytest.fixture
def evaluation_store(kv_store):
    return EvaluationStore(kv_store)


@pytest.fixture
def history_store(kv_store):
    return HistoryStore(kv_store)


@pytest.fixture
def config():
    return RoutingConfig()


@pytest.fixture
def scorer(report_store, evaluation_store, config, clock):
    return PointSafetyScorer(report_store, evaluation_store, config, clock)


@pytest.fixture
def engine(kv_store, clock):
    return SafeRoutingEngine.from_kv_store(kv_store, clock=clock, rng=random.Random(42))


@pytest.fixture
def make_report(report_store):
    """Store a report of the given type at a point, ``age`` before NOW."""
    counter = iter(range(1, 10_000))

    def _make(report_type: str, point: GeoPoint, age: timedelta = timedelta(0)) -> CommunityReport:
        report = CommunityReport(
            id=next(counter),
            type=report_type,
            location=point,
            timestamp=NOW - age
        )
        report_store.add(report)
        return report

    return _make


@pytest.fixture
def make_evaluation(evaluation_store):
    counter = iter(range(1, 10_000))

    def _make(percentage: float, point=None) -> SafetyEvaluation:
        evaluation = SafetyEvaluation(
            id=next(counter),
            timestamp=NOW,
            percentage=percentage,
            location=point
        )
        evaluation_store.add(evaluation)
        return evaluation

    return _make
