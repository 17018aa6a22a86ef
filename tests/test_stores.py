import json
from datetime import datetime, timezone

import pytest

from camina_segura.data.data_loader import load_reports, seed_reports
from camina_segura.data.models import CommunityReport, GeoPoint, SafetyEvaluation
from camina_segura.data.stores import (
    EVALUATIONS_KEY, HISTORY_KEY, REPORTS_KEY, EvaluationStore, InMemoryKeyValueStore,
    ReportNotFoundError, ReportStore, SQLiteKeyValueStore, new_record_id
)

from conftest import END, MIDPOINT, NOW, START


def test_sqlite_store_round_trips_and_persists(tmp_path):
    db_path = tmp_path / "nested" / "store.db"
    store = SQLiteKeyValueStore(db_path)
    assert store.get("missing") is None

    store.set("greeting", "hola")
    store.update("greeting", lambda value: value + " mundo")

    reopened = SQLiteKeyValueStore(db_path)
    assert reopened.get("greeting") == "hola mundo"


def test_sqlite_update_rolls_back_on_error(tmp_path):
    store = SQLiteKeyValueStore(tmp_path / "store.db")
    store.set("key", "before")

    def fail(_value):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        store.update("key", fail)
    assert store.get("key") == "before"


def test_report_store_on_sqlite(tmp_path):
    reports = ReportStore(SQLiteKeyValueStore(tmp_path / "store.db"))
    reports.add(CommunityReport(id=7, type="isolated", location=MIDPOINT, timestamp=NOW))
    assert [r.id for r in reports.list_reports()] == [7]


def test_reports_are_stored_newest_first(report_store, make_report):
    make_report("harassment", MIDPOINT)
    make_report("safe_zone", MIDPOINT)
    assert [r.type for r in report_store.list_reports()] == ["safe_zone", "harassment"]


@pytest.mark.parametrize("raw", ["{broken", "{\"reports\": []}", "42"])
def test_unreadable_collection_reads_as_empty(kv_store, report_store, raw, caplog):
    kv_store.set(REPORTS_KEY, raw)
    assert report_store.list_reports() == []
    assert caplog.records


def test_malformed_records_are_skipped(kv_store, report_store):
    kv_store.set(REPORTS_KEY, json.dumps([
        {"id": 1, "type": "harassment", "location": [41.39, 2.17], "timestamp": "2025-03-12T10:00:00Z"},
        {"id": 2, "type": "harassment"},
        "not a record",
    ]))
    assert [r.id for r in report_store.list_reports()] == [1]


def test_legacy_report_and_evaluation_formats(kv_store, report_store, evaluation_store):
    kv_store.set(REPORTS_KEY, json.dumps([
        {"id": 1, "type": "lighting", "location": {"lat": 41.39, "lng": 2.17},
         "timestamp": 1741773600000},
    ]))
    kv_store.set(EVALUATIONS_KEY, json.dumps([
        {"id": 2, "timestamp": "2025-03-12T10:00:00", "riskScore": 40,
         "location": {"lat": 41.39, "lng": 2.17}},
    ]))

    report = report_store.list_reports()[0]
    assert report.location == GeoPoint(41.39, 2.17)
    assert report.timestamp == datetime(2025, 3, 12, 10, 0, tzinfo=timezone.utc)

    evaluation = evaluation_store.list_evaluations()[0]
    assert evaluation.percentage == 40.0
    assert evaluation.timestamp.tzinfo is not None


def test_report_location_is_written_as_pair(kv_store, make_report):
    make_report("isolated", GeoPoint(41.3, 2.1))
    stored = json.loads(kv_store.get(REPORTS_KEY))
    assert stored[0]["location"] == [41.3, 2.1]
    assert stored[0]["timestamp"].startswith("2025-03-12T14:00:00")


def test_helpful_and_verify_counters(report_store, make_report):
    report = make_report("harassment", MIDPOINT)

    report_store.mark_helpful(report.id)
    report_store.mark_helpful(str(report.id))
    updated = report_store.verify(report.id)

    assert updated.verified_count == 1
    assert report_store.get_report(report.id).helpful == 2


def test_missing_report_raises(report_store):
    with pytest.raises(ReportNotFoundError):
        report_store.mark_helpful(999)
    with pytest.raises(KeyError):
        report_store.get_report(999)


def test_evaluation_store_is_capped(kv_store):
    store = EvaluationStore(kv_store, limit=3)
    for i in range(5):
        store.add(SafetyEvaluation(id=i, timestamp=NOW, percentage=float(i * 10)))
    assert [e.id for e in store.list_evaluations()] == [4, 3, 2]


def test_new_record_id_skips_taken_values():
    base = int(NOW.timestamp() * 1000)
    assert new_record_id(NOW) == base
    assert new_record_id(NOW, [base, base + 1, "x"]) == base + 2


def test_load_bundled_sample_reports():
    reports = load_reports(now=NOW)
    assert len(reports) == 5
    assert {r.type for r in reports} == {"harassment", "poor_lighting", "safe_zone", "isolated", "suspicious"}
    harassment = next(r for r in reports if r.type == "harassment")
    assert (NOW - harassment.timestamp).total_seconds() == 2 * 3600


def test_load_reports_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_reports(str(tmp_path / "missing.json"))

    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError):
        load_reports(str(bad))

    wrong_shape = tmp_path / "wrong.json"
    wrong_shape.write_text("{\"items\": []}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_reports(str(wrong_shape))


def test_seed_reports_only_fills_empty_store():
    store = ReportStore(InMemoryKeyValueStore())
    reports = load_reports(now=NOW)

    assert seed_reports(store, reports) == 5
    assert seed_reports(store, reports) == 0

    stored = store.list_reports()
    assert len(stored) == 5
    timestamps = [r.timestamp for r in stored]
    assert timestamps == sorted(timestamps, reverse=True)


@pytest.mark.parametrize("overrides", [
    {"verifiedCount": float("inf")},
    {"helpful": float("inf")},
    {"timestamp": 1e300},
])
def test_out_of_range_report_numbers_are_skipped(kv_store, engine, overrides):
    good = {"id": 1, "type": "harassment", "location": [41.39, 2.17], "timestamp": "2025-03-12T10:00:00Z"}
    bad = dict(good, id=2, **overrides)
    kv_store.set(REPORTS_KEY, json.dumps([bad, good]))

    assert [r.id for r in engine.report_store.list_reports()] == [1]
    assert len(engine.calculate_safe_routes(START, END)) == 3


def test_out_of_range_history_duration_is_skipped(kv_store, engine):
    record = {
        "id": 1, "timestamp": "2025-03-12T10:00:00Z",
        "start": {"lat": START.lat, "lng": START.lng}, "end": {"lat": END.lat, "lng": END.lng},
        "selectedRoute": "safest", "safetyScore": 80, "distance": 0.7, "duration": 8
    }
    kv_store.set(HISTORY_KEY, json.dumps([dict(record, id=2, duration=float("inf")), record]))

    stats = engine.get_route_statistics()
    assert stats.total_routes == 1
    assert stats.avg_safety_score == 80


def test_unreadable_counter_restarts_from_zero(kv_store, report_store):
    kv_store.set(REPORTS_KEY, json.dumps([
        {"id": 1, "type": "isolated", "location": [41.39, 2.17],
         "timestamp": "2025-03-12T10:00:00Z", "helpful": "lots"}
    ]))
    assert report_store.mark_helpful(1).helpful == 1


def test_evaluation_location_with_long_key_names(kv_store, evaluation_store):
    kv_store.set(EVALUATIONS_KEY, json.dumps([
        {"id": 3, "timestamp": "2025-03-12T10:00:00Z", "percentage": 55.6,
         "location": {"latitude": 41.39, "longitude": 2.17, "timestamp": 1741773600000}}
    ]))
    evaluation = evaluation_store.list_evaluations()[0]
    assert evaluation.location == GeoPoint(41.39, 2.17)
