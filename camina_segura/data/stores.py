"""
Local key-value persistence for community reports, self-evaluations and
route history.

Collections are stored as JSON arrays under fixed keys, most recent first.
Unreadable data never fails a caller: a corrupt key reads as an empty
collection and a malformed record is skipped, both with a warning.
"""

import json
import logging
import sqlite3
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .models import (
    CommunityReport, RecordId, RouteHistoryRecord, SafetyEvaluation, ensure_aware
)

logger = logging.getLogger(__name__)

REPORTS_KEY = 'communityReports'
EVALUATIONS_KEY = 'safetyEvaluations'
HISTORY_KEY = 'routeHistory'


class ReportNotFoundError(KeyError):
    """Raised when a community report id does not exist."""


def new_record_id(now: datetime, existing: Iterable[Any] = ()) -> int:
    """Millisecond timestamp id, bumped past any id already in use."""
    candidate = int(ensure_aware(now).timestamp() * 1000)
    taken = {value for value in existing if isinstance(value, int)}
    while candidate in taken:
        candidate += 1
    return candidate


class KeyValueStore(ABC):
    """Minimal string key-value store, the stand-in for device local storage."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    def update(self, key: str, fn: Callable[[Optional[str]], str]) -> str:
        """Read-modify-write a key; returns the stored value."""
        value = fn(self.get(key))
        self.set(key, value)
        return value


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class SQLiteKeyValueStore(KeyValueStore):
    """
    SQLite-backed key-value store.

    Every operation opens its own connection, so the store can be shared
    by request handlers without holding a connection open.
    """

    def __init__(self, db_path: Union[str, Path] = "camina_segura.db"):
        """
        Initialize the store, creating the database file if needed.

        Args:
            db_path: Path of the SQLite database file
        """
        self.db_path = Path(db_path)
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database()
        logger.info(f"SQLiteKeyValueStore initialized at {self.db_path}")

    def _init_database(self):
        """Initialize the key-value table."""
        with self._get_db_connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')
            conn.commit()

    @contextmanager
    def _get_db_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._get_db_connection() as conn:
            row = conn.execute('SELECT value FROM kv_store WHERE key = ?', (key,)).fetchone()
        return row['value'] if row else None

    def set(self, key: str, value: str) -> None:
        with self._get_db_connection() as conn:
            self._write(conn, key, value)
            conn.commit()

    def update(self, key: str, fn: Callable[[Optional[str]], str]) -> str:
        with self._get_db_connection() as conn:
            conn.isolation_level = None
            conn.execute('BEGIN IMMEDIATE')
            try:
                row = conn.execute('SELECT value FROM kv_store WHERE key = ?', (key,)).fetchone()
                value = fn(row['value'] if row else None)
                self._write(conn, key, value)
                conn.execute('COMMIT')
            except Exception:
                conn.execute('ROLLBACK')
                raise
        return value

    @staticmethod
    def _write(conn: sqlite3.Connection, key: str, value: str) -> None:
        conn.execute(
            'INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)',
            (key, value, datetime.now(timezone.utc).isoformat())
        )


class JsonListStore:
    """A JSON array of records kept under a single key."""

    key: str = ''

    def __init__(self, kv_store: KeyValueStore):
        self.kv_store = kv_store

    def _decode(self, raw: Optional[str]) -> List[Dict[str, Any]]:
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt JSON under '{self.key}', treating as empty: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"Expected a list under '{self.key}', got {type(data).__name__}")
            return []
        return [item for item in data if isinstance(item, dict)]

    def load_raw(self) -> List[Dict[str, Any]]:
        return self._decode(self.kv_store.get(self.key))

    def _modify(self, fn: Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]) -> None:
        self.kv_store.update(self.key, lambda raw: json.dumps(fn(self._decode(raw))))

    def _parse_all(self, parser: Callable[[Dict[str, Any]], Any]) -> List[Any]:
        records = []
        for item in self.load_raw():
            try:
                records.append(parser(item))
            except (KeyError, TypeError, ValueError, ArithmeticError) as e:
                logger.warning(f"Skipping malformed record in '{self.key}': {e}")
        return records


class ReportStore(JsonListStore):
    """Community reports. The routing engine only ever reads from it."""

    key = REPORTS_KEY

    def list_reports(self) -> List[CommunityReport]:
        return self._parse_all(CommunityReport.from_dict)

    def add(self, report: CommunityReport) -> CommunityReport:
        self._modify(lambda items: [report.to_dict()] + items)
        logger.info(f"Stored community report {report.id} ({report.type})")
        return report

    def get_report(self, report_id: RecordId) -> CommunityReport:
        for report in self.list_reports():
            if str(report.id) == str(report_id):
                return report
        raise ReportNotFoundError(report_id)

    def mark_helpful(self, report_id: RecordId) -> CommunityReport:
        return self._increment(report_id, 'helpful')

    def verify(self, report_id: RecordId) -> CommunityReport:
        return self._increment(report_id, 'verifiedCount')

    def _increment(self, report_id: RecordId, counter: str) -> CommunityReport:
        found: List[Dict[str, Any]] = []

        def bump(items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
            for item in items:
                if str(item.get('id')) == str(report_id):
                    item[counter] = _stored_count(item.get(counter)) + 1
                    found.append(item)
            return items

        self._modify(bump)
        if not found:
            raise ReportNotFoundError(report_id)
        return CommunityReport.from_dict(found[0])


class EvaluationStore(JsonListStore):
    """Self-evaluation results, capped to the most recent entries."""

    key = EVALUATIONS_KEY

    def __init__(self, kv_store: KeyValueStore, limit: int = 50):
        super().__init__(kv_store)
        self.limit = limit

    def list_evaluations(self) -> List[SafetyEvaluation]:
        return self._parse_all(SafetyEvaluation.from_dict)

    def add(self, evaluation: SafetyEvaluation) -> SafetyEvaluation:
        self._modify(lambda items: ([evaluation.to_dict()] + items)[:self.limit])
        logger.info(f"Stored safety evaluation {evaluation.id} ({evaluation.percentage:.0f}%)")
        return evaluation


class HistoryStore(JsonListStore):
    """Append-only route history, most recent first, capped at ``limit``."""

    key = HISTORY_KEY

    def __init__(self, kv_store: KeyValueStore, limit: int = 50):
        super().__init__(kv_store)
        self.limit = limit

    def list(self) -> List[RouteHistoryRecord]:
        return self._parse_all(RouteHistoryRecord.from_dict)

    def append(self, record: RouteHistoryRecord) -> None:
        self._modify(lambda items: ([record.to_dict()] + items)[:self.limit])

    def ids(self) -> List[Any]:
        return [item.get('id') for item in self.load_raw()]


def _stored_count(value: Any) -> int:
    """Counter value as stored, or 0 when it is not a finite number."""
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Resetting unreadable counter value {value!r}")
        return 0
