"""
Community report loader for seeding the local store.
"""

import json
import logging
import os
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from .models import CommunityReport, format_timestamp
from .stores import ReportStore

logger = logging.getLogger(__name__)

DEFAULT_REPORTS_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'sample_reports.json')


def load_reports(data_path: Optional[str] = None, now: Optional[datetime] = None) -> List[CommunityReport]:
    """
    Load community reports from a JSON file.

    The file holds either a list of reports or ``{"reports": [...]}``.
    A report may give ``hoursAgo`` instead of ``timestamp``; it is then
    placed relative to ``now``.

    Args:
        data_path: Path to the JSON file (defaults to the bundled sample)
        now: Reference time for ``hoursAgo`` entries

    Returns:
        List of community reports

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid report JSON
    """
    if data_path is None:
        data_path = DEFAULT_REPORTS_PATH

    if not os.path.exists(data_path):
        raise FileNotFoundError(f"Report data file not found: {data_path}")

    logger.info(f"Loading community reports from: {data_path}")

    try:
        with open(data_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON format in report data file: {e}")

    if isinstance(data, dict):
        data = data.get('reports')
    if not isinstance(data, list):
        raise ValueError("Report data must be a list or an object with a 'reports' key")

    now = now or datetime.now().astimezone()
    reports = []
    for item in data:
        reports.append(CommunityReport.from_dict(_resolve_timestamp(item, now)))

    logger.info(f"Loaded {len(reports)} community reports")
    return reports


def seed_reports(store: ReportStore, reports: List[CommunityReport]) -> int:
    """
    Store reports only when the store holds none yet.

    Returns:
        Number of reports written
    """
    if store.load_raw():
        return 0
    # Stored newest first; add() prepends, so insert oldest first
    for report in sorted(reports, key=lambda r: r.timestamp):
        store.add(report)
    return len(reports)


def _resolve_timestamp(item: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    if 'timestamp' in item or 'hoursAgo' not in item:
        return item
    resolved = dict(item)
    resolved['timestamp'] = format_timestamp(now - timedelta(hours=float(resolved.pop('hoursAgo'))))
    return resolved
