"""
Camina Segura - Safe Routing Engine

Heuristic safety scoring and safe-route synthesis from crowdsourced
community reports and personal safety self-evaluations.

## Quick Start

```python
from camina_segura import SafeRoutingEngine, SQLiteKeyValueStore, Location

engine = SafeRoutingEngine.from_kv_store(SQLiteKeyValueStore("camina_segura.db"))

start = Location(41.3874, 2.1686, "Plaça de Catalunya")
end = Location(41.3900, 2.1754, "Arc de Triomf")

routes = engine.calculate_safe_routes(start, end)
chosen = routes[0]  # recommended route
advice = engine.get_route_recommendations(chosen)
engine.save_route_to_history(chosen, start, end)
```

## Main Components

- **SafeRoutingEngine**: Entry points (routes, recommendations, history, statistics)
- **PointSafetyScorer**: 0-100 safety score per coordinate
- **RouteSynthesizer**: Safest / fastest / balanced route alternatives
- **RouteHistory**: Capped route log and usage statistics
- **RoutingConfig**: Configuration management

## Architecture

- `algorithms/`: Scoring, routing, recommendations and self-evaluation
- `data/`: Records, key-value stores and distance utilities
- `history/`: Route history and statistics
- `export/`: GeoJSON export
- `config/`: Configuration management
"""

from .config import RoutingConfig
from .clock import Clock, SystemClock, FixedClock
from .data import (
    GeoPoint, Location, CommunityReport, SafetyEvaluation, Route,
    SQLiteKeyValueStore, InMemoryKeyValueStore, ReportStore, EvaluationStore, HistoryStore,
    haversine_km, load_reports
)
from .algorithms import PointSafetyScorer, RouteSynthesizer, calculate_risk
from .history import RouteHistory
from .export import route_to_geojson
from .safe_routing import SafeRoutingEngine

# Version information
__version__ = "1.0.0"

# Public API
__all__ = [
    # Main interfaces
    'SafeRoutingEngine',
    'RoutingConfig',

    # Core algorithms
    'PointSafetyScorer',
    'RouteSynthesizer',
    'RouteHistory',
    'calculate_risk',

    # Records and storage
    'GeoPoint',
    'Location',
    'CommunityReport',
    'SafetyEvaluation',
    'Route',
    'SQLiteKeyValueStore',
    'InMemoryKeyValueStore',
    'ReportStore',
    'EvaluationStore',
    'HistoryStore',

    # Utilities
    'Clock',
    'SystemClock',
    'FixedClock',
    'haversine_km',
    'load_reports',
    'route_to_geojson',

    # Metadata
    '__version__'
]
