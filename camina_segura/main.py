#!/usr/bin/env python3
"""
Camina Segura - Command Line Demo

Calculates the three route alternatives across central Barcelona using the
bundled sample community reports.

Run:  python -m camina_segura.main [--seed 42] [--db path/to/store.db]
"""

import argparse
import random
import sys

from .config import RoutingConfig
from .data import InMemoryKeyValueStore, Location, ReportStore, SQLiteKeyValueStore, load_reports, seed_reports
from .safe_routing import SafeRoutingEngine


def main(argv=None):
    """
    Demonstrate route synthesis, recommendations and history statistics.
    """
    parser = argparse.ArgumentParser(description="Camina Segura safe routing demo")
    parser.add_argument("--seed", type=int, default=None, help="Seed for repeatable waypoint jitter")
    parser.add_argument("--db", default=None, help="SQLite store (default: in-memory)")
    args = parser.parse_args(argv)

    print("🚶‍♀️ Camina Segura - Safe Routing Demo")
    print("=" * 50)

    kv_store = SQLiteKeyValueStore(args.db) if args.db else InMemoryKeyValueStore()

    # Load sample reports
    print("\n📊 Loading community reports...")
    try:
        reports = load_reports()
        written = seed_reports(ReportStore(kv_store), reports)
        print(f"✓ Loaded {len(reports)} sample reports ({written} stored)")
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error loading reports: {e}")
        return 1

    start = Location(41.3874, 2.1686, "Plaça de Catalunya")
    end = Location(41.3900, 2.1754, "Arc de Triomf")

    print(f"\n🗺️ Test route:")
    print(f"   Start: {start.address} ({start.lat}, {start.lng})")
    print(f"   End: {end.address} ({end.lat}, {end.lng})")

    rng = random.Random(args.seed) if args.seed is not None else None
    engine = SafeRoutingEngine.from_kv_store(kv_store, RoutingConfig.create_default_config(), rng=rng)

    print("\n🔍 Calculating safe routes...")
    routes = engine.calculate_safe_routes(start, end)

    for route in routes:
        marker = " ⭐ recommended" if route.recommended else ""
        print(f"\n{route.icon} {route.name}{marker}")
        print(f"   Safety score: {route.safety_score}")
        print(f"   Distance: {route.distance_km:.2f} km")
        print(f"   Walking time: {route.estimated_time.minutes} min")
        print(f"   Danger points: {len(route.dangerous_points)}")

    chosen = routes[0]
    recommendations = engine.get_route_recommendations(chosen)
    if recommendations:
        print(f"\n🎯 Advice for {chosen.name}:")
        for rec in recommendations:
            print(f"   {rec.icon} [{rec.priority}] {rec.message}")

    engine.save_route_to_history(chosen, start, end)
    stats = engine.get_route_statistics()
    if stats:
        print(f"\n📈 History: {stats.total_routes} route(s), avg score {stats.avg_safety_score}, "
              f"{stats.total_distance_km} km total")

    print("\n✅ Demo completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
