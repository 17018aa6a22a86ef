#!/usr/bin/env python3
"""
Startup script for the Camina Segura Safe Routing API server.

This script starts the FastAPI server with proper configuration.
"""

import os
import uvicorn
import argparse

from api.services.routing_service import DB_PATH_ENV, SEED_DEMO_ENV


def main():
    """Start the FastAPI server."""
    parser = argparse.ArgumentParser(description="Camina Segura Safe Routing API Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"],
                        help="Log level")
    parser.add_argument("--db", default=None, help="SQLite file for reports, evaluations and history")
    parser.add_argument("--seed-demo", action="store_true",
                        help="Load sample community reports into an empty store")

    args = parser.parse_args()

    # The app builds its service from the environment, also under --reload
    if args.db:
        os.environ[DB_PATH_ENV] = os.path.abspath(args.db)
    if args.seed_demo:
        os.environ[SEED_DEMO_ENV] = "1"

    print("🚀 Starting Camina Segura Safe Routing API Server")
    print(f"📍 URL: http://{args.host}:{args.port}")
    print(f"📚 Documentation: http://{args.host}:{args.port}/docs")
    print(f"🔍 Health check: http://{args.host}:{args.port}/health")
    print("-" * 50)

    # Ensure we're in the right directory
    os.chdir(os.path.dirname(os.path.abspath(__file__)))

    # Start the server
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        access_log=True
    )


if __name__ == "__main__":
    main()
