"""
Camina Segura Safe Routing API - FastAPI Main Application

A RESTful API for heuristic safe routes built from community reports and
personal safety self-evaluations.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uvicorn

from api.routes.routing import router as routing_router
from api.routes.community import router as community_router
from api.services.routing_service import get_routing_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle - startup and shutdown events.
    """
    # Startup
    logger.info("Starting Camina Segura Safe Routing API...")

    health = get_routing_service().get_health_status()
    logger.info(f"✓ Routing service ready with {health.reports_count} community reports "
                f"and {health.evaluations_count} self-evaluations ({health.storage_path})")

    yield

    # Shutdown
    logger.info("Shutting down Camina Segura Safe Routing API...")


# Create FastAPI application
app = FastAPI(
    title="Camina Segura Safe Routing API",
    description="""
    **Safer walking routes from crowdsourced safety reports**

    Routes are straight-line paths between two points, nudged toward known
    safe places and scored from nearby community reports, past
    self-evaluations and the time of day.

    ## Features

    - **Three Alternatives**: Safest, fastest and balanced routes
    - **Safety Advice**: Recommendations for the chosen route
    - **Route History**: Last 50 routes with usage statistics
    - **Community Reports**: Submit, verify and upvote safety reports
    - **Self-Evaluation**: Personal risk questionnaire
    - **GeoJSON Output**: Standard geographic data format

    ## Quick Start

    1. Check service health: `GET /api/routing/health`
    2. Calculate routes: `POST /api/routing/calculate`
    3. Save the chosen one: `POST /api/routing/history`
    """,
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware for web applications
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Custom exception handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors with detailed information.
    """
    logger.warning(f"Validation error for {request.url}: {exc}")
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "validation_error",
            "message": "Request validation failed",
            "details": jsonable_errors(exc)
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """
    Handle unexpected errors gracefully.
    """
    logger.error(f"Unexpected error for {request.url}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
            "details": None
        }
    )


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception objects that JSON cannot encode
    return [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]


# Include routers
app.include_router(routing_router)
app.include_router(community_router)


@app.get("/", tags=["general"])
async def root():
    """
    API root endpoint with basic information.
    """
    return {
        "api": "Camina Segura Safe Routing API",
        "version": "1.0.0",
        "status": "operational",
        "documentation": "/docs",
        "health_check": "/api/routing/health"
    }


@app.get("/health", tags=["general"])
async def api_health():
    """
    Simple health check endpoint.
    """
    try:
        service_health = get_routing_service().get_health_status()
        return {
            "api_status": "healthy",
            "service_status": service_health.status,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "api_status": "unhealthy",
                "error": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )


# Development server configuration
if __name__ == "__main__":
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
