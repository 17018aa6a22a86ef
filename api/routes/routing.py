"""
FastAPI routes for safe routing endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.schemas.routing import (
    HealthResponse,
    HistoryRequest,
    HistoryResponse,
    RecommendationsRequest,
    RecommendationsResponse,
    RouteRequest,
    RoutesResponse,
    StatisticsResponse
)
from api.services.routing_service import SafeRoutingService, get_routing_service

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/api/routing", tags=["routing"])


@router.get("/health", response_model=HealthResponse, summary="Health Check")
async def health_check(service: SafeRoutingService = Depends(get_routing_service)):
    """
    Check the health status of the routing service.

    Returns:
        HealthResponse: Service health information
    """
    try:
        return service.get_health_status()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Health check failed"
        )


@router.post("/calculate", response_model=RoutesResponse, summary="Calculate Safe Routes")
async def calculate_routes(request: RouteRequest,
                           service: SafeRoutingService = Depends(get_routing_service)):
    """
    Calculate the safest, fastest and balanced routes between two locations.

    Routes are sorted by safety score and the first one is marked as
    recommended.

    Example:
        ```json
        {
            "start": {"lat": 41.3874, "lng": 2.1686, "address": "Plaça de Catalunya"},
            "destination": {"lat": 41.3900, "lng": 2.1754}
        }
        ```
    """
    try:
        logger.info(f"Route calculation request from ({request.start.lat}, {request.start.lng}) "
                    f"to ({request.destination.lat}, {request.destination.lng})")
        return service.calculate_routes(request)
    except ValueError as e:
        logger.warning(f"Route calculation validation error: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Route calculation failed with unexpected error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during route calculation"
        )


@router.post("/recommendations", response_model=RecommendationsResponse,
             summary="Route Recommendations")
async def route_recommendations(request: RecommendationsRequest,
                                service: SafeRoutingService = Depends(get_routing_service)):
    """
    Get safety advice for a route returned by `/calculate`.
    """
    return RecommendationsResponse(
        route_id=request.route.id,
        recommendations=service.get_recommendations(request.route)
    )


@router.post("/history", response_model=HistoryResponse, summary="Save Route To History")
async def save_route(request: HistoryRequest,
                     service: SafeRoutingService = Depends(get_routing_service)):
    """
    Record the route the user chose. Only the 50 most recent routes are kept.
    """
    return service.save_to_history(request)


@router.get("/statistics", response_model=StatisticsResponse, summary="Route Statistics")
async def route_statistics(service: SafeRoutingService = Depends(get_routing_service)):
    """
    Usage statistics over the route history; `statistics` is null when empty.
    """
    return service.get_statistics()


@router.get("/geojson/{route_id}", summary="Route GeoJSON")
async def route_geojson(route_id: str, service: SafeRoutingService = Depends(get_routing_service)):
    """
    GeoJSON FeatureCollection for a route from the most recent calculation.
    """
    collection = service.get_route_geojson(route_id)
    if collection is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No calculated route '{route_id}'"
        )
    return collection


@router.get("/", summary="API Information")
async def get_api_info():
    """
    Get information about the safe routing API.
    """
    return {
        "api": "Camina Segura Safe Routing API",
        "version": "1.0.0",
        "description": "Heuristic safe routes from community reports and self-evaluations",
        "endpoints": {
            "POST /api/routing/calculate": "Calculate safest, fastest and balanced routes",
            "POST /api/routing/recommendations": "Safety advice for a route",
            "POST /api/routing/history": "Save a chosen route",
            "GET /api/routing/statistics": "Route history statistics",
            "GET /api/routing/geojson/{route_id}": "GeoJSON for a calculated route",
            "GET /api/routing/health": "Check service health status",
            "GET /api/routing/": "This information endpoint"
        }
    }
