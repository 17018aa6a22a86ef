"""
FastAPI routes for community reports, self-evaluations and point scores.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from camina_segura.data.stores import ReportNotFoundError
from api.schemas.community import (
    EvaluationListResponse,
    EvaluationRequest,
    EvaluationResponse,
    PointScoreResponse,
    ReportCreateRequest,
    ReportListResponse,
    ReportSchema
)
from api.services.routing_service import SafeRoutingService, get_routing_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/community", tags=["community"])


@router.get("/reports", response_model=ReportListResponse, summary="List Community Reports")
async def list_reports(service: SafeRoutingService = Depends(get_routing_service)):
    return service.list_reports()


@router.post("/reports", response_model=ReportSchema, status_code=status.HTTP_201_CREATED,
             summary="Submit Community Report")
async def create_report(request: ReportCreateRequest,
                        service: SafeRoutingService = Depends(get_routing_service)):
    """
    Submit a geolocated safety report. Anonymous reports never store a username.
    """
    logger.info(f"New {request.type} report at ({request.lat}, {request.lng})")
    return service.create_report(request)


@router.post("/reports/{report_id}/helpful", response_model=ReportSchema, summary="Mark Report Helpful")
async def mark_helpful(report_id: str, service: SafeRoutingService = Depends(get_routing_service)):
    try:
        return service.mark_report_helpful(report_id)
    except ReportNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")


@router.post("/reports/{report_id}/verify", response_model=ReportSchema, summary="Verify Report")
async def verify_report(report_id: str, service: SafeRoutingService = Depends(get_routing_service)):
    try:
        return service.verify_report(report_id)
    except ReportNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Report {report_id} not found")


@router.post("/evaluations", response_model=EvaluationResponse, summary="Submit Self-Evaluation")
async def submit_evaluation(request: EvaluationRequest,
                            service: SafeRoutingService = Depends(get_routing_service)):
    """
    Score a safety questionnaire and store it.

    Example:
        ```json
        {
            "answers": {"time": "night", "people": "few", "lighting": "dim",
                        "area": "residential", "feeling": "alert", "transport": "far"},
            "lat": 41.3874,
            "lng": 2.1686
        }
        ```
    """
    try:
        return service.submit_evaluation(request)
    except ValueError as e:
        logger.warning(f"Invalid evaluation: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/evaluations", response_model=EvaluationListResponse, summary="List Self-Evaluations")
async def list_evaluations(service: SafeRoutingService = Depends(get_routing_service)):
    return service.list_evaluations()


@router.get("/score", response_model=PointScoreResponse, summary="Point Safety Score")
async def point_score(lat: float = Query(..., ge=-90, le=90),
                      lng: float = Query(..., ge=-180, le=180),
                      service: SafeRoutingService = Depends(get_routing_service)):
    """
    Safety score (0-100) at a coordinate right now.
    """
    return service.score_point(lat, lng)
