"""
Pydantic schemas for community reports and safety self-evaluations.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from api.schemas.routing import RecommendationSchema

ReportType = Literal['harassment', 'suspicious', 'isolated', 'poor_lighting', 'safe_zone',
                     'lighting', 'safe']


class ReportCreateRequest(BaseModel):
    """Request model for submitting a community report."""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    type: ReportType = Field(..., description="Report category")
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    isAnonymous: bool = False
    username: Optional[str] = None


class ReportSchema(BaseModel):
    id: Union[int, str]
    type: str
    title: str = ""
    description: str = ""
    location: List[float]
    timestamp: str
    isAnonymous: bool = False
    username: Optional[str] = None
    verifiedCount: int = 0
    helpful: int = 0


class ReportListResponse(BaseModel):
    count: int
    reports: List[ReportSchema]


class EvaluationRequest(BaseModel):
    """
    Questionnaire answers keyed by question id.

    Each answer is an option value (``"dark"``) or ``{"value": ..., "risk": 0-3}``.
    """
    answers: Dict[str, Any] = Field(..., description="Answers keyed by question id")
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)


class EvaluationResponse(BaseModel):
    evaluation_id: int
    level: str
    percentage: float = Field(..., ge=0.0, le=100.0)
    recommendations: List[RecommendationSchema]


class EvaluationSchema(BaseModel):
    id: Union[int, str]
    timestamp: str
    location: Optional[Dict[str, float]] = None
    level: Optional[str] = None
    percentage: float
    responses: Dict[str, Any] = {}


class EvaluationListResponse(BaseModel):
    count: int
    evaluations: List[EvaluationSchema]


class PointScoreResponse(BaseModel):
    lat: float
    lng: float
    safetyScore: float = Field(..., ge=0.0, le=100.0)
