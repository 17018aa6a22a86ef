"""
Pydantic schemas for the safe routing API.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class LocationRequest(BaseModel):
    """Request model for a single location."""
    lat: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    lng: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    address: Optional[str] = Field(default=None, description="Human readable address")


class RouteRequest(BaseModel):
    """Request model for route calculation."""
    start: LocationRequest = Field(..., description="Starting location")
    destination: LocationRequest = Field(..., description="Destination location")


class WaypointSchema(BaseModel):
    lat: float
    lng: float
    safetyScore: float = Field(..., ge=0.0, le=100.0)
    severity: Optional[Literal['high', 'medium']] = None
    index: Optional[int] = None


class EstimatedTimeSchema(BaseModel):
    hours: float
    minutes: int


class RouteSchema(BaseModel):
    """A synthesized route alternative."""
    id: Literal['safest', 'fastest', 'balanced']
    name: str = ""
    description: str = ""
    waypoints: List[WaypointSchema]
    safetyScore: int = Field(..., ge=0, le=100, description="Route safety score (100 = safest)")
    distance: float = Field(..., ge=0.0, description="Route distance in kilometers")
    estimatedTime: EstimatedTimeSchema
    dangerousPoints: List[WaypointSchema] = []
    color: str = ""
    icon: str = ""
    recommended: bool = False


class RoutesResponse(BaseModel):
    """Response model for route calculation."""
    success: bool = Field(..., description="Whether the route calculation was successful")
    message: str = Field(..., description="Status message")
    routes: List[RouteSchema] = Field(default_factory=list, description="Routes, safest first")
    recommended: Optional[str] = Field(default=None, description="Id of the recommended route")


class RecommendationSchema(BaseModel):
    priority: Literal['high', 'medium', 'low']
    icon: str
    message: str
    action: Optional[str] = None


class RecommendationsRequest(BaseModel):
    route: RouteSchema


class RecommendationsResponse(BaseModel):
    route_id: str
    recommendations: List[RecommendationSchema]


class HistoryRequest(BaseModel):
    """Request model for saving a confirmed route."""
    route: RouteSchema
    start: LocationRequest
    destination: LocationRequest


class HistoryResponse(BaseModel):
    success: bool
    message: str
    record_id: Optional[int] = None


class StatisticsSchema(BaseModel):
    totalRoutes: int
    avgSafetyScore: int
    totalDistance: float
    safeRoutesPercentage: int
    riskyRoutesPercentage: int
    mostCommonStartArea: str
    mostCommonEndArea: str


class StatisticsResponse(BaseModel):
    success: bool = True
    statistics: Optional[StatisticsSchema] = Field(default=None, description="Null when history is empty")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    storage_path: str = Field(..., description="Location of the local store")
    reports_count: int = Field(..., description="Number of community reports stored")
    evaluations_count: int = Field(..., description="Number of self-evaluations stored")
    history_count: int = Field(..., description="Number of routes in history")
