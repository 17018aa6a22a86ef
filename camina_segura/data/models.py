"""
Domain records for safety scoring, route synthesis and route history.

Records are plain dataclasses. Each persisted record knows how to read and
write the camelCase dict layout used by the local key-value store, so data
written by older clients (``[lat, lng]`` report locations, ``riskScore``
evaluations) still loads.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

RecordId = Union[int, str]


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so ages can always be compared."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_timestamp(value: Union[str, datetime, int, float]) -> datetime:
    """
    Parse a stored timestamp into an aware datetime.

    Accepts ISO-8601 strings (including a trailing ``Z``), datetimes and
    epoch milliseconds.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Epoch timestamp out of range: {value!r}") from e
    if isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        return ensure_aware(datetime.fromisoformat(text))
    raise ValueError(f"Unsupported timestamp value: {value!r}")


def format_timestamp(dt: datetime) -> str:
    return ensure_aware(dt).isoformat()


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        return {'lat': self.lat, 'lng': self.lng}

    @classmethod
    def from_value(cls, value: Any) -> 'GeoPoint':
        """
        Build a point from ``{'lat', 'lng'}``, ``{'latitude', 'longitude'}``,
        ``[lat, lng]`` or a GeoPoint.
        """
        if isinstance(value, GeoPoint):
            return cls(value.lat, value.lng)
        if isinstance(value, dict):
            if 'lat' not in value and 'latitude' in value:
                return cls(float(value['latitude']), float(value['longitude']))
            return cls(float(value['lat']), float(value['lng']))
        if isinstance(value, (list, tuple)) and len(value) >= 2:
            return cls(float(value[0]), float(value[1]))
        raise ValueError(f"Cannot read a location from {value!r}")


@dataclass(frozen=True)
class Location(GeoPoint):
    """A GeoPoint with an optional human readable address."""
    address: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'lat': self.lat, 'lng': self.lng, 'address': self.address}

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)


@dataclass
class CommunityReport:
    """A user-submitted, geolocated safety observation."""
    id: RecordId
    type: str
    location: GeoPoint
    timestamp: datetime
    is_anonymous: bool = False
    verified_count: int = 0
    helpful: int = 0
    title: str = ''
    description: str = ''
    username: Optional[str] = None

    def age_days(self, now: datetime) -> float:
        return (ensure_aware(now) - ensure_aware(self.timestamp)).total_seconds() / 86400.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'type': self.type,
            'title': self.title,
            'description': self.description,
            'location': [self.location.lat, self.location.lng],
            'timestamp': format_timestamp(self.timestamp),
            'isAnonymous': self.is_anonymous,
            'username': self.username,
            'verifiedCount': self.verified_count,
            'helpful': self.helpful
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommunityReport':
        return cls(
            id=data['id'],
            type=str(data['type']),
            location=GeoPoint.from_value(data['location']),
            timestamp=parse_timestamp(data['timestamp']),
            is_anonymous=bool(data.get('isAnonymous', False)),
            verified_count=int(data.get('verifiedCount', 0)),
            helpful=int(data.get('helpful', 0)),
            title=data.get('title') or '',
            description=data.get('description') or '',
            username=data.get('username')
        )


@dataclass
class SafetyEvaluation:
    """A completed self-assessment questionnaire with its risk percentage."""
    id: RecordId
    timestamp: datetime
    percentage: float
    location: Optional[GeoPoint] = None
    responses: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    level: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'timestamp': format_timestamp(self.timestamp),
            'location': self.location.to_dict() if self.location else None,
            'level': self.level,
            'percentage': self.percentage,
            'responses': self.responses
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SafetyEvaluation':
        percentage = data.get('percentage')
        if percentage is None:
            percentage = data.get('riskScore', 0)
        location = data.get('location')
        return cls(
            id=data['id'],
            timestamp=parse_timestamp(data['timestamp']),
            percentage=float(percentage),
            location=GeoPoint.from_value(location) if location else None,
            responses=dict(data.get('responses') or {}),
            level=data.get('level')
        )


@dataclass
class Waypoint:
    """A route point annotated with its safety score."""
    lat: float
    lng: float
    safety_score: float
    severity: Optional[str] = None
    index: Optional[int] = None

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.lat, self.lng)

    def to_dict(self) -> Dict[str, Any]:
        data = {'lat': self.lat, 'lng': self.lng, 'safetyScore': self.safety_score}
        if self.index is not None:
            data['index'] = self.index
        if self.severity is not None:
            data['severity'] = self.severity
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Waypoint':
        return cls(
            lat=float(data['lat']),
            lng=float(data['lng']),
            safety_score=float(data.get('safetyScore', 0)),
            severity=data.get('severity'),
            index=data.get('index')
        )


@dataclass(frozen=True)
class EstimatedTime:
    hours: float
    minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {'hours': self.hours, 'minutes': self.minutes}


@dataclass
class Route:
    """One of the three synthesized route alternatives."""
    id: str
    name: str
    description: str
    waypoints: List[Waypoint]
    safety_score: int
    distance_km: float
    estimated_time: EstimatedTime
    dangerous_points: List[Waypoint]
    color: str
    icon: str
    recommended: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'waypoints': [wp.to_dict() for wp in self.waypoints],
            'safetyScore': self.safety_score,
            'distance': self.distance_km,
            'estimatedTime': self.estimated_time.to_dict(),
            'dangerousPoints': [wp.to_dict() for wp in self.dangerous_points],
            'color': self.color,
            'icon': self.icon,
            'recommended': self.recommended
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Route':
        estimated = data.get('estimatedTime') or {}
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            description=data.get('description', ''),
            waypoints=[Waypoint.from_dict(wp) for wp in data.get('waypoints', [])],
            safety_score=int(data['safetyScore']),
            distance_km=float(data['distance']),
            estimated_time=EstimatedTime(
                hours=float(estimated.get('hours', 0.0)),
                minutes=int(estimated.get('minutes', 0))
            ),
            dangerous_points=[Waypoint.from_dict(wp) for wp in data.get('dangerousPoints', [])],
            color=data.get('color', ''),
            icon=data.get('icon', ''),
            recommended=bool(data.get('recommended', False))
        )


@dataclass(frozen=True)
class Recommendation:
    priority: str  # high, medium, low
    icon: str
    message: str
    action: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'priority': self.priority,
            'icon': self.icon,
            'message': self.message,
            'action': self.action
        }


@dataclass
class RouteHistoryRecord:
    """A route the user confirmed, as stored in the history log."""
    id: int
    timestamp: datetime
    start: Location
    end: Location
    selected_route_id: str
    safety_score: float
    distance_km: float
    duration_minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'timestamp': format_timestamp(self.timestamp),
            'start': self.start.to_dict(),
            'end': self.end.to_dict(),
            'selectedRoute': self.selected_route_id,
            'safetyScore': self.safety_score,
            'distance': self.distance_km,
            'duration': self.duration_minutes
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RouteHistoryRecord':
        start = data['start']
        end = data['end']
        return cls(
            id=int(data['id']),
            timestamp=parse_timestamp(data['timestamp']),
            start=Location(float(start['lat']), float(start['lng']), start.get('address')),
            end=Location(float(end['lat']), float(end['lng']), end.get('address')),
            selected_route_id=data['selectedRoute'],
            safety_score=float(data['safetyScore']),
            distance_km=float(data['distance']),
            duration_minutes=int(data['duration'])
        )


@dataclass(frozen=True)
class RouteStatistics:
    total_routes: int
    avg_safety_score: int
    total_distance_km: float
    safe_routes_percentage: int
    risky_routes_percentage: int
    most_common_start_area: str
    most_common_end_area: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalRoutes': self.total_routes,
            'avgSafetyScore': self.avg_safety_score,
            'totalDistance': self.total_distance_km,
            'safeRoutesPercentage': self.safe_routes_percentage,
            'riskyRoutesPercentage': self.risky_routes_percentage,
            'mostCommonStartArea': self.most_common_start_area,
            'mostCommonEndArea': self.most_common_end_area
        }
