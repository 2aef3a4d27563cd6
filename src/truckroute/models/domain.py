"""Domain models for synthesized route options and their parts."""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

WaypointType = Literal["toll", "rest", "restriction"]
RestrictionType = Literal["weight", "height", "width", "length", "time", "other"]
ImpactLevel = Literal["none", "low", "medium", "high"]
RoadQuality = Literal["poor", "average", "good"]


@dataclass(slots=True)
class Location:
    """A named coordinate, either supplied by the caller or a default city point."""

    id: str
    name: str
    latitude: float
    longitude: float
    state: Optional[str] = None
    address: Optional[str] = None


@dataclass(slots=True)
class Waypoint:
    id: str
    name: str
    type: WaypointType
    latitude: float
    longitude: float
    details: Optional[str] = None


@dataclass(slots=True)
class TollInfo:
    id: str
    name: str
    cost: int
    location: Location
    is_fastag_enabled: bool


@dataclass(slots=True)
class Restriction:
    id: str
    type: RestrictionType
    value: str
    description: str
    location: Optional[Location] = None


@dataclass(slots=True)
class WeatherInfo:
    condition: str
    impact: ImpactLevel
    description: Optional[str] = None
    temperature: Optional[float] = None


@dataclass(slots=True)
class TrafficInfo:
    congestion_level: Literal["light", "medium", "high"]
    delay_minutes: int
    description: Optional[str] = None


@dataclass(slots=True)
class RouteSegmentInfo:
    """One leg between consecutive route points. Distance in km, duration in minutes."""

    start_location: Location
    end_location: Location
    distance: float
    duration: float
    road_type: str
    road_quality: RoadQuality
    weather: WeatherInfo
    traffic: TrafficInfo
    restrictions: List[Restriction] = field(default_factory=list)


@dataclass(slots=True)
class CostBreakdown:
    fuel: int
    tolls: int
    maintenance: int
    labor: int
    other: int


@dataclass(slots=True)
class RouteOption:
    """A complete synthesized route candidate with derived metrics.

    Distance is in km, duration and time saved in hours, fuel in litres and
    emissions in kg CO2.
    """

    id: str
    name: str
    distance: float
    duration: float
    total_cost: int
    estimated_cost_breakdown: CostBreakdown
    fuel_consumption: float
    emissions: float
    safety_score: int
    reliability: int
    origin: Location
    destination: Location
    waypoints: List[Waypoint]
    segments: List[RouteSegmentInfo]
    tolls: List[TollInfo]
    weather: str
    weather_impact: ImpactLevel
    traffic_conditions: Literal["light", "moderate", "heavy"]
    road_conditions: RoadQuality
    is_recommended: bool
    time_saved: float
    restrictions: List[Restriction]
    permits_required: List[str]
    polyline: str
