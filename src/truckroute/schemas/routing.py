"""Route optimization request/response schemas."""

from __future__ import annotations

from dataclasses import asdict
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

from ..models import domain


class LocationModel(BaseModel):
    id: str
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    state: Optional[str] = None
    address: Optional[str] = None


class Dimensions(BaseModel):
    """Vehicle dimensions in meters."""
    length: float = Field(..., ge=0)
    width: float = Field(..., ge=0)
    height: float = Field(..., ge=0)


class RoutePreferences(BaseModel):
    """Planner preferences. Accepted for forward compatibility; route generation does not read them."""
    prioritize_safety: bool = False
    prioritize_speed: bool = False
    prioritize_cost: bool = False
    avoid_tolls: bool = False
    avoid_highways: bool = False


class RouteOptimizationRequest(BaseModel):
    origin: Union[str, LocationModel]
    destination: Union[str, LocationModel]
    vehicle_type: str
    weight: float = Field(..., ge=0, description="Cargo weight in tons.")
    dimensions: Optional[Dimensions] = None
    goods_type: Optional[str] = None
    preferences: Optional[RoutePreferences] = None


class WaypointModel(BaseModel):
    id: str
    name: str
    type: Literal["toll", "rest", "restriction"]
    latitude: float
    longitude: float
    details: Optional[str] = None


class TollInfoModel(BaseModel):
    id: str
    name: str
    cost: int
    location: LocationModel
    is_fastag_enabled: bool


class RestrictionModel(BaseModel):
    id: str
    type: Literal["weight", "height", "width", "length", "time", "other"]
    value: str
    description: str
    location: Optional[LocationModel] = None


class WeatherInfoModel(BaseModel):
    condition: str
    impact: Literal["none", "low", "medium", "high"]
    description: Optional[str] = None
    temperature: Optional[float] = None


class TrafficInfoModel(BaseModel):
    congestion_level: Literal["light", "medium", "high"]
    delay_minutes: int
    description: Optional[str] = None


class RouteSegmentModel(BaseModel):
    start_location: LocationModel
    end_location: LocationModel
    distance: float
    duration: float
    road_type: str
    road_quality: Literal["poor", "average", "good"]
    weather: WeatherInfoModel
    traffic: TrafficInfoModel
    restrictions: List[RestrictionModel] = Field(default_factory=list)


class CostBreakdownModel(BaseModel):
    fuel: int
    tolls: int
    maintenance: int
    labor: int
    other: int


class RouteOptionModel(BaseModel):
    id: str
    name: str
    distance: float
    duration: float
    total_cost: int
    estimated_cost_breakdown: CostBreakdownModel
    fuel_consumption: float
    emissions: float
    safety_score: int = Field(..., ge=25, le=100)
    reliability: int = Field(..., ge=25, le=100)
    origin: LocationModel
    destination: LocationModel
    waypoints: List[WaypointModel]
    segments: List[RouteSegmentModel]
    tolls: List[TollInfoModel]
    weather: str
    weather_impact: Literal["none", "low", "medium", "high"]
    traffic_conditions: Literal["light", "moderate", "heavy"]
    road_conditions: Literal["poor", "average", "good"]
    is_recommended: bool
    time_saved: float
    restrictions: List[RestrictionModel]
    permits_required: List[str]
    polyline: str


class RouteComparisonRow(BaseModel):
    id: str
    name: str
    is_recommended: bool
    distance_km: float
    duration_hours: float
    total_cost: int
    fuel_consumption_l: float
    emissions_kg: float
    safety_score: int
    reliability: int
    toll_count: int
    toll_cost: int
    weather: str
    traffic_conditions: str
    road_conditions: str
    time_saved_hours: float
    permits_required: str


class AcceptRouteRequest(BaseModel):
    """A route option the planner chose to keep, plus the cargo context it was planned for."""
    route: RouteOptionModel
    vehicle_id: Optional[str] = None
    cargo_weight: Optional[float] = Field(default=None, ge=0)
    cargo_type: Optional[str] = None
    user_id: Optional[str] = Field(default=None, description="Owner of the saved route.")


class TravelHistoryRequest(BaseModel):
    route_id: str
    user_id: Optional[str] = None
    actual_start_time: Optional[str] = None
    actual_end_time: Optional[str] = None
    actual_distance: Optional[float] = Field(default=None, ge=0)
    actual_fuel_cost: Optional[float] = Field(default=None, ge=0)
    actual_toll_cost: Optional[float] = Field(default=None, ge=0)
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None


def route_option_to_model(route: domain.RouteOption) -> RouteOptionModel:
    return RouteOptionModel.model_validate(asdict(route))


def _location(model: LocationModel) -> domain.Location:
    return domain.Location(**model.model_dump())


def _restriction(model: RestrictionModel) -> domain.Restriction:
    return domain.Restriction(
        id=model.id,
        type=model.type,
        value=model.value,
        description=model.description,
        location=_location(model.location) if model.location else None,
    )


def route_option_from_model(model: RouteOptionModel) -> domain.RouteOption:
    """Rebuild the domain route from an API payload (e.g. a route the planner accepted)."""
    return domain.RouteOption(
        id=model.id,
        name=model.name,
        distance=model.distance,
        duration=model.duration,
        total_cost=model.total_cost,
        estimated_cost_breakdown=domain.CostBreakdown(**model.estimated_cost_breakdown.model_dump()),
        fuel_consumption=model.fuel_consumption,
        emissions=model.emissions,
        safety_score=model.safety_score,
        reliability=model.reliability,
        origin=_location(model.origin),
        destination=_location(model.destination),
        waypoints=[domain.Waypoint(**wp.model_dump()) for wp in model.waypoints],
        segments=[
            domain.RouteSegmentInfo(
                start_location=_location(seg.start_location),
                end_location=_location(seg.end_location),
                distance=seg.distance,
                duration=seg.duration,
                road_type=seg.road_type,
                road_quality=seg.road_quality,
                weather=domain.WeatherInfo(**seg.weather.model_dump()),
                traffic=domain.TrafficInfo(**seg.traffic.model_dump()),
                restrictions=[_restriction(r) for r in seg.restrictions],
            )
            for seg in model.segments
        ],
        tolls=[
            domain.TollInfo(
                id=toll.id,
                name=toll.name,
                cost=toll.cost,
                location=_location(toll.location),
                is_fastag_enabled=toll.is_fastag_enabled,
            )
            for toll in model.tolls
        ],
        weather=model.weather,
        weather_impact=model.weather_impact,
        traffic_conditions=model.traffic_conditions,
        road_conditions=model.road_conditions,
        is_recommended=model.is_recommended,
        time_saved=model.time_saved,
        restrictions=[_restriction(r) for r in model.restrictions],
        permits_required=list(model.permits_required),
        polyline=model.polyline,
    )
