"""Route planning endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from ...data.reference_repository import ReferenceDataError, SupabaseLocationLookup
from ...db.supabase import get_supabase_client
from ...persistence.database import create_travel_history_entry, get_travel_history, save_accepted_route
from ...schemas.routing import (
    AcceptRouteRequest,
    RouteComparisonRow,
    RouteOptimizationRequest,
    RouteOptionModel,
    TravelHistoryRequest,
    route_option_from_model,
    route_option_to_model,
)
from ...services.export.geojson import route_to_feature_collection
from ...services.outputs.comparison_formatter import routes_to_comparison_csv, routes_to_comparison_json
from ...services.routing.locations import LocationLookup, LocationResolutionError
from ...services.routing.service import RouteOptimizationError, optimize_route
from ..errors import data_error

router = APIRouter(prefix="/routes", tags=["routes"])


def _location_lookup() -> LocationLookup | None:
    """Resolve names against the locations table when Supabase is configured."""
    if get_supabase_client() is None:
        return None
    return SupabaseLocationLookup()


async def _generate(payload: RouteOptimizationRequest):
    try:
        return await optimize_route(payload, location_lookup=_location_lookup())
    except LocationResolutionError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ReferenceDataError as exc:
        raise data_error(exc) from exc
    except RouteOptimizationError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.post("/optimize", response_model=list[RouteOptionModel], status_code=status.HTTP_200_OK)
async def optimize(payload: RouteOptimizationRequest) -> list[RouteOptionModel]:
    routes = await _generate(payload)
    return [route_option_to_model(route) for route in routes]


@router.post("/compare", response_model=list[RouteComparisonRow], status_code=status.HTTP_200_OK)
async def compare(
    payload: RouteOptimizationRequest,
    fmt: str = Query(default="json", alias="format", pattern="^(json|csv)$"),
):
    """Generate route options and return them as a side-by-side comparison table."""
    routes = await _generate(payload)
    if fmt == "csv":
        return PlainTextResponse(routes_to_comparison_csv(routes), media_type="text/csv")
    return routes_to_comparison_json(routes)


@router.post("/geojson", status_code=status.HTTP_200_OK)
def to_geojson(route: RouteOptionModel) -> dict:
    """Convert a route option into a GeoJSON FeatureCollection for map overlays."""
    return route_to_feature_collection(route_option_from_model(route))


@router.post("/accept", status_code=status.HTTP_201_CREATED)
def accept(payload: AcceptRouteRequest) -> dict:
    """Persist the route option the planner decided to take."""
    try:
        return save_accepted_route(
            route_option_from_model(payload.route),
            vehicle_id=payload.vehicle_id,
            cargo_weight=payload.cargo_weight,
            cargo_type=payload.cargo_type,
            user_id=payload.user_id,
        )
    except ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.get("/history", status_code=status.HTTP_200_OK)
def history(user_id: str | None = Query(default=None, description="Filter trips by owner")) -> list[dict]:
    try:
        return get_travel_history(user_id=user_id)
    except ReferenceDataError as exc:
        raise data_error(exc) from exc


@router.post("/history", status_code=status.HTTP_201_CREATED)
def record_trip(payload: TravelHistoryRequest) -> dict:
    try:
        return create_travel_history_entry(payload)
    except ReferenceDataError as exc:
        raise data_error(exc) from exc
