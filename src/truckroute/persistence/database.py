"""Database persistence for accepted routes and travel history."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from ..data.reference_repository import ReferenceDataError, run_query
from ..models.domain import RouteOption
from ..schemas.routing import TravelHistoryRequest
from ..services.export.geojson import route_geometry
from ..services.routing.segments import total_minutes

logger = logging.getLogger(__name__)


def _first_row(rows: list[dict], description: str) -> dict[str, Any]:
    if not rows:
        raise ReferenceDataError(f"Failed to {description}: no row returned")
    return rows[0]


def build_route_record(
    route: RouteOption,
    vehicle_id: str | None = None,
    cargo_weight: float | None = None,
    cargo_type: str | None = None,
    user_id: str | None = None,
) -> dict[str, Any]:
    """Map a route option onto a ``routes`` table row."""
    return {
        "user_id": user_id,
        "vehicle_id": vehicle_id,
        "origin_id": route.origin.id,
        "destination_id": route.destination.id,
        "cargo_weight": cargo_weight,
        "cargo_type": cargo_type,
        "total_distance": route.distance,
        # stored in minutes, like route_segments.estimated_time
        "estimated_time": total_minutes(route.duration),
        "estimated_fuel_cost": route.estimated_cost_breakdown.fuel,
        "total_toll_cost": route.estimated_cost_breakdown.tolls,
        "waypoints": [asdict(waypoint) for waypoint in route.waypoints],
        "route_geometry": route_geometry(route),
    }


def save_accepted_route(
    route: RouteOption,
    vehicle_id: str | None = None,
    cargo_weight: float | None = None,
    cargo_type: str | None = None,
    user_id: str | None = None,
) -> dict[str, Any]:
    """Persist a route the planner accepted, together with its segments.

    Returns the stored ``routes`` row.
    """
    record = build_route_record(route, vehicle_id, cargo_weight, cargo_type, user_id)
    stored = _first_row(
        run_query("save accepted route", lambda db: db.table("routes").insert(record)),
        "save accepted route",
    )
    route_id = stored.get("id")
    logger.info(f"Saved accepted route '{route.name}' as {route_id} ({len(route.segments)} segments)")

    # a leg pays the toll of the plaza it ends at
    toll_costs = {f"loc-wp-wp-toll-{toll.id}": toll.cost for toll in route.tolls}
    segment_rows = [
        {
            "route_id": route_id,
            "sequence_number": index,
            "distance": segment.distance,
            "estimated_time": segment.duration,
            "toll_cost": toll_costs.get(segment.end_location.id, 0),
        }
        for index, segment in enumerate(route.segments, start=1)
    ]
    if segment_rows:
        try:
            run_query("save route segments", lambda db: db.table("route_segments").insert(segment_rows))
        except ReferenceDataError:
            _discard_route(route_id)
            raise
    return stored


def _discard_route(route_id: Any) -> None:
    """Remove a routes row whose segments could not be stored."""
    try:
        run_query(f"discard route {route_id}", lambda db: db.table("routes").delete().eq("id", route_id))
    except ReferenceDataError:
        logger.error(f"Route {route_id} was saved without its segments and could not be removed")
    else:
        logger.warning(f"Discarded route {route_id} after its segments failed to save")


def create_travel_history_entry(entry: TravelHistoryRequest) -> dict[str, Any]:
    payload = entry.model_dump(exclude_none=True)
    stored = _first_row(
        run_query("save travel history", lambda db: db.table("travel_history").insert(payload)),
        "save travel history",
    )
    logger.info(f"Recorded trip for route {entry.route_id}")
    return stored


def get_travel_history(user_id: str | None = None) -> list[dict[str, Any]]:
    def _build(db):
        query = db.table("travel_history").select("*, route:routes(*)")
        if user_id:
            query = query.eq("user_id", user_id)
        return query.order("actual_start_time", desc=True)

    return run_query("load travel history", _build)
