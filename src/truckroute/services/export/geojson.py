"""GeoJSON and WKT export of synthesized routes."""

from __future__ import annotations

from typing import Any, Dict, List

from ...models.domain import RouteOption
from ..routing.segments import order_route_points

ROUTE_COLORS = ["#16a34a", "#2563eb", "#d97706", "#9333ea", "#dc2626"]


def route_color(index: int, is_recommended: bool) -> str:
    """Recommended routes are always green; alternatives cycle through the palette."""
    if is_recommended:
        return ROUTE_COLORS[0]
    return ROUTE_COLORS[1 + index % (len(ROUTE_COLORS) - 1)]


def route_path(route: RouteOption) -> List[List[float]]:
    """Ordered [lat, lon] pairs from origin through waypoints to destination."""
    points = order_route_points(route.origin, route.destination, route.waypoints)
    return [[point.latitude, point.longitude] for point in points]


def linestring_to_wkt(coordinates: List[List[float]]) -> str:
    """Convert linestring coordinates to WKT format.

    Args:
        coordinates: List of [lat, lon] pairs

    Returns:
        WKT LINESTRING string
    """
    if not coordinates or len(coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    # WKT uses lon,lat order (x,y)
    coord_pairs = [f"{lon} {lat}" for lat, lon in coordinates]
    return f"LINESTRING({','.join(coord_pairs)})"


def route_geometry(route: RouteOption) -> Dict[str, Any]:
    return {
        "type": "LineString",
        "coordinates": [[lon, lat] for lat, lon in route_path(route)],
    }


def _point_feature(latitude: float, longitude: float, properties: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": [longitude, latitude]},
        "properties": properties,
    }


def route_to_feature_collection(route: RouteOption, index: int = 0) -> Dict[str, Any]:
    """Build a FeatureCollection with the route line plus origin, destination and waypoint markers."""
    features: List[Dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": route_geometry(route),
            "properties": {
                "kind": "route",
                "route_id": route.id,
                "name": route.name,
                "is_recommended": route.is_recommended,
                "distance_km": route.distance,
                "duration_hours": route.duration,
                "total_cost": route.total_cost,
                "color": route_color(index, route.is_recommended),
            },
        },
        _point_feature(
            route.origin.latitude,
            route.origin.longitude,
            {"kind": "origin", "id": route.origin.id, "name": route.origin.name},
        ),
        _point_feature(
            route.destination.latitude,
            route.destination.longitude,
            {"kind": "destination", "id": route.destination.id, "name": route.destination.name},
        ),
    ]
    for waypoint in route.waypoints:
        features.append(
            _point_feature(
                waypoint.latitude,
                waypoint.longitude,
                {
                    "kind": waypoint.type,
                    "id": waypoint.id,
                    "name": waypoint.name,
                    "details": waypoint.details,
                },
            )
        )
    return {"type": "FeatureCollection", "features": features}
