"""Serializers for route comparison tables."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from ...models.domain import RouteOption

COMPARISON_FIELDS = [
    "id",
    "name",
    "is_recommended",
    "distance_km",
    "duration_hours",
    "total_cost",
    "fuel_consumption_l",
    "emissions_kg",
    "safety_score",
    "reliability",
    "toll_count",
    "toll_cost",
    "weather",
    "traffic_conditions",
    "road_conditions",
    "time_saved_hours",
    "permits_required",
]


def route_to_comparison_row(route: RouteOption) -> dict:
    return {
        "id": route.id,
        "name": route.name,
        "is_recommended": route.is_recommended,
        "distance_km": route.distance,
        "duration_hours": route.duration,
        "total_cost": route.total_cost,
        "fuel_consumption_l": route.fuel_consumption,
        "emissions_kg": route.emissions,
        "safety_score": route.safety_score,
        "reliability": route.reliability,
        "toll_count": len(route.tolls),
        "toll_cost": route.estimated_cost_breakdown.tolls,
        "weather": route.weather,
        "traffic_conditions": route.traffic_conditions,
        "road_conditions": route.road_conditions,
        "time_saved_hours": route.time_saved,
        "permits_required": "; ".join(route.permits_required),
    }


def routes_to_comparison_json(routes: Sequence[RouteOption]) -> list[dict]:
    return [route_to_comparison_row(route) for route in routes]


def routes_to_comparison_csv(routes: Sequence[RouteOption]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=COMPARISON_FIELDS)
    writer.writeheader()
    for route in routes:
        writer.writerow(route_to_comparison_row(route))
    return buffer.getvalue()
