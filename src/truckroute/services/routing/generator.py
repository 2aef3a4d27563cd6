"""Synthesize a single route option with internally consistent metrics."""

from __future__ import annotations

import math

from ...models.domain import Location, RouteOption, Waypoint
from ...schemas.routing import RouteOptimizationRequest
from . import metrics
from .polyline import encode_polyline
from .sampling import RandomSource, random_id
from .segments import generate_route_segments, order_route_points
from .waypoints import generate_rest_stops, generate_route_restriction, generate_tolls, toll_waypoints

MIN_TOLLS = 3
EXTRA_TOLLS = 3
MIN_REST_STOPS = 1
EXTRA_REST_STOPS = 2


def _route_name(destination: Location, is_recommended: bool) -> str:
    return "Route A (Recommended)" if is_recommended else f"Route {destination.name}"


def _route_polyline(origin: Location, destination: Location, waypoints: list[Waypoint]) -> str:
    points = order_route_points(origin, destination, waypoints)
    return encode_polyline([(point.latitude, point.longitude) for point in points])


def generate_mock_route(
    request: RouteOptimizationRequest,
    origin: Location,
    destination: Location,
    is_recommended: bool,
    rng: RandomSource,
) -> RouteOption:
    """Build one route option for the request.

    Random draws happen in a fixed order (distance, fuel, tolls, rest stops,
    restriction, conditions, segments, id) so a seeded source reproduces the
    same option.
    """
    base_distance = metrics.sample_base_distance(rng)
    variation = metrics.sample_variation_factor(is_recommended, rng)
    distance = metrics.route_distance(base_distance, variation)
    duration = metrics.route_duration_hours(distance)
    fuel = metrics.fuel_consumption(distance, rng)

    tolls = generate_tolls(MIN_TOLLS + math.floor(rng.random() * EXTRA_TOLLS), rng)
    waypoints = toll_waypoints(tolls)
    waypoints.extend(generate_rest_stops(MIN_REST_STOPS + math.floor(rng.random() * EXTRA_REST_STOPS), rng))

    restrictions = []
    route_restriction = generate_route_restriction(origin, destination, rng)
    if route_restriction is not None:
        restriction, marker = route_restriction
        restrictions.append(restriction)
        waypoints.append(marker)

    weather = metrics.sample_weather(rng)
    traffic = metrics.sample_traffic(is_recommended, rng)
    road = metrics.sample_road_quality(is_recommended, rng)

    costs = metrics.route_costs(distance, duration, fuel, tolls)
    segments = generate_route_segments(origin, destination, waypoints, distance, duration, rng)
    height = request.dimensions.height if request.dimensions else None

    return RouteOption(
        id=random_id("route", rng),
        name=_route_name(destination, is_recommended),
        distance=distance,
        duration=duration,
        total_cost=costs.total,
        estimated_cost_breakdown=costs.breakdown(),
        fuel_consumption=fuel,
        emissions=metrics.emissions(fuel),
        safety_score=metrics.safety_score(weather, traffic, road, is_recommended),
        reliability=metrics.reliability_score(weather, traffic, road, is_recommended),
        origin=origin,
        destination=destination,
        waypoints=waypoints,
        segments=segments,
        tolls=tolls,
        weather=weather,
        weather_impact=metrics.weather_impact(weather),
        traffic_conditions=traffic,
        road_conditions=road,
        is_recommended=is_recommended,
        time_saved=metrics.time_saved(base_distance, duration, is_recommended),
        restrictions=restrictions,
        permits_required=metrics.permits_required(request.weight, height),
        polyline=_route_polyline(origin, destination, waypoints),
    )
