"""Split a synthesized route into legs between its origin, waypoints and destination."""

from __future__ import annotations

import math
from typing import List, Sequence

from ...models.domain import (
    Location,
    Restriction,
    RouteSegmentInfo,
    TrafficInfo,
    Waypoint,
    WeatherInfo,
)
from .sampling import RandomSource, random_id, round_int, uniform_choice, weighted_choice

ROAD_TYPES = ("National Highway", "State Highway", "Rural Road", "Urban Road")
ROAD_TYPE_WEIGHTS = (0.6, 0.25, 0.1, 0.05)

# Repeated entries skew the uniform pick towards the typical quality of each road type.
ROAD_QUALITY_BY_TYPE = {
    "National Highway": ("good", "good", "average"),
    "State Highway": ("good", "average", "average"),
    "Rural Road": ("average", "poor", "poor"),
    "Urban Road": ("good", "average", "average"),
}

SEGMENT_WEATHER = ("Clear", "Rain", "Fog")
SEGMENT_WEATHER_WEIGHTS = (0.7, 0.2, 0.1)
SEVERE_WEATHER_THRESHOLD = 0.7

CONGESTION_LEVELS = ("light", "medium", "high")
CONGESTION_WEIGHTS = (0.5, 0.3, 0.2)

SEGMENT_RESTRICTION_PROBABILITY = 0.2
SEGMENT_RESTRICTION_TYPES = ("weight", "height", "width", "length", "time")

# nudges allowed when settling the last leg of a partition against sum()
_SETTLE_STEPS = 64

_ORIGIN_RANK = 0
_WAYPOINT_RANK = 1
_DESTINATION_RANK = 2


def _waypoint_location(waypoint: Waypoint) -> Location:
    return Location(
        id=f"loc-wp-{waypoint.id}",
        name=waypoint.name,
        latitude=waypoint.latitude,
        longitude=waypoint.longitude,
    )


def order_route_points(origin: Location, destination: Location, waypoints: Sequence[Waypoint]) -> List[Location]:
    """Origin first, destination last, waypoints in between in the order given.

    Interior waypoints are not re-ordered geographically, so consecutive legs
    may double back on a map.
    """
    ranked = [(_ORIGIN_RANK, origin)]
    ranked.extend((_WAYPOINT_RANK, _waypoint_location(waypoint)) for waypoint in waypoints)
    ranked.append((_DESTINATION_RANK, destination))
    # sort is stable, so waypoints keep their insertion order
    ranked.sort(key=lambda item: item[0])
    return [location for _, location in ranked]


def _sample_weather(rng: RandomSource) -> WeatherInfo:
    condition = weighted_choice(SEGMENT_WEATHER, SEGMENT_WEATHER_WEIGHTS, rng)
    if condition == "Clear":
        return WeatherInfo(condition=condition, impact="low")
    impact = "high" if rng.random() > SEVERE_WEATHER_THRESHOLD else "medium"
    return WeatherInfo(condition=condition, impact=impact)


def _sample_traffic(rng: RandomSource) -> TrafficInfo:
    level = weighted_choice(CONGESTION_LEVELS, CONGESTION_WEIGHTS, rng)
    if level == "medium":
        delay = round_int(rng.random() * 10)
    elif level == "high":
        delay = round_int(10 + rng.random() * 20)
    else:
        delay = 0
    return TrafficInfo(congestion_level=level, delay_minutes=delay)


def _restriction_value(kind: str, rng: RandomSource) -> tuple[str, str]:
    if kind == "weight":
        return f"{math.floor(10 + rng.random() * 15)} tons", "Weight restriction due to bridge capacity"
    if kind == "height":
        whole = math.floor(3 + rng.random() * 3)
        tenths = math.floor(rng.random() * 10)
        return f"{whole}.{tenths} meters", "Height restriction due to overpass"
    if kind == "width":
        whole = math.floor(2 + rng.random() * 2)
        tenths = math.floor(rng.random() * 10)
        return f"{whole}.{tenths} meters", "Width restriction on narrow road"
    if kind == "length":
        return f"{math.floor(10 + rng.random() * 10)} meters", "Length restriction for vehicles"
    if kind == "time":
        return "10:00 PM - 6:00 AM", "Time restriction for heavy vehicles"
    return "Restricted", "Special restriction applies"


def _sample_restrictions(rng: RandomSource) -> List[Restriction]:
    if rng.random() >= SEGMENT_RESTRICTION_PROBABILITY:
        return []
    kind = uniform_choice(SEGMENT_RESTRICTION_TYPES, rng)
    value, description = _restriction_value(kind, rng)
    return [Restriction(id=random_id("restr", rng), type=kind, value=value, description=description)]


def _tenths(value: float) -> int:
    return round_int(value * 10)


def total_minutes(duration_hours: float) -> float:
    """Route duration in minutes, to the nearest tenth (3.3 h -> 198.0, not 197.99999999999997)."""
    return _tenths(duration_hours * 60) / 10


def partition_total(total: float, parts: int) -> List[float]:
    """Split ``total`` into ``parts`` legs of ``1/parts`` each, rounded to one decimal.

    The last leg takes the remainder. It is settled against ``sum()`` itself,
    so ``sum(legs) == total`` holds exactly whether the interpreter adds floats
    left to right or with compensated summation (Python 3.12+).
    """
    share = round_int(_tenths(total) / parts) / 10
    legs = [share] * (parts - 1)
    last = max(0.0, total - sum(legs))
    for _ in range(_SETTLE_STEPS):
        drift = sum(legs + [last]) - total
        if drift == 0 or last == 0.0:
            break
        last = math.nextafter(last, -math.inf if drift > 0 else math.inf)
    legs.append(last)
    return legs


def generate_route_segments(
    origin: Location,
    destination: Location,
    waypoints: Sequence[Waypoint],
    total_distance: float,
    total_duration_hours: float,
    rng: RandomSource,
) -> List[RouteSegmentInfo]:
    """Partition a route into equal legs, each with its own sampled road conditions.

    Distances are in km and durations in minutes (see ``total_minutes``); both
    are split with ``partition_total``, so the legs add up to the route totals.
    """
    points = order_route_points(origin, destination, waypoints)
    leg_count = len(points) - 1
    distances = partition_total(total_distance, leg_count)
    durations = partition_total(total_minutes(total_duration_hours), leg_count)
    segments: List[RouteSegmentInfo] = []

    for index in range(leg_count):
        road_type = weighted_choice(ROAD_TYPES, ROAD_TYPE_WEIGHTS, rng)
        road_quality = uniform_choice(ROAD_QUALITY_BY_TYPE[road_type], rng)
        weather = _sample_weather(rng)
        traffic = _sample_traffic(rng)
        restrictions = _sample_restrictions(rng)

        segments.append(
            RouteSegmentInfo(
                start_location=points[index],
                end_location=points[index + 1],
                distance=distances[index],
                duration=durations[index],
                road_type=road_type,
                road_quality=road_quality,
                weather=weather,
                traffic=traffic,
                restrictions=restrictions,
            )
        )

    return segments
