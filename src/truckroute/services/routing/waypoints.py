"""Toll plaza, rest stop and route restriction generators."""

from __future__ import annotations

from typing import List, Optional

from ...config import settings
from ...models.domain import Location, Restriction, TollInfo, Waypoint
from ..geospatial import interpolate
from .sampling import RandomSource, random_id, round_int

# Tolls and rest stops are scattered south-east of this point (Mumbai).
REFERENCE_LATITUDE = 19.0760
REFERENCE_LONGITUDE = 72.8777

TOLL_SPREAD_DEGREES = 0.5
REST_STOP_SPREAD_DEGREES = 0.6
# Draws above these thresholds enable FASTag (80%) and add a restriction (30%).
FASTAG_THRESHOLD = 0.2
ROUTE_RESTRICTION_THRESHOLD = 0.7
RESTRICTION_POSITION = 0.6
REST_STOP_DETAILS = "Facilities: Food, Restrooms, Parking"


def generate_tolls(count: int, rng: RandomSource) -> List[TollInfo]:
    tolls: List[TollInfo] = []
    for index in range(1, count + 1):
        toll_id = random_id("toll", rng)
        cost = round_int(50 + rng.random() * 150)
        latitude = REFERENCE_LATITUDE - TOLL_SPREAD_DEGREES * rng.random()
        longitude = REFERENCE_LONGITUDE + TOLL_SPREAD_DEGREES * rng.random()
        tolls.append(
            TollInfo(
                id=toll_id,
                name=f"Toll Plaza {index}",
                cost=cost,
                location=Location(
                    id=f"loc-{toll_id}",
                    name=f"Highway Toll {index}",
                    latitude=latitude,
                    longitude=longitude,
                ),
                is_fastag_enabled=rng.random() > FASTAG_THRESHOLD,
            )
        )
    return tolls


def toll_waypoints(tolls: List[TollInfo]) -> List[Waypoint]:
    return [
        Waypoint(
            id=f"wp-toll-{toll.id}",
            name=toll.name,
            type="toll",
            latitude=toll.location.latitude,
            longitude=toll.location.longitude,
            details=f"Toll cost: {settings.currency_symbol}{toll.cost}",
        )
        for toll in tolls
    ]


def generate_rest_stops(count: int, rng: RandomSource) -> List[Waypoint]:
    stops: List[Waypoint] = []
    for index in range(1, count + 1):
        stop_id = random_id("rest", rng)
        latitude = REFERENCE_LATITUDE - REST_STOP_SPREAD_DEGREES * rng.random()
        longitude = REFERENCE_LONGITUDE + REST_STOP_SPREAD_DEGREES * rng.random()
        stops.append(
            Waypoint(
                id=stop_id,
                name=f"Rest Area {index}",
                type="rest",
                latitude=latitude,
                longitude=longitude,
                details=REST_STOP_DETAILS,
            )
        )
    return stops


def generate_route_restriction(
    origin: Location,
    destination: Location,
    rng: RandomSource,
) -> Optional[tuple[Restriction, Waypoint]]:
    """Maybe place a bridge restriction 60% of the way along the route.

    Returns the restriction together with the waypoint marking it, or None when
    the route has no restriction (70% of the time).
    """
    if rng.random() <= ROUTE_RESTRICTION_THRESHOLD:
        return None

    if rng.random() > 0.5:
        kind, value = "weight", "10 tons"
    else:
        kind, value = "height", "4.5 meters"

    restriction_id = random_id("restr", rng)
    latitude, longitude = interpolate(
        origin.latitude,
        origin.longitude,
        destination.latitude,
        destination.longitude,
        RESTRICTION_POSITION,
    )
    restriction = Restriction(
        id=restriction_id,
        type=kind,
        value=value,
        description="Restriction on bridge",
        location=Location(
            id=f"loc-{restriction_id}",
            name="Restriction Point",
            latitude=latitude,
            longitude=longitude,
        ),
    )
    waypoint = Waypoint(
        id=f"wp-restr-{restriction_id}",
        name="Restriction Point",
        type="restriction",
        latitude=latitude,
        longitude=longitude,
        details=f"{kind} restriction: {value}",
    )
    return restriction, waypoint
