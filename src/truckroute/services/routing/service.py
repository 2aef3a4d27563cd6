"""Route option orchestration service."""

from __future__ import annotations

import asyncio
import logging
import math
import random
from typing import List

from ...config import settings
from ...models.domain import Location, RouteOption
from ...schemas.routing import RouteOptimizationRequest
from .generator import generate_mock_route
from .locations import LocationLookup, resolve_location
from .sampling import RandomSource

MIN_ALTERNATIVES = 2
EXTRA_ALTERNATIVES = 2

logger = logging.getLogger(__name__)


class RouteOptimizationError(RuntimeError):
    """Generic failure of route generation. The underlying cause is logged, not exposed."""

    def __init__(self) -> None:
        super().__init__("Failed to optimize route")


def generate_route_options(
    request: RouteOptimizationRequest,
    origin: Location,
    destination: Location,
    rng: RandomSource,
) -> List[RouteOption]:
    """Build the recommended route followed by two or three independent alternatives."""
    recommended = generate_mock_route(request, origin, destination, True, rng)
    alternative_count = MIN_ALTERNATIVES + math.floor(rng.random() * EXTRA_ALTERNATIVES)
    alternatives = [
        generate_mock_route(request, origin, destination, False, rng)
        for _ in range(alternative_count)
    ]
    return [recommended, *alternatives]


async def optimize_route(
    request: RouteOptimizationRequest,
    *,
    rng: RandomSource | None = None,
    location_lookup: LocationLookup | None = None,
    latency_seconds: float | None = None,
) -> List[RouteOption]:
    """Produce a comparison set of route options for ``request``.

    Waits ``latency_seconds`` (``settings.simulated_latency_seconds`` by
    default) before generating anything. Each call gets its own random source
    unless one is injected. Preference flags on the request are accepted but
    do not influence generation.

    Raises:
        LocationResolutionError: origin or destination could not be resolved.
        RouteOptimizationError: anything else went wrong while generating.
    """
    # lookups may query the database, so they run off the event loop
    origin = await asyncio.to_thread(resolve_location, request.origin, "origin", location_lookup)
    destination = await asyncio.to_thread(resolve_location, request.destination, "destination", location_lookup)
    logger.info(
        f"Optimizing route {origin.name} -> {destination.name} "
        f"(vehicle={request.vehicle_type}, weight={request.weight}t)"
    )

    delay = settings.simulated_latency_seconds if latency_seconds is None else latency_seconds
    await asyncio.sleep(delay)

    source = rng if rng is not None else random.Random()
    try:
        routes = generate_route_options(request, origin, destination, source)
    except Exception as exc:
        logger.exception(f"Error optimizing route: {exc}")
        raise RouteOptimizationError() from exc

    logger.info(f"Generated {len(routes)} route options for {origin.name} -> {destination.name}")
    return routes
