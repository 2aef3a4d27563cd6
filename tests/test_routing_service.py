import asyncio
import random
import threading
from dataclasses import asdict

import pytest

from src.truckroute.models.domain import Location
from src.truckroute.schemas.routing import Dimensions, LocationModel, RoutePreferences, RouteOptimizationRequest
from src.truckroute.services.routing import service as routing_service
from src.truckroute.services.routing.locations import LocationResolutionError, StaticLocationLookup
from src.truckroute.services.routing.sampling import round_int
from src.truckroute.services.routing.segments import total_minutes
from src.truckroute.services.routing.service import RouteOptimizationError, optimize_route


def _request(**overrides) -> RouteOptimizationRequest:
    payload = {
        "origin": "Mumbai",
        "destination": "Pune",
        "vehicle_type": "truck",
        "weight": 5,
    }
    payload.update(overrides)
    return RouteOptimizationRequest(**payload)


def _run(request, **kwargs):
    kwargs.setdefault("latency_seconds", 0)
    return asyncio.run(optimize_route(request, **kwargs))


@pytest.mark.parametrize("seed", range(10))
def test_optimize_route_returns_one_recommended_and_alternatives(seed):
    routes = _run(_request(), rng=random.Random(seed))

    assert len(routes) in (3, 4)
    assert routes[0].is_recommended
    assert sum(route.is_recommended for route in routes) == 1
    assert routes[0].name == "Route A (Recommended)"
    assert all(route.name == "Route Pune" for route in routes[1:])
    assert all(route.time_saved == 0 for route in routes[1:])


@pytest.mark.parametrize("seed", range(10))
def test_route_metrics_are_internally_consistent(seed):
    for route in _run(_request(), rng=random.Random(seed)):
        assert sum(s.distance for s in route.segments) == route.distance
        assert sum(s.duration for s in route.segments) == total_minutes(route.duration)

        toll_total = sum(toll.cost for toll in route.tolls)
        expected_total = round_int(
            route.fuel_consumption * 100
            + toll_total
            + route.distance * 2
            + route.duration * 300
            + route.distance * 1.5
        )
        assert route.total_cost == expected_total
        breakdown = route.estimated_cost_breakdown
        parts = breakdown.fuel + breakdown.tolls + breakdown.maintenance + breakdown.labor + breakdown.other
        assert abs(parts - route.total_cost) <= 3
        assert breakdown.tolls == toll_total

        assert 25 <= route.safety_score <= 100
        assert 25 <= route.reliability <= 100
        assert 3 <= len(route.tolls) <= 5
        assert len(route.segments) == len(route.waypoints) + 1
        assert route.weather_impact == {"Clear": "none", "Rain": "medium", "Fog": "high"}[route.weather]
        assert len(route.restrictions) == sum(wp.type == "restriction" for wp in route.waypoints)
        assert route.emissions == pytest.approx(route.fuel_consumption * 2.5, abs=0.051)


def test_recommended_route_uses_base_distance():
    routes = _run(_request(), rng=random.Random(99))
    assert 150 <= routes[0].distance <= 190
    for route in routes[1:]:
        assert 150 <= route.distance <= round(190 * 1.3)


def test_seeded_calls_are_identical():
    first = _run(_request(), rng=random.Random(2024))
    second = _run(_request(), rng=random.Random(2024))

    assert [asdict(route) for route in first] == [asdict(route) for route in second]


def test_heavy_cargo_requires_permit():
    routes = _run(_request(weight=25), rng=random.Random(1))
    assert all(route.permits_required == ["Oversize Load Permit"] for route in routes)


def test_light_cargo_without_dimensions_needs_no_permit():
    routes = _run(_request(weight=5), rng=random.Random(1))
    assert all(route.permits_required == [] for route in routes)


def test_tall_load_requires_permit():
    request = _request(dimensions=Dimensions(length=12, width=2.5, height=4.8))
    routes = _run(request, rng=random.Random(1))
    assert routes[0].permits_required == ["Oversize Load Permit"]


def test_preferences_do_not_change_generation():
    plain = _run(_request(), rng=random.Random(8))
    preferring = _run(
        _request(preferences=RoutePreferences(avoid_tolls=True, prioritize_safety=True)),
        rng=random.Random(8),
    )
    assert [asdict(route) for route in plain] == [asdict(route) for route in preferring]


def test_bare_names_fall_back_to_default_coordinates():
    routes = _run(_request(origin="Nashik", destination="Satara"), rng=random.Random(3))

    origin, destination = routes[0].origin, routes[0].destination
    assert (origin.id, origin.name, origin.latitude, origin.longitude) == ("origin-1", "Nashik", 19.0760, 72.8777)
    assert (destination.id, destination.name, destination.latitude, destination.longitude) == (
        "dest-1",
        "Satara",
        18.5204,
        73.8567,
    )


def test_structured_locations_pass_through():
    origin = LocationModel(id="loc-blr", name="Bengaluru", latitude=12.9716, longitude=77.5946)
    routes = _run(_request(origin=origin), rng=random.Random(3))
    assert routes[0].origin == Location(id="loc-blr", name="Bengaluru", latitude=12.9716, longitude=77.5946)


def test_lookup_resolves_names():
    nagpur = Location(id="loc-ngp", name="Nagpur", latitude=21.1458, longitude=79.0882)
    pune = Location(id="loc-pnq", name="Pune", latitude=18.5204, longitude=73.8567)
    lookup = StaticLocationLookup({"Nagpur": nagpur, "Pune": pune})

    routes = _run(_request(origin="nagpur "), rng=random.Random(3), location_lookup=lookup)
    assert routes[0].origin is nagpur
    assert routes[0].destination is pune


def test_unknown_name_with_lookup_raises_resolution_error():
    lookup = StaticLocationLookup({})
    with pytest.raises(LocationResolutionError, match="origin 'Mumbai'"):
        _run(_request(), rng=random.Random(3), location_lookup=lookup)


def test_blank_origin_raises_resolution_error():
    with pytest.raises(LocationResolutionError):
        _run(_request(origin="   "), rng=random.Random(3))


def test_generation_failure_is_reported_generically(monkeypatch):
    def _boom(*args, **kwargs):
        raise KeyError("road table missing")

    monkeypatch.setattr(routing_service, "generate_mock_route", _boom)

    with pytest.raises(RouteOptimizationError) as excinfo:
        _run(_request(), rng=random.Random(3))

    assert str(excinfo.value) == "Failed to optimize route"
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_default_latency_comes_from_settings(monkeypatch):
    delays = []

    async def _fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(routing_service.settings, "simulated_latency_seconds", 0.25)
    monkeypatch.setattr(routing_service.asyncio, "sleep", _fake_sleep)
    asyncio.run(optimize_route(_request(), rng=random.Random(3)))

    assert delays == [0.25]


def test_unseeded_calls_use_their_own_random_source():
    async def _both():
        request = _request()
        return await asyncio.gather(
            optimize_route(request, latency_seconds=0),
            optimize_route(request, latency_seconds=0),
        )

    first, second = asyncio.run(_both())
    assert first[0].id != second[0].id


class _ThreadRecordingLookup:
    """Lookup whose origin queries wait until two of them are in flight at once."""

    def __init__(self):
        self.threads = []
        self.origin_barrier = threading.Barrier(2, timeout=5)

    def find_by_name(self, name):
        self.threads.append(threading.current_thread())
        if name == "Mumbai":
            self.origin_barrier.wait()
        return Location(id=f"loc-{name.lower()}", name=name, latitude=19.0, longitude=73.0)


def test_lookups_run_off_the_event_loop():
    lookup = _ThreadRecordingLookup()

    async def _both():
        return await asyncio.gather(
            optimize_route(_request(), rng=random.Random(1), location_lookup=lookup, latency_seconds=0),
            optimize_route(_request(), rng=random.Random(2), location_lookup=lookup, latency_seconds=0),
        )

    first, second = asyncio.run(_both())

    assert first[0].origin.id == second[0].origin.id == "loc-mumbai"
    assert len(lookup.threads) == 4
    assert all(thread is not threading.main_thread() for thread in lookup.threads)
