import itertools

import pytest

from src.truckroute.models.domain import Location, TollInfo
from src.truckroute.services.routing import metrics


def _toll(cost: int) -> TollInfo:
    return TollInfo(
        id=f"toll-{cost}",
        name="Toll Plaza",
        cost=cost,
        location=Location(id="loc", name="Highway Toll", latitude=19.0, longitude=72.9),
        is_fastag_enabled=True,
    )


@pytest.mark.parametrize(
    "weather, traffic, road, recommended",
    list(
        itertools.product(
            metrics.WEATHER_OPTIONS,
            metrics.TRAFFIC_OPTIONS,
            metrics.ROAD_OPTIONS,
            (True, False),
        )
    ),
)
def test_scores_are_bounded_integers(weather, traffic, road, recommended):
    safety = metrics.safety_score(weather, traffic, road, recommended)
    reliability = metrics.reliability_score(weather, traffic, road, recommended)

    assert isinstance(safety, int) and 25 <= safety <= 100
    assert isinstance(reliability, int) and 25 <= reliability <= 100


def test_scores_for_best_and_worst_conditions():
    assert metrics.safety_score("Clear", "light", "good", True) == 83
    assert metrics.reliability_score("Clear", "light", "good", True) == 90
    assert metrics.safety_score("Fog", "heavy", "poor", False) == 40
    assert metrics.reliability_score("Fog", "heavy", "poor", False) == 47


def test_weather_impact_mapping():
    assert metrics.weather_impact("Clear") == "none"
    assert metrics.weather_impact("Rain") == "medium"
    assert metrics.weather_impact("Fog") == "high"


def test_recommended_route_has_no_distance_variation(scripted_random):
    rng = scripted_random([0.9])
    assert metrics.sample_variation_factor(True, rng) == 1.0
    # the draw was not consumed
    assert rng.random() == 0.9


def test_distance_duration_and_fuel():
    distance = metrics.route_distance(160.4, 1.0)
    assert distance == 160
    assert metrics.route_duration_hours(165) == 3.0
    assert metrics.route_duration_hours(160) == 2.9


def test_fuel_consumption_uses_litres_per_km_draw(scripted_random):
    # 0.08 + 0.5 * 0.04 = 0.1 l/km
    assert metrics.fuel_consumption(160, scripted_random([0.5])) == 16.0
    assert metrics.emissions(16.0) == 40.0


def test_traffic_sampling_is_biased_for_recommended_routes(scripted_random):
    assert metrics.sample_traffic(True, scripted_random([0.5])) == "light"
    assert metrics.sample_traffic(False, scripted_random([0.5])) == "moderate"
    assert metrics.sample_road_quality(True, scripted_random([0.5])) == "good"
    assert metrics.sample_road_quality(False, scripted_random([0.5])) == "average"


def test_route_costs_total_uses_unrounded_components():
    costs = metrics.route_costs(150, 2.7, 15.0, [_toll(100), _toll(50)])

    assert costs.fuel == 1500
    assert costs.tolls == 150
    assert costs.maintenance == 300
    assert costs.labor == pytest.approx(810)
    assert costs.other == 225
    assert costs.total == 2985

    breakdown = costs.breakdown()
    assert (breakdown.fuel, breakdown.tolls, breakdown.maintenance, breakdown.labor, breakdown.other) == (
        1500,
        150,
        300,
        810,
        225,
    )


def test_breakdown_may_differ_from_total_by_rounding():
    costs = metrics.RouteCosts(fuel=10.4, tolls=0, maintenance=10.4, labor=10.4, other=0)
    breakdown = costs.breakdown()
    assert costs.total == 31
    assert breakdown.fuel + breakdown.maintenance + breakdown.labor == 30


def test_time_saved_only_for_recommended_routes():
    assert metrics.time_saved(165, 3.0, True) == 0.8
    assert metrics.time_saved(165, 3.0, False) == 0.0


@pytest.mark.parametrize(
    "weight, height, expected",
    [
        (25, None, ["Oversize Load Permit"]),
        (5, None, []),
        (20, None, []),
        (5, 4.6, ["Oversize Load Permit"]),
        (5, 4.5, []),
    ],
)
def test_permits_required(weight, height, expected):
    assert metrics.permits_required(weight, height) == expected
