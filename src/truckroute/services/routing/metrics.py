"""Derived route metrics: distance, time, fuel, cost and safety/reliability scores.

All figures follow fixed planning assumptions rather than live data:

* average speed of 55 km/h (traffic does not change duration),
* diesel at 100 per litre, driver labour at 300 per hour,
* maintenance at 2 per km and other operating costs at 1.5 per km,
* 2.5 kg CO2 per litre of fuel burned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ...models.domain import CostBreakdown, TollInfo
from .sampling import RandomSource, round_half_up, round_int, uniform_choice, weighted_choice

AVERAGE_SPEED_KMH = 55.0
BASELINE_SPEED_KMH = 50.0
BASELINE_DETOUR_FACTOR = 1.15
FUEL_PRICE_PER_LITRE = 100.0
LABOR_COST_PER_HOUR = 300.0
MAINTENANCE_COST_PER_KM = 2.0
OTHER_COST_PER_KM = 1.5
CO2_KG_PER_LITRE = 2.5

OVERSIZE_PERMIT = "Oversize Load Permit"
OVERSIZE_WEIGHT_TONS = 20.0
OVERSIZE_HEIGHT_METERS = 4.5

MIN_SCORE = 25
MAX_SCORE = 100

WEATHER_OPTIONS = ("Clear", "Rain", "Fog")
WEATHER_IMPACT = {"Clear": "none", "Rain": "medium", "Fog": "high"}

TRAFFIC_OPTIONS = ("light", "moderate", "heavy")
RECOMMENDED_TRAFFIC_WEIGHTS = (0.6, 0.3, 0.1)
ALTERNATIVE_TRAFFIC_WEIGHTS = (0.3, 0.4, 0.3)

ROAD_OPTIONS = ("good", "average", "poor")
RECOMMENDED_ROAD_WEIGHTS = (0.7, 0.25, 0.05)
ALTERNATIVE_ROAD_WEIGHTS = (0.3, 0.5, 0.2)

SAFETY_BASE = 75
SAFETY_RECOMMENDED_BONUS = 8
SAFETY_WEATHER_PENALTY = {"Clear": 0, "Rain": -5, "Fog": -15}
SAFETY_TRAFFIC_PENALTY = {"light": 0, "moderate": -3, "heavy": -8}
SAFETY_ROAD_PENALTY = {"good": 0, "average": -5, "poor": -12}

RELIABILITY_BASE = 80
RELIABILITY_RECOMMENDED_BONUS = 10
RELIABILITY_WEATHER_PENALTY = {"Clear": 0, "Rain": -3, "Fog": -10}
RELIABILITY_TRAFFIC_PENALTY = {"light": 0, "moderate": -5, "heavy": -15}
RELIABILITY_ROAD_PENALTY = {"good": 0, "average": -3, "poor": -8}


def sample_base_distance(rng: RandomSource) -> float:
    return 150 + rng.random() * 40


def sample_variation_factor(is_recommended: bool, rng: RandomSource) -> float:
    # The recommended route never draws, so alternatives consume one extra value.
    if is_recommended:
        return 1.0
    return 1 + rng.random() * 0.3


def route_distance(base_distance: float, variation_factor: float) -> int:
    return round_int(base_distance * variation_factor)


def route_duration_hours(distance: float) -> float:
    return round_half_up(distance / AVERAGE_SPEED_KMH, 1)


def fuel_consumption(distance: float, rng: RandomSource) -> float:
    litres_per_km = 0.08 + rng.random() * 0.04
    return round_half_up(distance * litres_per_km, 1)


def emissions(fuel_litres: float) -> float:
    return round_half_up(fuel_litres * CO2_KG_PER_LITRE, 1)


def sample_weather(rng: RandomSource) -> str:
    return uniform_choice(WEATHER_OPTIONS, rng)


def weather_impact(weather: str) -> str:
    return WEATHER_IMPACT[weather]


def sample_traffic(is_recommended: bool, rng: RandomSource) -> str:
    weights = RECOMMENDED_TRAFFIC_WEIGHTS if is_recommended else ALTERNATIVE_TRAFFIC_WEIGHTS
    return weighted_choice(TRAFFIC_OPTIONS, weights, rng)


def sample_road_quality(is_recommended: bool, rng: RandomSource) -> str:
    weights = RECOMMENDED_ROAD_WEIGHTS if is_recommended else ALTERNATIVE_ROAD_WEIGHTS
    return weighted_choice(ROAD_OPTIONS, weights, rng)


@dataclass(slots=True)
class RouteCosts:
    """Unrounded cost components of a route."""

    fuel: float
    tolls: float
    maintenance: float
    labor: float
    other: float

    @property
    def total(self) -> int:
        return round_int(self.fuel + self.tolls + self.maintenance + self.labor + self.other)

    def breakdown(self) -> CostBreakdown:
        # Each component is rounded on its own, so the parts may not add up to total exactly.
        return CostBreakdown(
            fuel=round_int(self.fuel),
            tolls=round_int(self.tolls),
            maintenance=round_int(self.maintenance),
            labor=round_int(self.labor),
            other=round_int(self.other),
        )


def route_costs(distance: float, duration_hours: float, fuel_litres: float, tolls: Sequence[TollInfo]) -> RouteCosts:
    return RouteCosts(
        fuel=fuel_litres * FUEL_PRICE_PER_LITRE,
        tolls=sum(toll.cost for toll in tolls),
        maintenance=distance * MAINTENANCE_COST_PER_KM,
        labor=duration_hours * LABOR_COST_PER_HOUR,
        other=distance * OTHER_COST_PER_KM,
    )


def _clamp_score(value: int) -> int:
    return min(MAX_SCORE, max(MIN_SCORE, value))


def safety_score(weather: str, traffic: str, road: str, is_recommended: bool) -> int:
    score = (
        SAFETY_BASE
        + SAFETY_WEATHER_PENALTY[weather]
        + SAFETY_TRAFFIC_PENALTY[traffic]
        + SAFETY_ROAD_PENALTY[road]
        + (SAFETY_RECOMMENDED_BONUS if is_recommended else 0)
    )
    return _clamp_score(score)


def reliability_score(weather: str, traffic: str, road: str, is_recommended: bool) -> int:
    score = (
        RELIABILITY_BASE
        + RELIABILITY_WEATHER_PENALTY[weather]
        + RELIABILITY_TRAFFIC_PENALTY[traffic]
        + RELIABILITY_ROAD_PENALTY[road]
        + (RELIABILITY_RECOMMENDED_BONUS if is_recommended else 0)
    )
    return _clamp_score(score)


def time_saved(base_distance: float, duration_hours: float, is_recommended: bool) -> float:
    """Hours saved against a slower, 15% longer baseline trip. Alternatives report 0."""
    if not is_recommended:
        return 0.0
    baseline_hours = base_distance * BASELINE_DETOUR_FACTOR / BASELINE_SPEED_KMH
    return round_half_up(baseline_hours - duration_hours, 1)


def permits_required(weight_tons: float, height_meters: Optional[float] = None) -> List[str]:
    if weight_tons > OVERSIZE_WEIGHT_TONS or (height_meters is not None and height_meters > OVERSIZE_HEIGHT_METERS):
        return [OVERSIZE_PERMIT]
    return []
