"""Random sampling and rounding primitives shared by the route generators."""

from __future__ import annotations

import math
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
ID_LENGTH = 6


class RandomSource(Protocol):
    """Anything exposing ``random() -> float`` in [0, 1), e.g. ``random.Random``."""

    def random(self) -> float: ...


def weighted_choice(options: Sequence[T], weights: Sequence[float], rng: RandomSource) -> T:
    """Pick one option according to relative, non-negative weights.

    Weights are normalised by their sum, so they need not add up to 1. A single
    uniform draw is compared against the running cumulative weight and the
    first option whose cumulative weight reaches the draw is returned. If float
    error leaves the final cumulative weight below the draw, the last option
    with a positive weight is returned.
    """
    if not options:
        raise ValueError("weighted_choice requires at least one option.")
    if len(options) != len(weights):
        raise ValueError(f"Got {len(options)} options but {len(weights)} weights.")

    total = sum(weights)
    if total <= 0:
        raise ValueError("Weights must have a positive sum.")

    draw = rng.random()
    cumulative = 0.0
    for option, weight in zip(options, weights):
        cumulative += weight / total
        # zero-weight options are never picked, even for a draw of exactly 0.0
        if weight > 0 and draw <= cumulative:
            return option
    return next(option for option, weight in zip(reversed(options), reversed(weights)) if weight > 0)


def uniform_choice(options: Sequence[T], rng: RandomSource) -> T:
    return options[math.floor(rng.random() * len(options))]


def random_id(prefix: str, rng: RandomSource) -> str:
    suffix = "".join(uniform_choice(_ID_ALPHABET, rng) for _ in range(ID_LENGTH))
    return f"{prefix}-{suffix}"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike Python's banker's rounding."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))
