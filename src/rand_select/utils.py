"""Utility helpers for weight validation and one-shot weighted choice."""

from __future__ import annotations

import math
import numbers
import random
from typing import Sequence, TypeVar

from .types import RandomFn

T = TypeVar("T")


class InvalidWeightError(ValueError):
    """Raised when a weight is negative, not finite, or not a real number."""


def validate_finite(number: float, *, name: str = "weight") -> float:
    """Return ``number`` as a float, rejecting non-real, NaN and infinite values."""

    if isinstance(number, bool) or not isinstance(number, numbers.Real):
        raise InvalidWeightError(f"{name} must be a real number, got {number!r}")
    value = float(number)
    if not math.isfinite(value):
        raise InvalidWeightError(f"{name} must be finite, got {number!r}")
    return value


def validate_weight(weight: float, *, name: str = "weight") -> float:
    """Return ``weight`` as a float, rejecting anything that is not a finite non-negative real."""

    value = validate_finite(weight, name=name)
    if value < 0.0:
        raise InvalidWeightError(f"{name} must be non-negative, got {weight!r}")
    return value


def weighted_choice(items: Sequence[T], weights: Sequence[float], *, random_fn: RandomFn = random.random) -> T:
    """Choose a single item based on weights."""

    if not items:
        raise ValueError("items must be non-empty")
    if len(weights) != len(items):
        raise ValueError("weights length must match items")
    from .selector import WeightedSelector  # local import to avoid cycle

    selector: WeightedSelector[int] = WeightedSelector.from_pairs(
        zip(weights, range(len(items))),
        random_fn=random_fn,
    )
    if selector.total_weight <= 0.0:
        return items[min(int(random_fn() * len(items)), len(items) - 1)]
    index = selector.select_random()
    if index is None:
        # draw rounded up onto the total weight
        return items[-1]
    return items[index]


__all__ = ["InvalidWeightError", "validate_finite", "validate_weight", "weighted_choice"]
