"""Common data types used across the rand_select package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, Protocol, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

RandomFn = Callable[[], float]


class RandomSource(Protocol):
    """Any generator exposing a unit-interval ``random()``, e.g. ``random.Random``."""

    def random(self) -> float:  # pragma: no cover - protocol definition
        ...


@dataclass(frozen=True)
class Entry(Generic[T]):
    """One weighted alternative, stored with its cumulative upper bound.

    A ``value`` of ``None`` marks the "none" weight class.
    """

    upper_bound: float
    weight: float
    value: Optional[T] = None


class Choice(BaseModel, Generic[T]):
    """Validated ``(weight, value)`` pair accepted by ``WeightedSelector.from_choices``."""

    weight: float = Field(
        ...,
        ge=0.0,
        allow_inf_nan=False,
        description="Relative likelihood of this choice; zero disables it.",
    )
    value: Optional[T] = Field(
        default=None,
        description="Selected payload, or None for the no-selection outcome.",
    )


class SelectionOutcome(str, Enum):
    """How a single ``select`` call resolved."""

    VALUE = "value"
    NONE = "none"
    EMPTY = "empty"
    OUT_OF_RANGE = "out_of_range"


class SelectionEvent(BaseModel):
    """Telemetry payload describing one selection."""

    outcome: SelectionOutcome
    draw: float
    total_weight: float
    index: Optional[int] = Field(
        default=None,
        description="Position of the matched entry, when one matched.",
    )


__all__ = [
    "Choice",
    "Entry",
    "RandomFn",
    "RandomSource",
    "SelectionEvent",
    "SelectionOutcome",
]
