"""Public package interface for rand_select."""

from .config import SelectorConfig, TelemetryConfig
from .selector import WeightedSelector
from .telemetry import SelectionCounter, TelemetryPublisher, TelemetrySink
from .types import (
    Choice,
    Entry,
    RandomFn,
    RandomSource,
    SelectionEvent,
    SelectionOutcome,
)
from .utils import InvalidWeightError, validate_finite, validate_weight, weighted_choice

__all__ = [
    "Choice",
    "Entry",
    "InvalidWeightError",
    "RandomFn",
    "RandomSource",
    "SelectionCounter",
    "SelectionEvent",
    "SelectionOutcome",
    "SelectorConfig",
    "TelemetryConfig",
    "TelemetryPublisher",
    "TelemetrySink",
    "WeightedSelector",
    "validate_finite",
    "validate_weight",
    "weighted_choice",
]
