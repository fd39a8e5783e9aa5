"""Weighted selector mapping a uniform draw onto weighted choices.

The selector is built incrementally and then reused for many selections::

    selector = (
        WeightedSelector()
        .with_value(1.0, "A")
        .with_value(1.5, "B")
        .with_none(2.5)
    )
    selector.select_random()  # None half of the time, "B" 50% more often than "A"

Each entry covers the half-open interval ``[previous_bound, upper_bound)`` of
``[0, total_weight)``; a draw is matched by a linear scan for the first bound
strictly greater than it. Zero-weight entries cover an empty interval and are
never selected.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, Iterator, Mapping, Optional, TypeVar, Union

from .config import SelectorConfig
from .telemetry import TelemetryPublisher
from .types import Choice, Entry, RandomFn, RandomSource, SelectionEvent, SelectionOutcome
from .utils import InvalidWeightError, validate_finite, validate_weight

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class WeightedSelector(Generic[T]):
    """Selects a value with probability proportional to its weight.

    Appending is the only mutation; selection only reads. A fully built
    selector can therefore be shared between readers, but appends made while
    other threads select need external locking.
    """

    def __init__(
        self,
        *,
        config: Optional[SelectorConfig] = None,
        random_fn: Optional[RandomFn] = None,
    ) -> None:
        self.config = config or SelectorConfig()
        self._random = random_fn or self.config.random_fn()
        self._entries: list[Entry[T]] = []
        self._total_weight = 0.0
        self._telemetry: Optional[TelemetryPublisher] = None

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[float, Optional[T]]],
        *,
        config: Optional[SelectorConfig] = None,
        random_fn: Optional[RandomFn] = None,
    ) -> "WeightedSelector[T]":
        """Build a selector from ``(weight, value)`` tuples."""

        selector: WeightedSelector[T] = cls(config=config, random_fn=random_fn)
        for weight, value in pairs:
            selector.append(weight, value)
        return selector

    @classmethod
    def from_choices(
        cls,
        choices: Iterable[Union[Choice[T], Mapping[str, object]]],
        *,
        config: Optional[SelectorConfig] = None,
        random_fn: Optional[RandomFn] = None,
    ) -> "WeightedSelector[T]":
        """Build a selector from ``Choice`` models or mappings validated into them."""

        selector: WeightedSelector[T] = cls(config=config, random_fn=random_fn)
        for item in choices:
            choice = item if isinstance(item, Choice) else Choice.model_validate(item)
            selector.append(choice.weight, choice.value)
        return selector

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def append(self, weight: float, value: Optional[T] = None) -> "WeightedSelector[T]":
        """Add one weighted alternative; ``value=None`` adds to the none class."""

        weight = validate_weight(weight)
        self._push(weight, value, self._total_weight + weight)
        return self

    def with_value(self, weight: float, value: T) -> "WeightedSelector[T]":
        return self.append(weight, value)

    def with_none(self, weight: float) -> "WeightedSelector[T]":
        """Assign ``weight`` to the no-selection outcome."""

        return self.append(weight, None)

    def with_none_up_to(self, total_weight: float) -> "WeightedSelector[T]":
        """Top up the none class so the total weight reaches ``total_weight``.

        Convenient when the values' weights are already normalized::

            WeightedSelector().with_value(0.1, "A").with_value(0.2, "B").with_none_up_to(1.0)

        Does nothing when the current total already meets ``total_weight``,
        including any negative target; NaN and infinite targets are rejected.
        """

        target = validate_finite(total_weight, name="total_weight")
        missing = target - self._total_weight
        if missing <= 0.0:
            LOGGER.debug(
                "with_none_up_to(%s) ignored, total weight is already %s",
                target,
                self._total_weight,
            )
            return self
        self._push(missing, None, target)
        return self

    def _push(self, weight: float, value: Optional[T], upper_bound: float) -> None:
        self._entries.append(Entry(upper_bound=upper_bound, weight=weight, value=value))
        self._total_weight = upper_bound

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select(self, draw: float) -> Optional[T]:
        """Return the value whose interval contains ``draw``.

        ``draw`` is expected in ``[0, total_weight)``. Draws outside that range,
        NaN, and any draw on a zero-weight selector yield ``None``.
        """

        total = self._total_weight
        if total <= 0.0:
            self._emit_telemetry(SelectionOutcome.EMPTY, draw)
            return None
        if not 0.0 <= draw < total:
            LOGGER.debug("Draw %s outside [0, %s), selecting nothing", draw, total)
            self._emit_telemetry(SelectionOutcome.OUT_OF_RANGE, draw)
            return None
        for index, entry in enumerate(self._entries):
            if entry.upper_bound > draw:
                outcome = SelectionOutcome.NONE if entry.value is None else SelectionOutcome.VALUE
                self._emit_telemetry(outcome, draw, index=index)
                return entry.value
        return None

    def select_random(self, random_fn: Optional[RandomFn] = None) -> Optional[T]:
        """Draw from ``random_fn`` (or the selector's own source) and select.

        No randomness is consumed when the total weight is zero.
        """

        total = self._total_weight
        if total <= 0.0:
            return self.select(0.0)
        draw = (random_fn or self._random)() * total
        return self.select(draw)

    def select_with_rng(self, rng: RandomSource) -> Optional[T]:
        """Select using any generator with a ``random()`` method, e.g. ``random.Random(seed)``."""

        return self.select_random(rng.random)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def total_weight(self) -> float:
        return self._total_weight

    @property
    def entries(self) -> tuple[Entry[T], ...]:
        return tuple(self._entries)

    def values(self) -> list[T]:
        """Concrete values in insertion order, none-class entries excluded."""

        return [entry.value for entry in self._entries if entry.value is not None]

    def probability(self, value: Optional[T]) -> float:
        """Share of the total weight that selects ``value`` (``None`` for the none class).

        Mass is measured between consecutive bounds, so a weight absorbed by
        float rounding counts as zero, matching what ``select`` can reach.
        """

        if self._total_weight <= 0.0:
            return 0.0
        mass = 0.0
        previous = 0.0
        for entry in self._entries:
            if entry.value == value:
                mass += entry.upper_bound - previous
            previous = entry.upper_bound
        return mass / self._total_weight

    def copy(self) -> "WeightedSelector[T]":
        """Return an independent selector with the same entries, config and random source."""

        clone: WeightedSelector[T] = type(self)(config=self.config, random_fn=self._random)
        clone._entries = list(self._entries)
        clone._total_weight = self._total_weight
        clone._telemetry = self._telemetry
        return clone

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry[T]]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(entries={len(self._entries)}, total_weight={self._total_weight:g})"

    # ------------------------------------------------------------------
    # Telemetry
    # ------------------------------------------------------------------
    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry

    def _emit_telemetry(
        self,
        outcome: SelectionOutcome,
        draw: float,
        *,
        index: Optional[int] = None,
    ) -> None:
        if self._telemetry is None or not self.config.telemetry.enabled:
            return
        self._telemetry.emit(
            SelectionEvent(
                outcome=outcome,
                draw=draw,
                total_weight=self._total_weight,
                index=index,
            )
        )


__all__ = ["InvalidWeightError", "WeightedSelector"]
