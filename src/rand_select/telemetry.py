"""Selection telemetry: fan selector outcomes out to observers."""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Protocol

from .config import TelemetryConfig
from .types import SelectionEvent, SelectionOutcome

LOGGER = logging.getLogger(__name__)


class TelemetrySink(Protocol):
    """Observer receiving selection events."""

    def handle(self, event: SelectionEvent) -> None:  # pragma: no cover - protocol
        ...


class TelemetryPublisher:
    """Forward a fixed fraction of selection events to subscribed sinks.

    Sampling accumulates ``sample_rate`` per event and forwards once the credit
    reaches one, so a rate of 0.25 forwards every fourth event. Publishing never
    draws random numbers; selections stay free of hidden randomness.
    """

    def __init__(self, config: TelemetryConfig) -> None:
        self.config = config
        self._sinks: List[TelemetrySink] = []
        self._credit = 0.0

    def subscribe(self, sink: TelemetrySink) -> None:
        self._sinks.append(sink)

    def unsubscribe(self, sink: TelemetrySink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def emit(self, event: SelectionEvent) -> bool:
        """Offer ``event`` to the sinks; return whether it was forwarded."""

        if not self.config.enabled:
            return False
        self._credit += self.config.sample_rate
        if self._credit < 1.0:
            return False
        self._credit -= 1.0
        for sink in tuple(self._sinks):
            try:
                sink.handle(event)
            except Exception:
                LOGGER.exception("Selection sink %r failed on %s event", sink, event.outcome.value)
        return True


class SelectionCounter:
    """Tallies outcomes and matched entry positions to compare against expected weights."""

    def __init__(self) -> None:
        self.outcomes: Counter[SelectionOutcome] = Counter()
        self.indexes: Counter[int] = Counter()

    def handle(self, event: SelectionEvent) -> None:
        self.outcomes[event.outcome] += 1
        if event.index is not None:
            self.indexes[event.index] += 1

    @property
    def total(self) -> int:
        return sum(self.outcomes.values())

    def share(self, outcome: SelectionOutcome) -> float:
        """Observed fraction of events that resolved to ``outcome``."""

        total = self.total
        if not total:
            return 0.0
        return self.outcomes[outcome] / total


__all__ = ["SelectionCounter", "TelemetryPublisher", "TelemetrySink"]
