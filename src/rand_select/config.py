"""Configuration models for weighted selectors."""

from __future__ import annotations

import random
from typing import Optional

from pydantic import BaseModel, Field

from .types import RandomFn


class TelemetryConfig(BaseModel):
    """Controls selection telemetry emission."""

    enabled: bool = False
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Fraction of selection events forwarded to sinks.",
    )


class SelectorConfig(BaseModel):
    """Top-level configuration object for a ``WeightedSelector``."""

    seed: Optional[int] = Field(
        default=None,
        description="Seed for the default random source; unseeded uses the module-level generator.",
    )
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    def random_fn(self) -> RandomFn:
        """Return the unit-interval random source implied by this config."""

        if self.seed is None:
            return random.random
        return random.Random(self.seed).random


__all__ = ["SelectorConfig", "TelemetryConfig"]
