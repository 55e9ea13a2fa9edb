# simulation/config.py
"""
Configuration constants for the simulation domain.
Includes liquid physics and settle tuning values.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from simulation.errors import InvalidArgument

# =============================================================================
# LIQUID PHYSICS
# =============================================================================
# Amounts are in "cell volumes": 1.0 fills one cell exactly
MAX_LIQUID_AMOUNT = 1.0     # Nominal capacity of a cell
MIN_LIQUID_AMOUNT = 0.01    # Below this, liquid is not tracked (discarded)
MAX_COMPRESSION = 0.25      # Extra capacity a cell gains per cell stacked above it

# Flow limits (per stage, per tick)
MIN_FLOW = 0.01             # Flows above this are damped by FLOW_SPEED
MAX_FLOW = 5.0              # Hard cap so a cell never drains in one pop
FLOW_SPEED = 1.0            # Fraction of the ideal flow realized per tick (0, 1]

# =============================================================================
# SETTLING
# =============================================================================
SETTLE_THRESHOLD = 5        # Quiet ticks before a cell goes dormant
SETTLE_EPSILON = 1e-4       # Net change below this counts as "quiet"


@dataclass(frozen=True)
class FlowSettings:
    """Tuning values for one simulator instance.

    Defaults come from the module constants above; tests and the CLI build
    their own instances to try other settle thresholds or flow speeds.
    """
    max_liquid_amount: float = MAX_LIQUID_AMOUNT
    min_liquid_amount: float = MIN_LIQUID_AMOUNT
    max_compression: float = MAX_COMPRESSION
    min_flow: float = MIN_FLOW
    max_flow: float = MAX_FLOW
    flow_speed: float = FLOW_SPEED
    settle_threshold: int = SETTLE_THRESHOLD
    settle_epsilon: float = SETTLE_EPSILON

    def __post_init__(self) -> None:
        for name in ("max_liquid_amount", "min_liquid_amount", "max_flow"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidArgument(f"{name} must be a positive finite number, got {value!r}")

        for name in ("max_compression", "min_flow", "settle_epsilon"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidArgument(f"{name} must be a non-negative finite number, got {value!r}")

        if not 0 < self.flow_speed <= 1:
            raise InvalidArgument(f"flow_speed must be in (0, 1], got {self.flow_speed!r}")
        if self.min_liquid_amount >= self.max_liquid_amount:
            raise InvalidArgument("min_liquid_amount must be smaller than max_liquid_amount")
        if int(self.settle_threshold) != self.settle_threshold or self.settle_threshold < 1:
            raise InvalidArgument(f"settle_threshold must be an integer >= 1, got {self.settle_threshold!r}")


DEFAULT_SETTINGS = FlowSettings()
