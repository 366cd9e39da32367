"""Net-worth projection engine.

Seeded Monte Carlo simulation of net-worth paths plus percentile banding:
- generator: reproducible LCG uniforms and Box-Muller normals
- simulator: day-by-day path simulation (surplus + return shocks, floored at 0)
- bands: linear-interpolation percentiles across the ensemble
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TypedDict

import numpy as np


class InvalidParameterError(ValueError):
    """Simulation or percentile input outside its valid domain."""


class NonFiniteValueError(ArithmeticError):
    """A simulated path produced NaN or infinity."""


class SeedingMode(str, Enum):
    STREAM = "stream"   # one generator feeds every path in order
    REPLAY = "replay"   # each path replays the same seed
    OFFSET = "offset"   # path p is seeded with seed + p


@dataclass(frozen=True)
class SimulationParams:
    """Immutable inputs that fully determine a projection."""

    seed: int
    path_count: int
    horizon_days: int
    start_value: float
    daily_drift_mean: float
    daily_drift_std_dev: float
    daily_return_mean: float
    daily_return_std_dev: float
    seeding: SeedingMode = SeedingMode.STREAM

    def __post_init__(self):
        for name in ("seed", "path_count", "horizon_days"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidParameterError(f"{name} must be an integer, got {value!r}")

        if self.path_count < 1:
            raise InvalidParameterError(f"path_count must be >= 1, got {self.path_count}")
        if self.horizon_days < 0:
            raise InvalidParameterError(f"horizon_days must be >= 0, got {self.horizon_days}")

        for name in (
            "start_value",
            "daily_drift_mean",
            "daily_drift_std_dev",
            "daily_return_mean",
            "daily_return_std_dev",
        ):
            if not math.isfinite(getattr(self, name)):
                raise InvalidParameterError(f"{name} must be finite")

        if self.daily_drift_std_dev < 0:
            raise InvalidParameterError(
                f"daily_drift_std_dev must be >= 0, got {self.daily_drift_std_dev}"
            )
        if self.daily_return_std_dev < 0:
            raise InvalidParameterError(
                f"daily_return_std_dev must be >= 0, got {self.daily_return_std_dev}"
            )

        # Accept plain strings ("stream", "replay", "offset") from config/API layers
        object.__setattr__(self, "seeding", SeedingMode(self.seeding))


class QuantileBand(TypedDict):
    """p10/p50/p90 per day, aligned with the ensemble's day axis."""
    p10: np.ndarray
    p50: np.ndarray
    p90: np.ndarray


__all__ = [
    "InvalidParameterError",
    "NonFiniteValueError",
    "SeedingMode",
    "SimulationParams",
    "QuantileBand",
]
