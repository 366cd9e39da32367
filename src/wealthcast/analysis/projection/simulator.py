"""Day-by-day net-worth path simulation.

Each simulated day draws two normals per path, a surplus shock and a
return shock, and compounds:

    value = max(0, value * (1 + return_shock) + surplus_shock)

Paths are advanced together one day at a time. Which generator draws feed
which (path, day) is fixed by the seeding mode and matches a scalar loop
over ``SeededRandom`` exactly.
"""

import logging

import numpy as np

from . import NonFiniteValueError, SeedingMode, SimulationParams
from .generator import MODULUS, SeededRandom, box_muller, state_positions, uniforms_at

logger = logging.getLogger(__name__)

# surplus (u1, u2) + return (u1, u2)
DRAWS_PER_DAY = 4


def simulate(params: SimulationParams) -> np.ndarray:
    """Simulate the full ensemble for ``params``.

    Args:
        params: Validated simulation parameters.

    Returns:
        Read-only float64 array of shape (path_count, horizon_days + 1);
        column 0 is ``start_value`` for every path.

    Raises:
        NonFiniteValueError: If any simulated value is NaN or infinite.
    """
    n_paths = params.path_count
    horizon = params.horizon_days

    ensemble = np.empty((n_paths, horizon + 1), dtype=np.float64)
    ensemble[:, 0] = params.start_value

    origins = _path_origins(params)[:, None]
    lanes = np.arange(1, DRAWS_PER_DAY + 1, dtype=np.int64)

    value = np.full(n_paths, float(params.start_value))
    for day in range(1, horizon + 1):
        u = uniforms_at(origins + (day - 1) * DRAWS_PER_DAY + lanes)

        surplus_shock = (
            box_muller(u[:, 0], u[:, 1]) * params.daily_drift_std_dev
            + params.daily_drift_mean
        )
        return_shock = (
            box_muller(u[:, 2], u[:, 3]) * params.daily_return_std_dev
            + params.daily_return_mean
        )

        # Net worth is floored at zero in this projection
        value = np.maximum(0.0, value * (1.0 + return_shock) + surplus_shock)
        ensemble[:, day] = value

    if not np.isfinite(ensemble).all():
        bad_paths, bad_days = np.nonzero(~np.isfinite(ensemble))
        raise NonFiniteValueError(
            f"non-finite value in path {int(bad_paths[0])} at day {int(bad_days[0])}"
        )

    logger.debug(
        "Simulated %d paths x %d days (seed=%d, seeding=%s)",
        n_paths, horizon, params.seed, params.seeding.value,
    )

    ensemble.flags.writeable = False
    return ensemble


def _path_origins(params: SimulationParams) -> np.ndarray:
    """Cycle position each path reads its first draw after."""
    paths = np.arange(params.path_count, dtype=np.int64)

    if params.seeding is SeedingMode.STREAM:
        # One generator, paths consume consecutive blocks of draws
        rng = SeededRandom(params.seed)
        return rng.position + paths * (DRAWS_PER_DAY * params.horizon_days)

    if params.seeding is SeedingMode.REPLAY:
        return np.full(params.path_count, SeededRandom(params.seed).position, dtype=np.int64)

    # OFFSET: a fresh generator per path, seeded with seed + path index
    return state_positions(params.seed % MODULUS + paths)
