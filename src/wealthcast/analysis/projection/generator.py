"""Deterministic pseudo-random generator for reproducible projections.

Linear congruential generator with fixed constants plus a Box-Muller
transform for standard normals. Same seed -> same chart.

The constants satisfy Hull-Dobell, so the generator visits all 233280
states before repeating. The full cycle is tabulated once, which makes any
future draw addressable by its offset from a starting state and lets the
simulator pull a whole day's draws for every path in one numpy call.
"""

import logging
from functools import lru_cache
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280

# Substituted for a zero uniform before taking its logarithm
MIN_UNIFORM = 0.5 / MODULUS


class LCGCycle(NamedTuple):
    states: np.ndarray    # states[k] = k-th state after 0
    position: np.ndarray  # inverse permutation: position[states[k]] = k


@lru_cache(maxsize=1)
def lcg_cycle() -> LCGCycle:
    """Tabulate one full period of the generator, starting from state 0."""
    states = np.empty(MODULUS, dtype=np.int64)
    state = 0
    for k in range(MODULUS):
        states[k] = state
        state = (state * MULTIPLIER + INCREMENT) % MODULUS

    position = np.empty(MODULUS, dtype=np.int64)
    position[states] = np.arange(MODULUS, dtype=np.int64)

    states.flags.writeable = False
    position.flags.writeable = False
    logger.debug("LCG cycle tabulated: %d states", MODULUS)
    return LCGCycle(states=states, position=position)


def state_positions(seeds) -> np.ndarray:
    """Cycle positions of the states a generator would start from."""
    seeds = np.asarray(seeds, dtype=np.int64) % MODULUS
    return lcg_cycle().position[seeds]


def uniforms_at(positions) -> np.ndarray:
    """Uniform draws at absolute cycle positions (wrapping at the period)."""
    states = lcg_cycle().states[np.asarray(positions, dtype=np.int64) % MODULUS]
    return states / MODULUS


def box_muller(u1, u2):
    """Standard normal from two uniforms: sqrt(-2 ln u1) * cos(2 pi u2)."""
    u1 = np.maximum(u1, MIN_UNIFORM)
    return np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)


class SeededRandom:
    """Reproducible uniform/normal source owned by a single simulation run."""

    def __init__(self, seed: int):
        # Any seed is equivalent to its residue after the first update
        self._state = int(seed) % MODULUS

    @property
    def state(self) -> int:
        return self._state

    @property
    def position(self) -> int:
        """Index of the current state within the tabulated cycle."""
        return int(lcg_cycle().position[self._state])

    def next_uniform(self) -> float:
        self._state = (self._state * MULTIPLIER + INCREMENT) % MODULUS
        return self._state / MODULUS

    def next_normal(self) -> float:
        u1 = self.next_uniform()
        u2 = self.next_uniform()
        return float(box_muller(u1, u2))

    def advance(self, count: int) -> None:
        """Skip ``count`` uniform draws."""
        if count < 0:
            raise ValueError("count must be non-negative")
        cycle = lcg_cycle()
        self._state = int(cycle.states[(cycle.position[self._state] + count) % MODULUS])

    def uniforms(self, count: int) -> np.ndarray:
        """Next ``count`` uniforms as an array; state advances as for scalar draws."""
        draws = uniforms_at(self.position + np.arange(1, count + 1, dtype=np.int64))
        self.advance(count)
        return draws

    def normals(self, count: int) -> np.ndarray:
        """Next ``count`` standard normals (two uniforms each)."""
        u = self.uniforms(2 * count)
        return box_muller(u[0::2], u[1::2])
