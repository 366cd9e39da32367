"""Unit tests for the day-by-day path simulator."""

import dataclasses
import math

import numpy as np
import pytest

from wealthcast.analysis.projection import (
    InvalidParameterError,
    NonFiniteValueError,
    SeedingMode,
    SimulationParams,
)
from wealthcast.analysis.projection.generator import SeededRandom
from wealthcast.analysis.projection.simulator import simulate

DAILY_DRIFT_MEAN = 85 / 30
DAILY_DRIFT_STD = 70 / 30
DAILY_RETURN_MEAN = 0.072 / 252
DAILY_RETURN_STD = 0.15 / math.sqrt(252)


def make_params(**overrides) -> SimulationParams:
    base = dict(
        seed=42,
        path_count=50,
        horizon_days=30,
        start_value=50000.0,
        daily_drift_mean=DAILY_DRIFT_MEAN,
        daily_drift_std_dev=DAILY_DRIFT_STD,
        daily_return_mean=DAILY_RETURN_MEAN,
        daily_return_std_dev=DAILY_RETURN_STD,
    )
    base.update(overrides)
    return SimulationParams(**base)


def scalar_stream(params: SimulationParams) -> np.ndarray:
    """Straightforward per-path loop over one shared generator."""
    rng = SeededRandom(params.seed)
    rows = []
    for _ in range(params.path_count):
        value = params.start_value
        row = [value]
        for _ in range(params.horizon_days):
            surplus = rng.next_normal() * params.daily_drift_std_dev + params.daily_drift_mean
            ret = rng.next_normal() * params.daily_return_std_dev + params.daily_return_mean
            value = max(0.0, value * (1 + ret) + surplus)
            row.append(value)
        rows.append(row)
    return np.array(rows)


# ---------------------------------------------------------------------------
# Parameter validation
# ---------------------------------------------------------------------------

class TestSimulationParams:
    def test_frozen(self):
        params = make_params()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.seed = 1

    def test_default_seeding_is_stream(self):
        assert make_params().seeding is SeedingMode.STREAM

    def test_string_seeding_accepted(self):
        assert make_params(seeding="offset").seeding is SeedingMode.OFFSET

    def test_unknown_seeding_rejected(self):
        with pytest.raises(ValueError):
            make_params(seeding="shuffle")

    @pytest.mark.parametrize("overrides", [
        {"path_count": 0},
        {"path_count": -5},
        {"horizon_days": -1},
        {"daily_drift_std_dev": -0.1},
        {"daily_return_std_dev": -1e-9},
        {"start_value": math.nan},
        {"daily_return_mean": math.inf},
        {"seed": 1.5},
        {"path_count": 2.5},
        {"path_count": True},
        {"horizon_days": 10.0},
        {"horizon_days": False},
    ])
    def test_invalid_parameters(self, overrides):
        with pytest.raises(InvalidParameterError):
            make_params(**overrides)

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            make_params(path_count=0)


# ---------------------------------------------------------------------------
# Ensemble shape and invariants
# ---------------------------------------------------------------------------

class TestSimulate:
    def test_shape(self, demo_like_params):
        ensemble = simulate(demo_like_params)
        assert ensemble.shape == (200, 366)

    def test_day_zero_is_start_value(self, demo_like_params):
        ensemble = simulate(demo_like_params)
        assert np.all(ensemble[:, 0] == 50000.0)

    def test_deterministic(self, demo_like_params):
        a = simulate(demo_like_params)
        b = simulate(demo_like_params)
        assert a.tobytes() == b.tobytes()

    def test_different_seeds_differ(self, demo_like_params):
        other = dataclasses.replace(demo_like_params, seed=43)
        assert not np.array_equal(simulate(demo_like_params), simulate(other))

    def test_read_only(self, demo_like_params):
        ensemble = simulate(demo_like_params)
        with pytest.raises(ValueError):
            ensemble[0, 0] = 1.0

    def test_zero_horizon(self):
        ensemble = simulate(make_params(horizon_days=0, path_count=7))
        assert ensemble.shape == (7, 1)
        assert np.all(ensemble == 50000.0)

    def test_zero_variance_is_constant(self):
        params = make_params(
            daily_drift_mean=0.0,
            daily_drift_std_dev=0.0,
            daily_return_mean=0.0,
            daily_return_std_dev=0.0,
            horizon_days=100,
        )
        ensemble = simulate(params)
        assert np.all(ensemble == 50000.0)

    def test_non_negative_with_depletion(self):
        params = make_params(
            start_value=100.0,
            daily_drift_mean=-50.0,
            daily_drift_std_dev=10.0,
            horizon_days=20,
        )
        ensemble = simulate(params)
        assert np.all(ensemble >= 0.0)
        assert np.any(ensemble[:, -1] == 0.0)

    def test_overflow_raises(self):
        params = make_params(
            start_value=1e300,
            daily_return_mean=1e300,
            daily_return_std_dev=0.0,
            horizon_days=2,
            path_count=2,
        )
        with pytest.raises(NonFiniteValueError):
            simulate(params)


# ---------------------------------------------------------------------------
# Draw-to-path mapping
# ---------------------------------------------------------------------------

class TestSeedingModes:
    def test_first_step_pinned(self, demo_like_params):
        ensemble = simulate(demo_like_params)
        assert ensemble[0, 1] == pytest.approx(50034.598990832666, rel=1e-9)

    def test_first_step_pinned_full_demo_size(self, demo_like_params):
        params = dataclasses.replace(demo_like_params, path_count=5000)
        ensemble = simulate(params)
        assert ensemble.shape == (5000, 366)
        assert ensemble[0, 1] == pytest.approx(50034.598990832666, rel=1e-9)

    def test_first_step_uses_first_four_draws(self, demo_like_params):
        rng = SeededRandom(42)
        surplus = rng.next_normal() * DAILY_DRIFT_STD + DAILY_DRIFT_MEAN
        ret = rng.next_normal() * DAILY_RETURN_STD + DAILY_RETURN_MEAN
        expected = max(0.0, 50000.0 * (1 + ret) + surplus)
        assert simulate(demo_like_params)[0, 1] == pytest.approx(expected, rel=1e-12)

    def test_stream_matches_scalar_loop(self):
        params = make_params(path_count=4, horizon_days=40)
        np.testing.assert_allclose(simulate(params), scalar_stream(params), rtol=1e-10)

    def test_stream_paths_differ(self, demo_like_params):
        ensemble = simulate(demo_like_params)
        assert not np.array_equal(ensemble[0], ensemble[1])

    def test_replay_paths_identical(self):
        params = make_params(seeding=SeedingMode.REPLAY, path_count=10)
        ensemble = simulate(params)
        for row in ensemble[1:]:
            assert np.array_equal(row, ensemble[0])

    def test_replay_row_equals_single_stream_path(self):
        replay = simulate(make_params(seeding=SeedingMode.REPLAY, path_count=3))
        single = simulate(make_params(path_count=1))
        np.testing.assert_allclose(replay[2], single[0], rtol=1e-12)

    def test_offset_rows_use_seed_plus_index(self):
        offset = simulate(make_params(seeding=SeedingMode.OFFSET, path_count=5))
        for p in range(5):
            single = simulate(make_params(seed=42 + p, path_count=1))
            np.testing.assert_allclose(offset[p], single[0], rtol=1e-12)
