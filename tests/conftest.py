"""Pytest configuration and shared fixtures."""

import math

import pytest

from wealthcast.analysis.projection import SimulationParams
from wealthcast.config import Settings


# Documented demo constants, converted to daily figures
DAILY_DRIFT_MEAN = 85 / 30
DAILY_DRIFT_STD = 70 / 30
DAILY_RETURN_MEAN = 0.072 / 252
DAILY_RETURN_STD = 0.15 / math.sqrt(252)


@pytest.fixture
def demo_like_params():
    """Demo constants with a small ensemble for test speed."""
    return SimulationParams(
        seed=42,
        path_count=200,
        horizon_days=365,
        start_value=50000.0,
        daily_drift_mean=DAILY_DRIFT_MEAN,
        daily_drift_std_dev=DAILY_DRIFT_STD,
        daily_return_mean=DAILY_RETURN_MEAN,
        daily_return_std_dev=DAILY_RETURN_STD,
    )


@pytest.fixture
def small_settings(tmp_path):
    """Settings with a small demo ensemble, isolated from any .env file."""
    return Settings(
        _env_file=None,
        projection_path_count=100,
        log_dir=str(tmp_path / "logs"),
    )
