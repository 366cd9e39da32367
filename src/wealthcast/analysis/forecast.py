"""Net-worth projection orchestrator.

Runs the seeded path simulator, reduces the ensemble to p10/p50/p90 bands,
and derives per-horizon summaries for the dashboard tiles.
"""

import logging
import math
from typing import TypedDict

import numpy as np
import pandas as pd

from wealthcast.analysis.projection import (
    InvalidParameterError,
    QuantileBand,
    SimulationParams,
)
from wealthcast.analysis.projection.bands import aggregate_all
from wealthcast.analysis.projection.simulator import simulate
from wealthcast.analysis.stats import coefficient_of_variation
from wealthcast.config import Settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DAYS_PER_YEAR = 365


class ProjectionRun(TypedDict):
    """In-memory result of one projection: params, raw ensemble, bands."""
    params: SimulationParams
    paths: np.ndarray  # (path_count, horizon_days + 1)
    bands: QuantileBand


class ProjectionResult(TypedDict):
    """Plain-list output handed to chart renderers."""
    p10: list[float]
    p50: list[float]
    p90: list[float]
    paths: list[list[float]]


class HorizonSummary(TypedDict):
    label: str
    day: int
    p10: float
    p50: float
    p90: float
    expected_change_pct: float | None
    growth_prob: float
    depletion_prob: float
    dispersion: float


# ---------------------------------------------------------------------------
# Main entry points
# ---------------------------------------------------------------------------


def run_projection(params: SimulationParams) -> ProjectionRun:
    """Simulate the ensemble for ``params`` and band it."""
    paths = simulate(params)
    bands = aggregate_all(paths)

    logger.info(
        "Projection complete: %d paths, %d days, final median %.2f",
        params.path_count, params.horizon_days, float(bands["p50"][-1]),
    )
    return ProjectionRun(params=params, paths=paths, bands=bands)


def to_result(run: ProjectionRun, include_paths: bool = True) -> ProjectionResult:
    """Convert a run into the ``{p10, p50, p90, paths}`` output shape."""
    bands = run["bands"]
    return ProjectionResult(
        p10=bands["p10"].tolist(),
        p50=bands["p50"].tolist(),
        p90=bands["p90"].tolist(),
        paths=run["paths"].tolist() if include_paths else [],
    )


def run_monte_carlo(params: SimulationParams) -> ProjectionResult:
    """Simulate and band in one call, returning bands plus every path."""
    return to_result(run_projection(params))


def demo_params(time_horizon_years: int, settings: Settings | None = None) -> SimulationParams:
    """Parameters of the dashboard's demo projection.

    Monthly surplus figures are spread over calendar days; annual return
    and volatility are converted with the trading-day count (mean / 252,
    volatility / sqrt(252)).
    """
    if settings is None:
        settings = Settings()

    if time_horizon_years < 0:
        raise InvalidParameterError(
            f"time_horizon_years must be >= 0, got {time_horizon_years}"
        )

    return SimulationParams(
        seed=settings.projection_seed,
        path_count=settings.projection_path_count,
        horizon_days=time_horizon_years * settings.days_per_year,
        start_value=settings.projection_start_value,
        daily_drift_mean=settings.projection_monthly_surplus_mean / settings.days_per_month,
        daily_drift_std_dev=settings.projection_monthly_surplus_std / settings.days_per_month,
        daily_return_mean=(
            settings.projection_annual_return_mean / settings.trading_days_per_year
        ),
        daily_return_std_dev=(
            settings.projection_annual_return_volatility
            / math.sqrt(settings.trading_days_per_year)
        ),
        seeding=settings.projection_seeding,
    )


def get_demo_projection(
    time_horizon_years: int, settings: Settings | None = None
) -> ProjectionResult:
    """Demo projection: 5000 paths from $50,000 over ``years * 365`` days."""
    return run_monte_carlo(demo_params(time_horizon_years, settings))


# ---------------------------------------------------------------------------
# Summaries
# ---------------------------------------------------------------------------


def summary_days(horizon_days: int, days_per_year: int = DAYS_PER_YEAR) -> tuple[int, ...]:
    """Yearly checkpoints up to the horizon, always ending at the final day."""
    days = list(range(days_per_year, horizon_days + 1, days_per_year))
    if not days or days[-1] != horizon_days:
        days.append(horizon_days)
    return tuple(days)


def summarize_projection(
    run: ProjectionRun,
    days: tuple[int, ...] | None = None,
    days_per_year: int = DAYS_PER_YEAR,
) -> dict[int, HorizonSummary]:
    """Per-horizon distribution stats taken from the ensemble.

    Args:
        run: Result of ``run_projection``.
        days: Day indices to summarise (default: yearly + final day).
        days_per_year: Calendar days per labelled year.

    Returns:
        {day: HorizonSummary} in ascending day order.
    """
    params = run["params"]
    paths = run["paths"]
    bands = run["bands"]

    if days is None:
        days = summary_days(params.horizon_days, days_per_year)

    start = params.start_value
    summaries: dict[int, HorizonSummary] = {}

    for day in sorted(days):
        if not 0 <= day <= params.horizon_days:
            raise InvalidParameterError(
                f"day {day} outside projection horizon 0..{params.horizon_days}"
            )

        values = paths[:, day]
        if start != 0:
            change_pct = round(float((np.mean(values) / start - 1) * 100), 2)
        else:
            change_pct = None

        summaries[day] = HorizonSummary(
            label=_horizon_label(day, days_per_year),
            day=day,
            p10=round(float(bands["p10"][day]), 2),
            p50=round(float(bands["p50"][day]), 2),
            p90=round(float(bands["p90"][day]), 2),
            expected_change_pct=change_pct,
            growth_prob=round(float(np.mean(values > start)), 4),
            depletion_prob=round(float(np.mean(values == 0)), 4),
            dispersion=round(coefficient_of_variation(values), 4),
        )

    return summaries


def bands_frame(run: ProjectionRun) -> pd.DataFrame:
    """Bands as a day-indexed DataFrame (columns p10, p50, p90)."""
    bands = run["bands"]
    frame = pd.DataFrame(
        {"p10": bands["p10"], "p50": bands["p50"], "p90": bands["p90"]},
        index=pd.RangeIndex(len(bands["p50"]), name="day"),
    )
    return frame


def _horizon_label(day: int, days_per_year: int) -> str:
    if day > 0 and day % days_per_year == 0:
        return f"{day // days_per_year}y"
    return f"{day}d"
