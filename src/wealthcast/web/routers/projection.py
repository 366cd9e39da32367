"""Net-worth projection API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from wealthcast.analysis.forecast import (
    ProjectionRun,
    demo_params,
    run_projection,
    summarize_projection,
)
from wealthcast.analysis.projection import (
    InvalidParameterError,
    NonFiniteValueError,
    SimulationParams,
)
from wealthcast.config import Settings
from wealthcast.web.dependencies import get_settings
from wealthcast.web.schemas import (
    ApiResponse,
    HorizonSummaryItem,
    ProjectionData,
    ProjectionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projection", tags=["projection"])


@router.post("", response_model=ApiResponse[ProjectionData])
def create_projection(
    body: ProjectionRequest,
    settings: Settings = Depends(get_settings),
):
    """Run a projection for caller-supplied parameters."""
    try:
        params = SimulationParams(
            seed=body.seed,
            path_count=body.path_count,
            horizon_days=body.horizon_days,
            start_value=body.start_value,
            daily_drift_mean=body.daily_drift_mean,
            daily_drift_std_dev=body.daily_drift_std_dev,
            daily_return_mean=body.daily_return_mean,
            daily_return_std_dev=body.daily_return_std_dev,
            seeding=body.seeding,
        )
    except ValueError as e:
        # InvalidParameterError, or an unknown seeding mode
        raise HTTPException(status_code=422, detail=str(e))

    return ApiResponse(data=_run(params, settings, include_paths=body.include_paths))


@router.get("/demo", response_model=ApiResponse[ProjectionData])
def get_demo_projection(
    years: int = Query(5, ge=0),
    settings: Settings = Depends(get_settings),
):
    """Demo projection from $50,000 with the documented surplus/return constants."""
    if years > settings.projection_max_years:
        raise HTTPException(
            status_code=422,
            detail=f"years must be <= {settings.projection_max_years}",
        )

    params = demo_params(years, settings)
    return ApiResponse(data=_run(params, settings, include_paths=False))


def _run(params: SimulationParams, settings: Settings, include_paths: bool) -> ProjectionData:
    workload = params.path_count * (params.horizon_days + 1)
    if workload > settings.projection_max_path_days:
        raise HTTPException(
            status_code=422,
            detail=(
                f"path_count * (horizon_days + 1) = {workload} exceeds limit "
                f"{settings.projection_max_path_days}"
            ),
        )

    try:
        run = run_projection(params)
        horizons = summarize_projection(run, days_per_year=settings.days_per_year)
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except NonFiniteValueError as e:
        logger.error("Projection produced non-finite values: %s", e)
        raise HTTPException(status_code=500, detail="projection produced non-finite values")

    return _to_projection_data(run, horizons, include_paths)


def _to_projection_data(run: ProjectionRun, horizons: dict, include_paths: bool) -> ProjectionData:
    params = run["params"]
    bands = run["bands"]
    return ProjectionData(
        seed=params.seed,
        path_count=params.path_count,
        horizon_days=params.horizon_days,
        start_value=params.start_value,
        seeding=params.seeding.value,
        p10=bands["p10"].tolist(),
        p50=bands["p50"].tolist(),
        p90=bands["p90"].tolist(),
        horizons=[HorizonSummaryItem(**h) for h in horizons.values()],
        paths=run["paths"].tolist() if include_paths else None,
    )
