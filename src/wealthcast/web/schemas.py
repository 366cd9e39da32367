"""Pydantic request/response schemas for the wealthcast API."""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


# --- Base schemas ---


class Meta(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ApiResponse(BaseModel, Generic[T]):
    data: T
    meta: Meta = Field(default_factory=Meta)


# --- Projection schemas ---


class ProjectionRequest(BaseModel):
    seed: int = Field(42, description="Generator seed; same seed -> same projection")
    path_count: int = Field(1000, description="Number of simulated paths")
    horizon_days: int = Field(365, description="Days projected forward")
    start_value: float = Field(50000.0, description="Net worth at day 0")
    daily_drift_mean: float = Field(0.0, description="Mean daily surplus")
    daily_drift_std_dev: float = Field(0.0, description="Std-dev of daily surplus")
    daily_return_mean: float = Field(0.0, description="Mean daily return")
    daily_return_std_dev: float = Field(0.0, description="Std-dev of daily return")
    seeding: str = Field("stream", description="stream, replay or offset")
    include_paths: bool = Field(False, description="Return every simulated path")


class HorizonSummaryItem(BaseModel):
    label: str
    day: int
    p10: float
    p50: float
    p90: float
    expected_change_pct: float | None = None
    growth_prob: float
    depletion_prob: float
    dispersion: float


class ProjectionData(BaseModel):
    seed: int
    path_count: int
    horizon_days: int
    start_value: float
    seeding: str
    p10: list[float]
    p50: list[float]
    p90: list[float]
    horizons: list[HorizonSummaryItem]
    paths: list[list[float]] | None = None


# --- System schemas ---


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    service: str = "wealthcast-api"
