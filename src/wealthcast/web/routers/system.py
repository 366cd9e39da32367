"""System endpoints: health check."""

from fastapi import APIRouter

from wealthcast.web.app import API_VERSION
from wealthcast.web.schemas import HealthResponse

router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthResponse)
async def health():
    """API health check."""
    return HealthResponse(status="ok", version=API_VERSION)
