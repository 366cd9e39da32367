"""FastAPI dependency injection providers."""

from fastapi import Request

from wealthcast.config import Settings


def get_settings(request: Request) -> Settings:
    """Get application settings from app state."""
    return request.app.state.settings
