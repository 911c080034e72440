"""GET /api/config - Client preferences."""

from fastapi import APIRouter

from ..config import settings
from ..schemas.config import ClientConfigResponse

router = APIRouter()


@router.get("/config", response_model=ClientConfigResponse)
def get_config():
    """Return the preferences a client needs at startup."""
    return ClientConfigResponse(
        units=settings.units,
        theme=settings.theme,
        onboarding_complete=settings.onboarding_complete,
        forecast_timezone=settings.forecast_timezone or None,
    )
