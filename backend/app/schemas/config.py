"""Pydantic schemas for configuration API."""

from pydantic import BaseModel


class ClientConfigResponse(BaseModel):
    units: str
    theme: str
    onboarding_complete: bool
    forecast_timezone: str | None = None
