"""Pydantic schemas for current conditions (OpenWeatherMap /weather)."""

from pydantic import BaseModel, Field

from .forecast import ConditionOut, OWMCondition, OWMCoord, OWMMain, OWMWind


class OWMSys(BaseModel):
    country: str | None = None
    sunrise: int | None = None
    sunset: int | None = None


class CurrentWeatherPayload(BaseModel):
    """Validated /weather response."""
    name: str
    coord: OWMCoord | None = None
    weather: list[OWMCondition] = Field(min_length=1)
    main: OWMMain
    wind: OWMWind
    dt: int
    sys: OWMSys = OWMSys()
    timezone: int = 0  # seconds east of UTC


class CurrentWeatherResponse(BaseModel):
    city: str
    country: str | None = None
    observed_at: str  # ISO 8601, location-local
    temperature: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int
    pressure: int | None = None
    wind_speed: float
    description: str
    weather: ConditionOut
    display: dict[str, str]
