"""Pydantic schemas for the OpenWeatherMap forecast payload and forecast API."""

from datetime import date

from pydantic import BaseModel, Field

from ..services.forecast_aggregator import ForecastSample, WeatherCondition
from ..services.formatting import weather_icon_url


# --- Upstream (OpenWeatherMap /forecast) ---

class OWMCondition(BaseModel):
    id: int
    main: str
    description: str
    icon: str

    def to_condition(self) -> WeatherCondition:
        return WeatherCondition(
            id=self.id, main=self.main,
            description=self.description, icon=self.icon,
        )


class OWMCoord(BaseModel):
    lat: float
    lon: float


class OWMMain(BaseModel):
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    pressure: int | None = None
    humidity: int = Field(ge=0, le=100)


class OWMWind(BaseModel):
    speed: float
    deg: int | None = None


class OWMForecastItem(BaseModel):
    dt: int
    main: OWMMain
    weather: list[OWMCondition] = Field(min_length=1)
    wind: OWMWind
    pop: float = Field(default=0.0, ge=0.0, le=1.0)
    dt_txt: str | None = None

    def to_sample(self) -> ForecastSample:
        return ForecastSample(
            timestamp=self.dt,
            temperature=self.main.temp,
            feels_like=self.main.feels_like,
            temp_min=self.main.temp_min,
            temp_max=self.main.temp_max,
            humidity=self.main.humidity,
            wind_speed=self.wind.speed,
            precipitation_probability=self.pop,
            conditions=tuple(w.to_condition() for w in self.weather),
        )


class OWMCity(BaseModel):
    name: str
    country: str | None = None
    coord: OWMCoord | None = None
    timezone: int = 0  # seconds east of UTC


class ForecastPayload(BaseModel):
    """Validated /forecast response."""
    items: list[OWMForecastItem] = Field(alias="list")
    city: OWMCity

    def to_samples(self) -> list[ForecastSample]:
        return [item.to_sample() for item in self.items]


# --- API response ---

class ConditionOut(BaseModel):
    id: int
    main: str
    description: str
    icon: str
    icon_url: str

    @classmethod
    def from_condition(cls, condition: WeatherCondition) -> "ConditionOut":
        return cls(
            id=condition.id,
            main=condition.main,
            description=condition.description,
            icon=condition.icon,
            icon_url=weather_icon_url(condition.icon),
        )


class DailyForecastOut(BaseModel):
    date: date
    day_name: str
    temp_max: float
    temp_min: float
    weather: ConditionOut
    humidity: int
    wind_speed: float
    pop: int


class HourlyForecastOut(BaseModel):
    time: str
    hour: str
    temp: int
    weather: ConditionOut
    pop: int


class ForecastResponse(BaseModel):
    city: str
    country: str | None = None
    timezone: str
    today: date
    daily: list[DailyForecastOut]
    hourly: list[HourlyForecastOut]
