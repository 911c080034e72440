"""GET /api/weather - Current conditions for a city or coordinates."""

from datetime import datetime

from fastapi import APIRouter, HTTPException, Query

from ..config import resolve_timezone
from ..schemas.forecast import ConditionOut
from ..schemas.weather import CurrentWeatherResponse
from ..services.formatting import capitalize_words, format_temperature
from ..services.openweather import WeatherServiceError, fetch_current_weather

router = APIRouter()


@router.get("/weather", response_model=CurrentWeatherResponse)
async def get_weather(
    city: str | None = Query(None, description="City name, e.g. 'London,GB'"),
    lat: float | None = Query(None, ge=-90, le=90),
    lon: float | None = Query(None, ge=-180, le=180),
):
    """Return current conditions with display-ready strings."""
    try:
        data = await fetch_current_weather(city=city, lat=lat, lon=lon)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except WeatherServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    condition = data.weather[0]
    main = data.main
    observed = datetime.fromtimestamp(data.dt, tz=resolve_timezone(data.timezone))

    return CurrentWeatherResponse(
        city=data.name,
        country=data.sys.country,
        observed_at=observed.isoformat(),
        temperature=main.temp,
        feels_like=main.feels_like,
        temp_min=main.temp_min,
        temp_max=main.temp_max,
        humidity=main.humidity,
        pressure=main.pressure,
        wind_speed=data.wind.speed,
        description=capitalize_words(condition.description),
        weather=ConditionOut.from_condition(condition.to_condition()),
        display={
            "temperature": format_temperature(main.temp),
            "feels_like": format_temperature(main.feels_like),
            "high": format_temperature(main.temp_max),
            "low": format_temperature(main.temp_min),
            "humidity": f"{main.humidity}%",
            "wind": f"{data.wind.speed} m/s",
            "pressure": f"{main.pressure} hPa" if main.pressure is not None else "--",
        },
    )
