"""GET /api/forecast - Daily and hourly forecast for a city or coordinates."""

import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, Query

from ..config import resolve_timezone
from ..schemas.forecast import (
    ConditionOut,
    DailyForecastOut,
    ForecastResponse,
    HourlyForecastOut,
)
from ..services.forecast_aggregator import summarize_daily, summarize_hourly
from ..services.openweather import WeatherServiceError, fetch_forecast

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/forecast", response_model=ForecastResponse)
async def get_forecast(
    city: str | None = Query(None, description="City name, e.g. 'London,GB'"),
    lat: float | None = Query(None, ge=-90, le=90),
    lon: float | None = Query(None, ge=-180, le=180),
):
    """Return up to 7 daily summaries and up to 8 hourly entries for today."""
    try:
        forecast = await fetch_forecast(city=city, lat=lat, lon=lon)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except WeatherServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    tz = resolve_timezone(forecast.city.timezone)
    today = datetime.now(tz).date()
    samples = forecast.to_samples()

    daily = [
        DailyForecastOut(
            date=d.calendar_date,
            day_name=d.day_label,
            temp_max=d.temp_max,
            temp_min=d.temp_min,
            weather=ConditionOut.from_condition(d.representative_condition),
            humidity=d.humidity_avg,
            wind_speed=d.wind_speed_avg,
            pop=d.precipitation_probability,
        )
        for d in summarize_daily(samples, tz)
    ]
    hourly = [
        HourlyForecastOut(
            time=h.clock_label,
            hour=h.hour_label,
            temp=h.temperature,
            weather=ConditionOut.from_condition(h.condition),
            pop=h.precipitation_probability,
        )
        for h in summarize_hourly(samples, today, tz)
    ]

    logger.debug(
        "Forecast for %s: %d samples -> %d days, %d hours",
        forecast.city.name, len(samples), len(daily), len(hourly),
    )

    return ForecastResponse(
        city=forecast.city.name,
        country=forecast.city.country,
        timezone=str(tz),
        today=today,
        daily=daily,
        hourly=hourly,
    )
