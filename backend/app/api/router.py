"""Top-level API router aggregation."""

from fastapi import APIRouter

from . import config, forecast, weather

api_router = APIRouter(prefix="/api")

api_router.include_router(weather.router)
api_router.include_router(forecast.router)
api_router.include_router(config.router)
