"""Shared fixtures: OpenWeatherMap-shaped payloads and clean client state."""

from datetime import datetime, timedelta, timezone

import pytest

from app.config import settings
from app.services import openweather


def _make_item(dt: int, temp: float = 10.0, pop: float = 0.0,
               weather_id: int = 800, humidity: int = 50) -> dict:
    return {
        "dt": dt,
        "main": {
            "temp": temp, "feels_like": temp - 1, "temp_min": temp - 2,
            "temp_max": temp + 2, "pressure": 1012, "humidity": humidity,
        },
        "weather": [{
            "id": weather_id, "main": "Clear",
            "description": "clear sky", "icon": "01d",
        }],
        "clouds": {"all": 0},
        "wind": {"speed": 3.0, "deg": 200},
        "visibility": 10000,
        "pop": pop,
        "dt_txt": datetime.fromtimestamp(dt, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
    }


def _make_forecast(start: datetime, days: int = 5, city: str = "London",
                   tz_offset: int = 0) -> dict:
    """3-hourly series covering ``days`` days from ``start``."""
    items = [
        _make_item(int((start + timedelta(hours=3 * i)).timestamp()), temp=10 + i % 8)
        for i in range(days * 8)
    ]
    return {
        "cod": "200",
        "message": 0,
        "cnt": len(items),
        "list": items,
        "city": {
            "id": 2643743, "name": city,
            "coord": {"lat": 51.5085, "lon": -0.1257},
            "country": "GB", "population": 1000000, "timezone": tz_offset,
            "sunrise": 0, "sunset": 0,
        },
    }


def _make_current(temp: float = 21.6, description: str = "light rain") -> dict:
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "weather": [{"id": 500, "main": "Rain", "description": description, "icon": "10d"}],
        "base": "stations",
        "main": {
            "temp": temp, "feels_like": temp - 0.5, "temp_min": temp - 2.2,
            "temp_max": temp + 1.1, "pressure": 1009, "humidity": 81,
        },
        "visibility": 10000,
        "wind": {"speed": 4.1, "deg": 240},
        "clouds": {"all": 75},
        "dt": 1772460000,
        "sys": {"type": 2, "id": 2075535, "country": "GB",
                "sunrise": 1772434000, "sunset": 1772474000},
        "timezone": 0,
        "id": 2643743,
        "name": "London",
        "cod": 200,
    }


@pytest.fixture(autouse=True)
def _clean_client_state(monkeypatch):
    monkeypatch.setattr(settings, "openweather_api_key", "test-key")
    monkeypatch.setattr(settings, "cache_ttl_sec", 600)
    monkeypatch.setattr(settings, "forecast_timezone", "")
    openweather.clear_cache()
    yield
    openweather.clear_cache()


@pytest.fixture
def forecast_json():
    """Builder for /forecast bodies: forecast_json(start, days=5, city=..., tz_offset=0)."""
    return _make_forecast


@pytest.fixture
def current_json():
    """Builder for /weather bodies: current_json(temp=21.6, description=...)."""
    return _make_current
