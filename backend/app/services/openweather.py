"""OpenWeatherMap API client for current conditions and 5-day forecasts.

Looks up a location either by city name or by coordinates. Responses are
validated into pydantic models before anything downstream sees them, and
every failure is translated into a WeatherServiceError carrying a message
that can be shown to the user as-is.

Validated forecasts are cached in memory for ``settings.cache_ttl_sec``.
Current conditions are always fetched fresh.

API docs: https://openweathermap.org/current, https://openweathermap.org/forecast5
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ..config import settings
from ..schemas.forecast import ForecastPayload
from ..schemas.weather import CurrentWeatherPayload

logger = logging.getLogger(__name__)

MSG_CITY_NOT_FOUND = "City not found. Please check the city name and try again."
MSG_INVALID_KEY = "Invalid API key. Please check your OpenWeatherMap API key."
MSG_TIMEOUT = "Request timeout. Please check your internet connection."
MSG_FETCH_FAILED = "Failed to fetch {what} data. Please try again later."
MSG_BAD_RESPONSE = "Received malformed {what} data from the weather service."


class WeatherServiceError(Exception):
    """Upstream lookup failed. ``message`` is safe to show to end users."""

    status_code = 502

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CityNotFoundError(WeatherServiceError):
    status_code = 404


class InvalidApiKeyError(WeatherServiceError):
    status_code = 502


class UpstreamTimeoutError(WeatherServiceError):
    status_code = 504


class UpstreamResponseError(WeatherServiceError):
    status_code = 502


@dataclass
class _CacheEntry:
    """Internal cache entry for a validated forecast."""
    forecast: ForecastPayload
    expires_at: float


# Module-level cache keyed by normalized location query.
_cache: dict[tuple, _CacheEntry] = {}


def clear_cache() -> None:
    _cache.clear()


def _location_params(
    city: Optional[str],
    lat: Optional[float],
    lon: Optional[float],
) -> dict[str, Any]:
    """Build the location part of the query. Exactly one form is allowed."""
    has_city = bool(city and city.strip())
    if has_city and (lat is not None or lon is not None):
        raise ValueError("Provide either a city name or coordinates, not both")
    if has_city:
        return {"q": city.strip()}
    if lat is None or lon is None:
        raise ValueError("Provide either a city name or both lat and lon")
    return {"lat": lat, "lon": lon}


def _cache_key(params: dict[str, Any]) -> tuple:
    """Produce a stable cache key from the location params."""
    if "q" in params:
        return ("q", params["q"].lower())
    return ("coord", round(params["lat"], 4), round(params["lon"], 4))


def _get_cached(key: tuple) -> Optional[ForecastPayload]:
    """Return cached forecast if still valid, else None."""
    entry = _cache.get(key)
    if entry is not None and time.time() < entry.expires_at:
        logger.debug("Forecast cache hit for %s", key)
        return entry.forecast
    return None


def _set_cached(key: tuple, forecast: ForecastPayload) -> None:
    if settings.cache_ttl_sec <= 0:
        return
    _cache[key] = _CacheEntry(
        forecast=forecast,
        expires_at=time.time() + settings.cache_ttl_sec,
    )


async def _get_json(
    path: str,
    location: dict[str, Any],
    what: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """GET an OpenWeatherMap endpoint and return the decoded JSON body.

    Args:
        path: Endpoint path relative to the base URL ("/weather", "/forecast").
        location: Output of _location_params().
        what: Noun used in error messages ("weather", "forecast").
        transport: Optional httpx transport, used by tests.

    Raises:
        WeatherServiceError subclass describing the failure.
    """
    if not settings.openweather_api_key:
        logger.warning("OpenWeatherMap API key is not configured")
        raise InvalidApiKeyError(MSG_INVALID_KEY)

    params = {
        **location,
        "appid": settings.openweather_api_key,
        "units": settings.units,
    }

    async with httpx.AsyncClient(
        base_url=settings.openweather_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    ) as client:
        try:
            resp = await client.get(path, params=params)
            resp.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("OpenWeatherMap %s timed out for %s: %s", path, location, exc)
            raise UpstreamTimeoutError(MSG_TIMEOUT) from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("OpenWeatherMap %s returned %d for %s", path, status, location)
            if status == 404 and "q" in location:
                raise CityNotFoundError(MSG_CITY_NOT_FOUND) from exc
            if status == 401:
                raise InvalidApiKeyError(MSG_INVALID_KEY) from exc
            raise WeatherServiceError(MSG_FETCH_FAILED.format(what=what)) from exc
        except httpx.HTTPError as exc:
            logger.warning("OpenWeatherMap %s failed for %s: %s", path, location, exc)
            raise WeatherServiceError(MSG_FETCH_FAILED.format(what=what)) from exc

    try:
        return resp.json()
    except ValueError as exc:
        logger.warning("OpenWeatherMap %s returned non-JSON body for %s", path, location)
        raise UpstreamResponseError(MSG_BAD_RESPONSE.format(what=what)) from exc


async def fetch_current_weather(
    city: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> CurrentWeatherPayload:
    """Fetch current conditions for a city name or a coordinate pair."""
    location = _location_params(city, lat, lon)
    data = await _get_json("/weather", location, "weather", transport)

    try:
        payload = CurrentWeatherPayload.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid /weather payload for %s: %s", location, exc)
        raise UpstreamResponseError(MSG_BAD_RESPONSE.format(what="weather")) from exc

    logger.info("Current weather fetched for %s (%s)", payload.name, location)
    return payload


async def fetch_forecast(
    city: Optional[str] = None,
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ForecastPayload:
    """Fetch the 5-day / 3-hour forecast series, with caching.

    Raises:
        ValueError: neither or both location forms were given.
        WeatherServiceError: the upstream lookup failed.
    """
    location = _location_params(city, lat, lon)
    key = _cache_key(location)
    cached = _get_cached(key)
    if cached is not None:
        return cached

    data = await _get_json("/forecast", location, "forecast", transport)

    try:
        forecast = ForecastPayload.model_validate(data)
    except ValidationError as exc:
        logger.warning("Invalid /forecast payload for %s: %s", location, exc)
        raise UpstreamResponseError(MSG_BAD_RESPONSE.format(what="forecast")) from exc

    _set_cached(key, forecast)
    logger.info(
        "Forecast fetched for %s (%s): %d samples",
        forecast.city.name, location, len(forecast.items),
    )
    return forecast
