"""Display formatting helpers shared by the forecast and weather views."""

import math
import re

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{code}@2x.png"


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with .5 going toward +infinity (2.5 -> 3, -2.5 -> -2), unlike round()."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def round_int(value: float) -> int:
    return int(round_half_up(value))


def to_percent(probability: float) -> int:
    """Scale a 0.0-1.0 probability to a rounded 0-100 percent."""
    return round_int(probability * 100)


def format_temperature(temp: float) -> str:
    return f"{round_int(temp)}°C"


def weather_icon_url(icon_code: str) -> str:
    return ICON_URL_TEMPLATE.format(code=icon_code)


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of every word, leaving the rest alone."""
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), text)
