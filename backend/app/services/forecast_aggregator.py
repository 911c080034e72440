"""Forecast aggregation into daily and hourly view records.

Takes the flat 5-day / 3-hour forecast series and reduces it into at most
seven per-day summaries and at most eight "today" hourly entries.

Everything here is a pure function of its arguments. The calendar day of a
sample depends on the time zone, so callers pass one in explicitly, along
with the reference date for "today".
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, tzinfo

from .formatting import round_half_up, round_int, to_percent

MAX_DAILY_SUMMARIES = 7
MAX_HOURLY_SUMMARIES = 8

# Fixed English names so labels don't depend on the process locale.
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class WeatherCondition:
    """One OpenWeatherMap condition entry (e.g. 800 / Clear / clear sky / 01d)."""
    id: int
    main: str
    description: str
    icon: str


@dataclass(frozen=True)
class ForecastSample:
    """A single forecast data point at a fixed time."""
    timestamp: int  # Unix seconds, UTC
    temperature: float  # degrees C
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: int  # percent
    wind_speed: float  # m/s
    precipitation_probability: float  # 0.0-1.0
    conditions: tuple[WeatherCondition, ...]

    @property
    def primary_condition(self) -> WeatherCondition:
        return self.conditions[0]

    def local_time(self, tz: tzinfo) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=tz)


@dataclass(frozen=True)
class DailySummary:
    calendar_date: date
    day_label: str
    temp_max: float
    temp_min: float
    representative_condition: WeatherCondition
    humidity_avg: int
    wind_speed_avg: float
    precipitation_probability: int  # percent


@dataclass(frozen=True)
class HourlySummary:
    clock_label: str  # "HH:MM"
    hour_label: str  # "HH:00"
    temperature: int
    condition: WeatherCondition
    precipitation_probability: int  # percent


def group_by_calendar_day(
    samples: list[ForecastSample],
    tz: tzinfo,
) -> dict[date, list[ForecastSample]]:
    """Bucket samples by their local calendar date in ``tz``.

    Keys keep the order in which each date first appears, so the result can
    be walked chronologically without sorting.
    """
    groups: dict[date, list[ForecastSample]] = {}
    for sample in samples:
        day = sample.local_time(tz).date()
        groups.setdefault(day, []).append(sample)
    return groups


def _representative_condition(group: list[ForecastSample]) -> WeatherCondition:
    """Most frequent primary condition; ties go to the code seen first.

    Counter.most_common() orders equal counts by first insertion.
    """
    counts = Counter(s.primary_condition.id for s in group)
    winner, _ = counts.most_common(1)[0]
    return next(
        (s.primary_condition for s in group if s.primary_condition.id == winner),
        group[0].primary_condition,
    )


def _summarize_day(day: date, group: list[ForecastSample]) -> DailySummary:
    temps = [s.temperature for s in group]
    humidities = [s.humidity for s in group]
    wind_speeds = [s.wind_speed for s in group]

    return DailySummary(
        calendar_date=day,
        day_label=WEEKDAY_LABELS[day.weekday()],
        temp_max=max(temps),
        temp_min=min(temps),
        representative_condition=_representative_condition(group),
        humidity_avg=round_int(sum(humidities) / len(humidities)),
        wind_speed_avg=round_half_up(sum(wind_speeds) / len(wind_speeds), 1),
        precipitation_probability=to_percent(
            max(s.precipitation_probability for s in group)
        ),
    )


def summarize_daily(
    samples: list[ForecastSample],
    tz: tzinfo,
) -> list[DailySummary]:
    """Reduce a forecast series to one summary per local day.

    Min/max come from the instantaneous ``temperature`` field; the per-sample
    temp_min/temp_max values are unreliable over 3-hour windows. Only the
    first MAX_DAILY_SUMMARIES days are returned.
    """
    groups = group_by_calendar_day(samples, tz)
    summaries = [_summarize_day(day, group) for day, group in groups.items()]
    return summaries[:MAX_DAILY_SUMMARIES]


def _summarize_hour(sample: ForecastSample, tz: tzinfo) -> HourlySummary:
    local = sample.local_time(tz)
    return HourlySummary(
        clock_label=local.strftime("%H:%M"),
        hour_label=f"{local.hour:02d}:00",
        temperature=round_int(sample.temperature),
        condition=sample.primary_condition,
        precipitation_probability=to_percent(sample.precipitation_probability),
    )


def summarize_hourly(
    samples: list[ForecastSample],
    today: date,
    tz: tzinfo,
) -> list[HourlySummary]:
    """Hourly entries for samples falling on ``today`` in ``tz``.

    Input order is kept and at most MAX_HOURLY_SUMMARIES entries are returned.
    """
    todays = [s for s in samples if s.local_time(tz).date() == today]
    return [_summarize_hour(s, tz) for s in todays[:MAX_HOURLY_SUMMARIES]]
