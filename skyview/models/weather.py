"""Weather view-model: per-day details, hourly entries and the root aggregate."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

NOT_AVAILABLE = "N/A"
ADVICE_PLACEHOLDER = "..."
SEA_LEVEL_PRESSURE_HPA = 1013
DEFAULT_VISIBILITY = "10 km"


class Background(StrEnum):
    SUNNY = "sunny"
    NIGHT = "night"
    RAIN = "rain"
    CLOUDY = "cloudy"


@dataclass(frozen=True)
class Condition:
    text: str
    background: Background


@dataclass(frozen=True)
class DetailRecord:
    uv_index: float | None
    sunrise: str  # HH:MM, location-local
    sunset: str  # HH:MM, location-local
    wind_speed: int  # km/h
    wind_direction: int  # degrees, 0-359
    humidity: str = NOT_AVAILABLE
    feels_like: str = NOT_AVAILABLE
    visibility: str = DEFAULT_VISIBILITY
    pressure: int = SEA_LEVEL_PRESSURE_HPA
    precipitation: str = "0 mm"
    dew_point: str | None = NOT_AVAILABLE


@dataclass(frozen=True)
class DailyEntry:
    day: str
    date: str  # YYYY-MM-DD
    min: int
    max: int
    code: int
    details: DetailRecord


@dataclass(frozen=True)
class HourlyEntry:
    time: datetime  # carries the location's UTC offset
    temp: int
    code: int
    is_day: int


@dataclass(frozen=True)
class HourlySlot:
    entry: HourlyEntry
    label: str


@dataclass(frozen=True)
class CurrentSnapshot:
    temp: int
    condition_code: int
    high: int
    low: int
    city: str
    description: str
    background: Background
    details: DetailRecord
    is_day: int
    time: datetime


@dataclass(frozen=True)
class WeatherModel:
    current: CurrentSnapshot
    daily: list[DailyEntry]
    hourly: list[HourlyEntry] = field(default_factory=list)
    advice: str = ADVICE_PLACEHOLDER
