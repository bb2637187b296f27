"""Pydantic models for the raw forecast response, validated at ingestion."""

import math
from datetime import date, datetime

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from skyview.errors import DataShapeError


def _lenient_float(value):
    """Coerce a numeric-ish value to float; unparseable values become None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def _check_ascending(name: str, values: list, parse) -> None:
    try:
        parsed = [parse(v) for v in values]
    except ValueError as e:
        raise ValueError(f"{name} contains an invalid timestamp: {e}") from e
    for prev, cur in zip(parsed, parsed[1:]):
        if cur <= prev:
            raise ValueError(f"{name} is not strictly ascending at {cur}")


def _check_lengths(block: str, arrays: dict[str, list]) -> None:
    lengths = {name: len(values) for name, values in arrays.items()}
    if len(set(lengths.values())) > 1:
        raise ValueError(f"{block} arrays have mismatched lengths: {lengths}")


class CurrentBlock(BaseModel):
    model_config = {"extra": "ignore"}

    time: str = ""
    temperature_2m: float
    relative_humidity_2m: float
    apparent_temperature: float
    is_day: int
    precipitation: float = 0.0
    weather_code: int
    surface_pressure: float
    wind_speed_10m: float
    wind_direction_10m: float
    dew_point_2m: float | None = None


class HourlyBlock(BaseModel):
    model_config = {"extra": "ignore"}

    time: list[str]
    temperature_2m: list[float]
    weather_code: list[int]
    is_day: list[int]

    @model_validator(mode="after")
    def _parallel(self) -> "HourlyBlock":
        _check_lengths("hourly", {
            "time": self.time,
            "temperature_2m": self.temperature_2m,
            "weather_code": self.weather_code,
            "is_day": self.is_day,
        })
        _check_ascending("hourly.time", self.time, datetime.fromisoformat)
        return self


class DailyBlock(BaseModel):
    model_config = {"extra": "ignore"}

    time: list[str]
    weather_code: list[int]
    temperature_2m_max: list[float]
    temperature_2m_min: list[float]
    sunrise: list[str]
    sunset: list[str]
    uv_index_max: list[float | None]
    precipitation_sum: list[float | None]
    wind_speed_10m_max: list[float | None]
    wind_direction_10m_dominant: list[float | None]

    @field_validator(
        "uv_index_max",
        "precipitation_sum",
        "wind_speed_10m_max",
        "wind_direction_10m_dominant",
        mode="before",
    )
    @classmethod
    def _lenient(cls, values):
        if not isinstance(values, list):
            return values
        return [_lenient_float(v) for v in values]

    @model_validator(mode="after")
    def _parallel(self) -> "DailyBlock":
        if not self.time:
            raise ValueError("daily series is empty")
        _check_lengths("daily", {
            "time": self.time,
            "weather_code": self.weather_code,
            "temperature_2m_max": self.temperature_2m_max,
            "temperature_2m_min": self.temperature_2m_min,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
            "uv_index_max": self.uv_index_max,
            "precipitation_sum": self.precipitation_sum,
            "wind_speed_10m_max": self.wind_speed_10m_max,
            "wind_direction_10m_dominant": self.wind_direction_10m_dominant,
        })
        _check_ascending("daily.time", self.time, date.fromisoformat)
        for name, values in (("sunrise", self.sunrise), ("sunset", self.sunset)):
            for value in values:
                try:
                    datetime.fromisoformat(value)
                except ValueError as e:
                    raise ValueError(f"daily.{name} contains an invalid timestamp: {e}") from e
        return self


class RawForecastPayload(BaseModel):
    model_config = {"extra": "ignore"}

    latitude: float | None = None
    longitude: float | None = None
    timezone: str = "GMT"
    utc_offset_seconds: int = 0
    current: CurrentBlock
    hourly: HourlyBlock
    daily: DailyBlock


def parse_payload(raw: dict) -> RawForecastPayload:
    """Validate a forecast response, raising DataShapeError on any violation."""
    if not isinstance(raw, dict):
        raise DataShapeError(f"Forecast payload must be an object, got {type(raw).__name__}")
    try:
        return RawForecastPayload.model_validate(raw)
    except ValidationError as e:
        raise DataShapeError(f"Malformed forecast payload: {e}") from e
