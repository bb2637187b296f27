"""Forecast normalizer: raw forecast payload -> WeatherModel.

The payload is validated as a whole before anything is built, so a malformed
response never yields a partially populated model.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

from skyview.models.common import format_number, round_half_up, utc_now
from skyview.models.payload import (
    CurrentBlock,
    DailyBlock,
    HourlyBlock,
    RawForecastPayload,
    parse_payload,
)
from skyview.models.weather import (
    CurrentSnapshot,
    DailyEntry,
    DetailRecord,
    HourlyEntry,
    WeatherModel,
)
from skyview.view.conditions import classify

logger = logging.getLogger(__name__)

TODAY_LABEL = "Today"
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def location_zone(payload: RawForecastPayload) -> timezone:
    """Fixed-offset zone of the queried location as reported by the source."""
    return timezone(timedelta(seconds=payload.utc_offset_seconds), payload.timezone)


def day_label(iso_date: str, today: date) -> str:
    day = date.fromisoformat(iso_date)
    if day == today:
        return TODAY_LABEL
    return WEEKDAY_ABBREVIATIONS[day.weekday()]


def clock_time(iso_timestamp: str) -> str:
    """'2026-10-19T06:01' -> '06:01'."""
    return datetime.fromisoformat(iso_timestamp).strftime("%H:%M")


def _precipitation(amount: float | None) -> str:
    return f"{format_number(amount if amount is not None else 0.0)} mm"


def _daily_details(daily: DailyBlock, i: int) -> DetailRecord:
    wind_speed = daily.wind_speed_10m_max[i]
    wind_direction = daily.wind_direction_10m_dominant[i]
    return DetailRecord(
        uv_index=daily.uv_index_max[i],
        sunrise=clock_time(daily.sunrise[i]),
        sunset=clock_time(daily.sunset[i]),
        wind_speed=round_half_up(wind_speed) if wind_speed is not None else 0,
        wind_direction=round_half_up(wind_direction) % 360 if wind_direction is not None else 0,
        precipitation=_precipitation(daily.precipitation_sum[i]),
    )


def _with_current(details: DetailRecord, current: CurrentBlock) -> DetailRecord:
    """Overlay instantaneous readings, available for today only."""
    return replace(
        details,
        humidity=f"{format_number(current.relative_humidity_2m)}%",
        feels_like=f"{round_half_up(current.apparent_temperature)}°",
        pressure=round_half_up(current.surface_pressure),
        precipitation=_precipitation(current.precipitation),
        wind_speed=round_half_up(current.wind_speed_10m),
        wind_direction=round_half_up(current.wind_direction_10m) % 360,
        dew_point=(
            f"{round_half_up(current.dew_point_2m)}°"
            if current.dew_point_2m is not None
            else None
        ),
    )


def build_daily(daily: DailyBlock, current: CurrentBlock, today: date) -> list[DailyEntry]:
    entries = [
        DailyEntry(
            day=day_label(iso_date, today),
            date=iso_date,
            min=round_half_up(daily.temperature_2m_min[i]),
            max=round_half_up(daily.temperature_2m_max[i]),
            code=daily.weather_code[i],
            details=_daily_details(daily, i),
        )
        for i, iso_date in enumerate(daily.time)
    ]
    entries[0] = replace(entries[0], details=_with_current(entries[0].details, current))
    return entries


def local_timestamp(iso_timestamp: str, zone: timezone) -> datetime:
    """Attach the location offset; timestamps with their own offset are converted."""
    moment = datetime.fromisoformat(iso_timestamp)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=zone)
    return moment.astimezone(zone)


def build_hourly(hourly: HourlyBlock, zone: timezone) -> list[HourlyEntry]:
    return [
        HourlyEntry(
            time=local_timestamp(t, zone),
            temp=round_half_up(hourly.temperature_2m[i]),
            code=hourly.weather_code[i],
            is_day=hourly.is_day[i],
        )
        for i, t in enumerate(hourly.time)
    ]


def normalize(
    payload: RawForecastPayload | dict,
    city_display_name: str,
    now: datetime | None = None,
) -> WeatherModel:
    """Build the view model for one forecast response.

    Args:
        payload: Forecast JSON (validated here) or an already parsed payload.
        city_display_name: Name shown for the location, e.g. "Hanoi, Vietnam".
        now: Wall-clock instant used for the "Today" label and snapshot time.

    Raises:
        DataShapeError: The payload violates the parallel-array invariants.
    """
    if not isinstance(payload, RawForecastPayload):
        payload = parse_payload(payload)
    if now is None:
        now = utc_now()

    zone = location_zone(payload)
    local_now = now.astimezone(zone)
    current = payload.current

    daily = build_daily(payload.daily, current, local_now.date())
    hourly = build_hourly(payload.hourly, zone)
    condition = classify(current.weather_code, current.is_day)

    snapshot = CurrentSnapshot(
        temp=round_half_up(current.temperature_2m),
        condition_code=current.weather_code,
        high=daily[0].max,
        low=daily[0].min,
        city=city_display_name,
        description=condition.text,
        background=condition.background,
        details=daily[0].details,
        is_day=current.is_day,
        time=local_now,
    )
    logger.debug(
        "Normalized forecast for %s: %d days, %d hours",
        city_display_name, len(daily), len(hourly),
    )
    return WeatherModel(current=snapshot, daily=daily, hourly=hourly)
