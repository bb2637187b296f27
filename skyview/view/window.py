"""Hourly window selection for the selected day.

Today is anchored to the live clock: the strip starts at the current hour and
runs ``window_hours`` ahead, spilling into tomorrow. Any later day is shown as
its complete calendar-day strip.
"""

from datetime import datetime

from skyview.models.weather import HourlyEntry, HourlySlot, WeatherModel

NOW_LABEL = "Now"
DEFAULT_WINDOW_HOURS = 26


def hour_label(entry: HourlyEntry) -> str:
    return str(entry.time.hour)


def top_of_hour(now: datetime, entry: HourlyEntry) -> datetime:
    """Truncate ``now`` to the hour in the zone of the hourly series."""
    local = now.astimezone(entry.time.tzinfo)
    return local.replace(minute=0, second=0, microsecond=0)


def _today_window(hourly: list[HourlyEntry], now: datetime, window_hours: int) -> list[HourlySlot]:
    if not hourly:
        return []
    anchor = top_of_hour(now, hourly[0])
    start = next((i for i, h in enumerate(hourly) if h.time >= anchor), None)
    if start is None:
        return []
    return [
        HourlySlot(entry=h, label=NOW_LABEL if i == 0 else hour_label(h))
        for i, h in enumerate(hourly[start:start + window_hours])
    ]


def _calendar_day(hourly: list[HourlyEntry], iso_date: str) -> list[HourlySlot]:
    return [
        HourlySlot(entry=h, label=hour_label(h))
        for h in hourly
        if h.time.date().isoformat() == iso_date
    ]


def select_hourly_window(
    model: WeatherModel,
    selected_day_index: int,
    now: datetime,
    window_hours: int = DEFAULT_WINDOW_HOURS,
) -> list[HourlySlot]:
    """Return the hourly entries to display for the selected day, with labels.

    Raises:
        IndexError: ``selected_day_index`` is outside the daily series.
    """
    if not 0 <= selected_day_index < len(model.daily):
        raise IndexError(
            f"Day index {selected_day_index} out of range (0-{len(model.daily) - 1})"
        )
    if selected_day_index == 0:
        return _today_window(model.hourly, now, window_hours)
    return _calendar_day(model.hourly, model.daily[selected_day_index].date)
