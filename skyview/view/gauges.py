"""Gauge coordinates for the selected day's detail cards."""

from dataclasses import dataclass
from datetime import datetime

from skyview.models.weather import WeatherModel
from skyview.view.projections import (
    dot_position,
    pressure_angle,
    sky_orb_position,
    sun_arc_point,
    sun_arc_progress,
    uv_bar_position,
    uv_level,
    wind_direction_label,
)


@dataclass(frozen=True)
class DetailGauges:
    uv_bar: float
    uv_level: str
    sun_progress: float
    sun_point: tuple[float, float]
    sun_visible: bool
    wind_label: str
    pressure_angle: float
    temp_dot: float | None  # only for today
    sky_orb: tuple[float, float]


def detail_gauges(model: WeatherModel, selected_day_index: int, now: datetime) -> DetailGauges:
    """Project the selected day's details onto gauge coordinates.

    Today uses the location's wall-clock time for the sun arc; other days use
    a fixed noon reference.
    """
    day = model.daily[selected_day_index]
    details = day.details
    local_now = now.astimezone(model.current.time.tzinfo)
    is_today = selected_day_index == 0
    sun_reference = local_now if is_today else local_now.replace(hour=12, minute=0)

    progress = sun_arc_progress(details.sunrise, details.sunset, sun_reference)
    return DetailGauges(
        uv_bar=uv_bar_position(details.uv_index),
        uv_level=uv_level(details.uv_index),
        sun_progress=progress,
        sun_point=sun_arc_point(progress),
        sun_visible=0.0 < progress < 1.0,
        wind_label=wind_direction_label(details.wind_direction),
        pressure_angle=pressure_angle(details.pressure),
        temp_dot=dot_position(day.min, day.max, model.current.temp) if is_today else None,
        sky_orb=sky_orb_position(model.current.is_day, local_now),
    )
