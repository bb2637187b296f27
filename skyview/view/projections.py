"""Pure projections from physical quantities to gauge coordinates.

Percentages are in [0, 100], progress values in [0, 1] and angles in degrees.
"""

import math
from datetime import datetime

from skyview.models.common import round_half_up

PRESSURE_MIN_HPA = 960.0
PRESSURE_MAX_HPA = 1060.0
PRESSURE_ARC_START = -135.0
PRESSURE_ARC_SWEEP = 270.0

DAY_START_MINUTES = 6 * 60
DAY_END_MINUTES = 18 * 60
MINUTES_PER_DAY = 24 * 60

UV_HIGH_THRESHOLD = 5.0

COMPASS_POINTS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def dot_position(low: float, high: float, current: float) -> float:
    """Position of ``current`` on a min/max temperature bar, in percent."""
    if current < low:
        return 0.0
    if current > high:
        return 100.0
    if high == low:
        return 0.0
    return (current - low) / (high - low) * 100.0


def pressure_angle(pressure: float) -> float:
    """Needle angle on a 270 degree gauge covering 960-1060 hPa."""
    fraction = _clamp(
        (pressure - PRESSURE_MIN_HPA) / (PRESSURE_MAX_HPA - PRESSURE_MIN_HPA), 0.0, 1.0
    )
    return PRESSURE_ARC_START + fraction * PRESSURE_ARC_SWEEP


def parse_clock_minutes(hhmm: str) -> int:
    """'06:15' -> 375."""
    hours, minutes = hhmm.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def minutes_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute


def sun_arc_progress(sunrise: str, sunset: str, now: datetime) -> float:
    """Fraction of daylight elapsed at ``now`` (wall-clock time of the location).

    0 up to and including sunrise, 1 from sunset onwards.
    """
    rise = parse_clock_minutes(sunrise)
    fall = parse_clock_minutes(sunset)
    current = minutes_of_day(now)
    if current >= fall:
        return 1.0
    if current <= rise or fall <= rise:
        return 0.0
    return (current - rise) / (fall - rise)


def sun_arc_point(progress: float) -> tuple[float, float]:
    """Point on the sun graph; y is measured from the top (smaller is higher)."""
    progress = _clamp(progress, 0.0, 1.0)
    return progress * 100.0, 50.0 - math.sin(progress * math.pi) * 40.0


def sky_orb_position(is_day: int, now: datetime) -> tuple[float, float]:
    """Approximate sun/moon placement for the ambient background, in percent.

    Day runs 06:00-18:00 and night 18:00-06:00, both left to right.
    """
    current = minutes_of_day(now)
    if is_day:
        elapsed = current - DAY_START_MINUTES
        span = DAY_END_MINUTES - DAY_START_MINUTES
    else:
        elapsed = (current - DAY_END_MINUTES) % MINUTES_PER_DAY
        span = MINUTES_PER_DAY - (DAY_END_MINUTES - DAY_START_MINUTES)
    fraction = _clamp(elapsed / span, 0.0, 1.0)
    return fraction * 100.0, 80.0 - math.sin(fraction * math.pi) * 70.0


def uv_bar_position(uv_index: float | None) -> float:
    if uv_index is None or uv_index < 0:
        return 0.0
    return min(uv_index * 10.0, 100.0)


def uv_level(uv_index: float | None) -> str:
    if uv_index is not None and uv_index > UV_HIGH_THRESHOLD:
        return "High"
    return "Low"


def wind_direction_label(degrees: float) -> str:
    return COMPASS_POINTS[round_half_up(degrees / 45) % 8]
