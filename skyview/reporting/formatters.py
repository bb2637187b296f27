"""Output formatters for a session view."""

import json

from skyview.session.controller import SessionView


def _uv_text(uv: float | None) -> str:
    return "N/A" if uv is None else f"{uv:g}"


def format_view_text(v: SessionView) -> str:
    """Plain text report for the terminal."""
    current = v.model.current
    day = v.day
    details = day.details
    g = v.gauges
    headline_temp = current.temp if v.selected_day == 0 else day.max

    lines = [
        f"=== {current.city} | {day.day} {day.date} ===",
        f"{headline_temp}° {current.description if v.selected_day == 0 else ''}".rstrip(),
        f"H:{day.max}° L:{day.min}°",
    ]
    if v.hours:
        lines.append(
            "Hourly: " + "  ".join(f"{s.label} {s.entry.temp}°" for s in v.hours)
        )
    else:
        lines.append("Hourly: no data")

    lines.append("Daily:")
    for i, d in enumerate(v.model.daily):
        marker = ">" if i == v.selected_day else " "
        lines.append(f" {marker} {d.day:<5} {d.min:>3}° .. {d.max:>3}°")

    lines.extend([
        f"UV index: {_uv_text(details.uv_index)} ({g.uv_level})",
        f"Sun: rises {details.sunrise}, sets {details.sunset} ({g.sun_progress:.0%} of daylight)",
        f"Wind: {details.wind_speed} km/h {g.wind_label}",
        f"Precipitation: {details.precipitation}",
        f"Feels like: {details.feels_like}",
        f"Humidity: {details.humidity} (dew point {details.dew_point or 'N/A'})",
        f"Pressure: {details.pressure} hPa",
        f"Visibility: {details.visibility}",
        f"Tip: {v.model.advice}",
    ])
    return "\n".join(lines)


def format_view_json(v: SessionView) -> str:
    """JSON view for programmatic consumption."""
    return json.dumps(view_to_dict(v), indent=2, ensure_ascii=False)


def view_to_dict(v: SessionView) -> dict:
    current = v.model.current
    details = v.day.details
    g = v.gauges
    return {
        "city": current.city,
        "selected_day": v.selected_day,
        "current": {
            "temp": current.temp,
            "high": current.high,
            "low": current.low,
            "description": current.description,
            "background": str(current.background),
            "is_day": current.is_day,
            "time": current.time.isoformat(),
        },
        "daily": [
            {"day": d.day, "date": d.date, "min": d.min, "max": d.max, "code": d.code}
            for d in v.model.daily
        ],
        "hourly": [
            {
                "label": s.label,
                "time": s.entry.time.isoformat(),
                "temp": s.entry.temp,
                "code": s.entry.code,
                "is_day": s.entry.is_day,
            }
            for s in v.hours
        ],
        "details": {
            "uv_index": details.uv_index,
            "sunrise": details.sunrise,
            "sunset": details.sunset,
            "wind_speed": details.wind_speed,
            "wind_direction": details.wind_direction,
            "humidity": details.humidity,
            "feels_like": details.feels_like,
            "visibility": details.visibility,
            "pressure": details.pressure,
            "precipitation": details.precipitation,
            "dew_point": details.dew_point,
        },
        "gauges": {
            "uv_bar": g.uv_bar,
            "uv_level": g.uv_level,
            "sun_progress": g.sun_progress,
            "sun_point": list(g.sun_point),
            "sun_visible": g.sun_visible,
            "wind_label": g.wind_label,
            "pressure_angle": g.pressure_angle,
            "temp_dot": g.temp_dot,
            "sky_orb": list(g.sky_orb),
        },
        "advice": v.model.advice,
    }
