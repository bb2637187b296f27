"""Weather code classifier: human-readable label plus background category.

Codes follow the WMO convention used by Open-Meteo: 0 clear, 1-3 cloud
cover, 45/48 fog, 51-67 drizzle and rain, 71-77 snow, 80-82 showers and
95-99 thunderstorms.
"""

from skyview.models.weather import Background, Condition

UNKNOWN_CONDITION = "Unknown"

CONDITION_TEXT: dict[int, str] = {
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Rime fog",
    51: "Light drizzle",
    53: "Drizzle",
    55: "Dense drizzle",
    61: "Light rain",
    63: "Rain",
    65: "Heavy rain",
    71: "Light snow",
    73: "Snow",
    75: "Heavy snow",
    80: "Rain showers",
    81: "Rain showers",
    82: "Violent rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Thunderstorm with hail",
}

CLOUDY_CODES = frozenset({1, 2, 3, 45, 48})


def describe(code: int, is_day: int = 1) -> str:
    if code == 0:
        return "Clear" if is_day else "Clear night"
    return CONDITION_TEXT.get(code, UNKNOWN_CONDITION)


def background_for(code: int, is_day: int = 1) -> Background:
    """First match wins: clear, cloud/fog, anything above 50, then cloudy."""
    if code == 0:
        return Background.SUNNY if is_day else Background.NIGHT
    if code in CLOUDY_CODES:
        return Background.CLOUDY
    if code > 50:
        return Background.RAIN
    return Background.CLOUDY


def classify(code: int, is_day: int = 1) -> Condition:
    return Condition(text=describe(code, is_day), background=background_for(code, is_day))
