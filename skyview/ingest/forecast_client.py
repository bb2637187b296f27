"""Open-Meteo forecast client."""

import logging

from skyview.config.schema import OPEN_METEO_FORECAST_URL
from skyview.ingest.http import get_json

logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "weather_code",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "dew_point_2m",
)
HOURLY_FIELDS = ("temperature_2m", "weather_code", "is_day")
DAILY_FIELDS = (
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "sunrise",
    "sunset",
    "uv_index_max",
    "precipitation_sum",
    "wind_speed_10m_max",
    "wind_direction_10m_dominant",
)


class ForecastClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_FORECAST_URL,
        forecast_days: int = 8,
        timeout: float = 30.0,
        max_retries: int = 0,
        retry_base_delay: float = 1.0,
    ):
        self.base_url = base_url
        self.forecast_days = forecast_days
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def build_params(self, latitude: float, longitude: float) -> dict:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_FIELDS),
            "hourly": ",".join(HOURLY_FIELDS),
            "daily": ",".join(DAILY_FIELDS),
            "timezone": "auto",
            "past_days": 0,
            "forecast_days": self.forecast_days,
        }

    async def get_forecast(self, latitude: float, longitude: float) -> dict:
        """Fetch current, hourly and daily series in the location's own time zone.

        Raises:
            NetworkError: Transport failure or non-success status.
        """
        logger.debug("Fetching forecast for %.4f,%.4f", latitude, longitude)
        return await get_json(
            self.base_url,
            params=self.build_params(latitude, longitude),
            timeout=self.timeout,
            max_retries=self.max_retries,
            retry_base_delay=self.retry_base_delay,
        )
