"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

OPEN_METEO_GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocoding_url: str = OPEN_METEO_GEOCODING_URL
    forecast_url: str = OPEN_METEO_FORECAST_URL
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=0, ge=0, le=5)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    forecast_days: int = Field(default=8, ge=1, le=16)
    language: str = "en"


class AdvisoryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    base_url: str = GEMINI_BASE_URL
    model: str = "gemini-2.5-flash"
    api_key_env: str = "GEMINI_API_KEY"
    timeout: float = Field(default=15.0, gt=0.0)
    max_words: int = Field(default=10, ge=1)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    today_window_hours: int = Field(default=26, ge=1, le=48)


class SkyviewConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    advisory: AdvisoryConfig = AdvisoryConfig()
    display: DisplayConfig = DisplayConfig()
