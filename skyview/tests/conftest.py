"""Shared test fixtures."""

import copy
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml

from skyview.config.schema import SkyviewConfig
from skyview.models.weather import WeatherModel
from skyview.view.normalizer import normalize

FIXTURE_DIR = Path(__file__).parent / "fixtures"

# 2026-10-19 10:30 in Hanoi (UTC+7); the fixture forecast starts that day.
HANOI_NOW = datetime(2026, 10, 19, 3, 30, tzinfo=UTC)


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture(scope="session")
def _forecast_raw() -> dict:
    return load_fixture("openmeteo_forecast_hanoi.json")


@pytest.fixture
def forecast_payload(_forecast_raw: dict) -> dict:
    """A fresh copy of the Hanoi forecast response; safe to mutate."""
    return copy.deepcopy(_forecast_raw)


@pytest.fixture
def geocoding_payload() -> dict:
    return load_fixture("openmeteo_geocoding_hanoi.json")


@pytest.fixture
def advice_payload() -> dict:
    return load_fixture("gemini_advice.json")


@pytest.fixture
def hanoi_now() -> datetime:
    return HANOI_NOW


@pytest.fixture
def weather_model(forecast_payload: dict, hanoi_now: datetime) -> WeatherModel:
    return normalize(forecast_payload, "Hanoi, Vietnam", now=hanoi_now)


@pytest.fixture
def default_config() -> SkyviewConfig:
    return SkyviewConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"timeout": 5.0, "forecast_days": 8},
        "advisory": {"enabled": False},
        "display": {"today_window_hours": 26},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
