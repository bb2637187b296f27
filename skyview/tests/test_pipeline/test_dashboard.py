"""Tests for the dashboard API."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from skyview import dashboard
from skyview.errors import LocationNotFound, NetworkError
from skyview.ingest.forecast_client import ForecastClient
from skyview.ingest.geocoding_client import GeocodingClient
from skyview.models.location import Location
from skyview.session.controller import WeatherSession


@pytest.fixture
def geocoder() -> MagicMock:
    mock = MagicMock(spec=GeocodingClient)
    mock.locate.return_value = Location(21.02, 105.84, "Hanoi", "Vietnam")
    return mock


@pytest.fixture
def forecaster(forecast_payload: dict) -> MagicMock:
    mock = MagicMock(spec=ForecastClient)
    mock.get_forecast.return_value = forecast_payload
    return mock


@pytest.fixture
def client(geocoder, forecaster, hanoi_now):
    dashboard.set_session(WeatherSession(geocoder, forecaster, None, clock=lambda: hanoi_now))
    yield TestClient(dashboard.app)
    dashboard.set_session(None)


class TestDashboard:
    def test_view_before_search(self, client):
        assert client.get("/api/view").status_code == 404

    def test_search(self, client):
        resp = client.post("/api/search", json={"city": "Hanoi", "country": "Vietnam"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["city"] == "Hanoi, Vietnam"
        assert data["hourly"][0]["label"] == "Now"
        assert len(data["hourly"]) == 26

    def test_blank_city(self, client):
        assert client.post("/api/search", json={"city": "  "}).status_code == 400

    def test_select_day(self, client):
        client.post("/api/search", json={"city": "Hanoi"})
        resp = client.post("/api/day/4")
        assert resp.status_code == 200
        data = resp.json()
        assert data["selected_day"] == 4
        assert all(h["time"].startswith("2026-10-23") for h in data["hourly"])
        assert client.get("/api/view").json()["selected_day"] == 4

    def test_select_day_out_of_range(self, client):
        client.post("/api/search", json={"city": "Hanoi"})
        assert client.post("/api/day/8").status_code == 400

    def test_select_day_without_model(self, client):
        assert client.post("/api/day/0").status_code == 404

    def test_location_not_found_keeps_view(self, client, geocoder):
        client.post("/api/search", json={"city": "Hanoi"})
        geocoder.locate.side_effect = LocationNotFound("Xyzzyplex")

        resp = client.post("/api/search", json={"city": "Xyzzyplex"})
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Location not found"
        assert client.get("/api/view").json()["city"] == "Hanoi, Vietnam"

    def test_network_error(self, client, forecaster):
        forecaster.get_forecast.side_effect = NetworkError("HTTP 503", 503)
        resp = client.post("/api/search", json={"city": "Hanoi"})
        assert resp.status_code == 502

    def test_health(self, client):
        client.post("/api/search", json={"city": "Hanoi"})
        data = client.get("/api/health").json()
        assert data["has_model"] is True
        assert data["loading"] is False
        assert data["generation"] == 1
