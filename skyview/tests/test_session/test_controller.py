"""Tests for the search session with mocked collaborators."""

import asyncio
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from skyview.config.schema import SkyviewConfig
from skyview.errors import DataShapeError, LocationNotFound, NetworkError
from skyview.ingest.advisory_client import AdvisoryClient
from skyview.ingest.forecast_client import ForecastClient
from skyview.ingest.geocoding_client import GeocodingClient
from skyview.models.location import Location
from skyview.models.weather import ADVICE_PLACEHOLDER
from skyview.session.controller import WeatherSession, build_query
from skyview.session.state import LOAD_FAILED_MESSAGE, LOCATION_NOT_FOUND_MESSAGE

HANOI = Location(latitude=21.02, longitude=105.84, name="Hanoi", country="Vietnam")
HUE = Location(latitude=16.46, longitude=107.59, name="Hue", country="Vietnam")
GEO_URL = "https://test-geo.example.com/v1/search"


@pytest.fixture
def geocoder() -> MagicMock:
    mock = MagicMock(spec=GeocodingClient)
    mock.locate.return_value = HANOI
    return mock


@pytest.fixture
def forecaster(forecast_payload: dict) -> MagicMock:
    mock = MagicMock(spec=ForecastClient)
    mock.get_forecast.return_value = forecast_payload
    return mock


@pytest.fixture
def advisor() -> MagicMock:
    mock = MagicMock(spec=AdvisoryClient)
    mock.advise.return_value = "  Bring an umbrella.  "
    return mock


@pytest.fixture
def session(geocoder, forecaster, advisor, hanoi_now) -> WeatherSession:
    return WeatherSession(geocoder, forecaster, advisor, clock=lambda: hanoi_now)


async def _search_and_settle(session: WeatherSession, city: str, country: str = ""):
    model = await session.search(city, country)
    await session.wait_for_advisory()
    return model


class TestSearch:
    def test_success(self, session, geocoder, forecaster):
        model = asyncio.run(_search_and_settle(session, "Hanoi", "Vietnam"))

        geocoder.locate.assert_awaited_once_with("Hanoi, Vietnam")
        forecaster.get_forecast.assert_awaited_once_with(21.02, 105.84)
        assert model.current.city == "Hanoi, Vietnam"
        assert session.state.loading is False
        assert session.state.searching is False
        assert session.state.error == ""

    def test_advisory_merged_after_commit(self, session, advisor):
        asyncio.run(_search_and_settle(session, "Hanoi"))

        advisor.advise.assert_awaited_once_with("Hanoi, Vietnam", 25, "Overcast")
        assert session.state.model.advice == "Bring an umbrella."

    def test_search_does_not_wait_for_advisory(self, session, advisor):
        release = None

        async def slow_advice(*args):
            await release.wait()
            return "Late tip"

        advisor.advise.side_effect = slow_advice

        async def scenario():
            nonlocal release
            release = asyncio.Event()
            await session.search("Hanoi")
            advice_at_return = session.state.model.advice
            release.set()
            await session.wait_for_advisory()
            return advice_at_return

        advice_at_return = asyncio.run(scenario())
        assert advice_at_return == ADVICE_PLACEHOLDER
        assert session.state.model.advice == "Late tip"

    def test_advisory_failure_is_swallowed(self, session, advisor):
        advisor.advise.side_effect = RuntimeError("model unavailable")

        model = asyncio.run(_search_and_settle(session, "Hanoi"))
        assert model.advice == ADVICE_PLACEHOLDER
        assert session.state.model.advice == ADVICE_PLACEHOLDER
        assert session.state.error == ""

    def test_without_advisor(self, geocoder, forecaster, hanoi_now):
        session = WeatherSession(geocoder, forecaster, None, clock=lambda: hanoi_now)
        asyncio.run(_search_and_settle(session, "Hanoi"))
        assert session.state.model.advice == ADVICE_PLACEHOLDER

    def test_location_not_found(self, session, geocoder, forecaster):
        geocoder.locate.side_effect = LocationNotFound("Xyzzyplex")

        with pytest.raises(LocationNotFound):
            asyncio.run(session.search("Xyzzyplex"))
        assert session.state.loading is False
        assert session.state.error == LOCATION_NOT_FOUND_MESSAGE
        assert session.state.model is None
        forecaster.get_forecast.assert_not_awaited()

    def test_failed_search_keeps_previous_model(self, session, geocoder):
        first = asyncio.run(_search_and_settle(session, "Hanoi"))
        geocoder.locate.side_effect = LocationNotFound("Xyzzyplex")

        with pytest.raises(LocationNotFound):
            asyncio.run(session.search("Xyzzyplex"))
        assert session.state.model.current is first.current
        assert session.state.loading is False

    def test_network_error(self, session, forecaster):
        forecaster.get_forecast.side_effect = NetworkError("HTTP 502", 502)

        with pytest.raises(NetworkError):
            asyncio.run(session.search("Hanoi"))
        assert session.state.error == LOAD_FAILED_MESSAGE
        assert session.state.loading is False

    @respx.mock
    def test_malformed_geocoding_match_ends_search(self, forecaster, hanoi_now):
        respx.get(GEO_URL).mock(
            return_value=httpx.Response(200, json={"results": [{"name": "Hanoi"}]})
        )
        session = WeatherSession(
            GeocodingClient(base_url=GEO_URL), forecaster, None, clock=lambda: hanoi_now
        )

        with pytest.raises(NetworkError):
            asyncio.run(session.search("Hanoi"))
        assert session.state.loading is False
        assert session.state.error == LOAD_FAILED_MESSAGE
        assert session.state.model is None
        forecaster.get_forecast.assert_not_awaited()

    def test_malformed_payload(self, session, forecaster, forecast_payload):
        forecast_payload["hourly"]["time"].pop()
        forecaster.get_forecast.return_value = forecast_payload

        with pytest.raises(DataShapeError):
            asyncio.run(session.search("Hanoi"))
        assert session.state.model is None
        assert session.state.error == LOAD_FAILED_MESSAGE


class TestGenerations:
    def test_stale_forecast_is_discarded(self, session, geocoder, forecaster, forecast_payload):
        hue_payload = dict(forecast_payload, latitude=16.46)
        release_hanoi = None

        async def locate(query):
            return HANOI if query == "Hanoi" else HUE

        async def get_forecast(lat, lon):
            if lat == HANOI.latitude:
                await release_hanoi.wait()
                return forecast_payload
            return hue_payload

        geocoder.locate.side_effect = locate
        forecaster.get_forecast.side_effect = get_forecast

        async def scenario():
            nonlocal release_hanoi
            release_hanoi = asyncio.Event()
            slow = asyncio.create_task(session.search("Hanoi"))
            while session.state.generation < 1:
                await asyncio.sleep(0)
            await session.search("Hue")
            release_hanoi.set()
            await slow
            await session.wait_for_advisory()

        asyncio.run(scenario())
        assert session.state.model.current.city == "Hue, Vietnam"
        assert session.state.generation == 2
        assert session.state.loading is False

    def test_stale_advisory_is_discarded(self, session, geocoder, advisor):
        release_first = None

        async def locate(query):
            return HANOI if query == "Hanoi" else HUE

        async def advise(city, temp, text):
            if city.startswith("Hanoi"):
                await release_first.wait()
                return "Stale Hanoi tip"
            return "Fresh Hue tip"

        geocoder.locate.side_effect = locate
        advisor.advise.side_effect = advise

        async def scenario():
            nonlocal release_first
            release_first = asyncio.Event()
            await session.search("Hanoi")
            stale_task = session._advisory_task
            await session.search("Hue")
            await session.wait_for_advisory()
            assert stale_task in session._pending_tasks
            release_first.set()
            await stale_task
            await asyncio.sleep(0)
            assert session._pending_tasks == set()

        asyncio.run(scenario())
        assert session.state.model.current.city == "Hue, Vietnam"
        assert session.state.model.advice == "Fresh Hue tip"


class TestDaySelection:
    def test_select_day_changes_window(self, session):
        asyncio.run(_search_and_settle(session, "Hanoi"))
        assert session.hourly_window()[0].label == "Now"

        session.select_day(2)
        hours = session.hourly_window()
        assert len(hours) == 24
        assert hours[0].label == "0"

    def test_view(self, session):
        asyncio.run(_search_and_settle(session, "Hanoi"))
        session.select_day(1)
        view = session.view()
        assert view.selected_day == 1
        assert view.day.date == "2026-10-20"
        assert view.gauges.temp_dot is None
        assert len(view.hours) == 24

    def test_new_search_resets_day(self, session):
        asyncio.run(_search_and_settle(session, "Hanoi"))
        session.select_day(3)
        asyncio.run(_search_and_settle(session, "Hanoi"))
        assert session.state.selected_day == 0

    def test_out_of_range(self, session):
        asyncio.run(_search_and_settle(session, "Hanoi"))
        with pytest.raises(IndexError):
            session.select_day(9)
        assert session.state.selected_day == 0

    def test_no_model_yet(self, session):
        assert session.view() is None
        assert session.hourly_window() == []

    def test_open_search(self, session):
        asyncio.run(_search_and_settle(session, "Hanoi"))
        session.open_search()
        assert session.state.searching is True
        assert session.state.model is not None


class TestFromConfig:
    def test_builds_clients(self):
        config = SkyviewConfig(display={"today_window_hours": 12})
        session = WeatherSession.from_config(config)
        assert isinstance(session.geocoder, GeocodingClient)
        assert isinstance(session.forecaster, ForecastClient)
        assert isinstance(session.advisor, AdvisoryClient)
        assert session.window_hours == 12
        assert session.forecaster.forecast_days == 8

    def test_advisory_disabled(self):
        config = SkyviewConfig(advisory={"enabled": False})
        assert WeatherSession.from_config(config).advisor is None


class TestBuildQuery:
    def test_city_only(self):
        assert build_query("  Hanoi ") == "Hanoi"

    def test_with_country(self):
        assert build_query("Hanoi", " Vietnam ") == "Hanoi, Vietnam"
