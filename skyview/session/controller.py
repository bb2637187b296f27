"""Search session: geocode, fetch, normalize, commit, then attach the advisory.

Runs on a single asyncio event loop. The advisory is scheduled as a task
after the model is committed and is never awaited by ``search``.
"""

import asyncio
import logging
from dataclasses import dataclass

from skyview.config.schema import SkyviewConfig
from skyview.errors import LocationNotFound, SkyviewError
from skyview.ingest.advisory_client import AdvisoryClient
from skyview.ingest.forecast_client import ForecastClient
from skyview.ingest.geocoding_client import GeocodingClient
from skyview.models.common import Clock, utc_now
from skyview.models.weather import DailyEntry, HourlySlot, WeatherModel
from skyview.session.state import (
    LOAD_FAILED_MESSAGE,
    LOCATION_NOT_FOUND_MESSAGE,
    AdvisoryResolved,
    AppState,
    DaySelected,
    Event,
    SearchFailed,
    SearchOpened,
    SearchSubmitted,
    SearchSucceeded,
    update,
)
from skyview.view.gauges import DetailGauges, detail_gauges
from skyview.view.normalizer import normalize
from skyview.view.window import DEFAULT_WINDOW_HOURS, select_hourly_window

logger = logging.getLogger(__name__)


def build_query(city: str, country: str = "") -> str:
    city, country = city.strip(), country.strip()
    return f"{city}, {country}" if country else city


@dataclass(frozen=True)
class SessionView:
    model: WeatherModel
    selected_day: int
    day: DailyEntry
    hours: list[HourlySlot]
    gauges: DetailGauges


class WeatherSession:
    def __init__(
        self,
        geocoder: GeocodingClient,
        forecaster: ForecastClient,
        advisor: AdvisoryClient | None = None,
        clock: Clock = utc_now,
        window_hours: int = DEFAULT_WINDOW_HOURS,
    ):
        self.geocoder = geocoder
        self.forecaster = forecaster
        self.advisor = advisor
        self.clock = clock
        self.window_hours = window_hours
        self.state = AppState()
        self._advisory_task: asyncio.Task | None = None
        self._pending_tasks: set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, config: SkyviewConfig, clock: Clock = utc_now) -> "WeatherSession":
        api = config.api
        advisor = None
        if config.advisory.enabled:
            advisor = AdvisoryClient(
                base_url=config.advisory.base_url,
                model=config.advisory.model,
                api_key_env=config.advisory.api_key_env,
                timeout=config.advisory.timeout,
                max_words=config.advisory.max_words,
            )
        return cls(
            geocoder=GeocodingClient(
                base_url=api.geocoding_url,
                language=api.language,
                timeout=api.timeout,
                max_retries=api.max_retries,
                retry_base_delay=api.retry_base_delay,
            ),
            forecaster=ForecastClient(
                base_url=api.forecast_url,
                forecast_days=api.forecast_days,
                timeout=api.timeout,
                max_retries=api.max_retries,
                retry_base_delay=api.retry_base_delay,
            ),
            advisor=advisor,
            clock=clock,
            window_hours=config.display.today_window_hours,
        )

    def dispatch(self, event: Event) -> AppState:
        self.state = update(self.state, event)
        return self.state

    async def search(self, city: str, country: str = "") -> WeatherModel:
        """Look up ``city`` and replace the displayed model on success.

        On failure the previous model stays, ``loading`` is cleared and the
        error is re-raised.

        Raises:
            LocationNotFound: Geocoding found no candidate.
            NetworkError: Geocoding or forecast transport failure.
            DataShapeError: The forecast payload is malformed.
        """
        query = build_query(city, country)
        generation = self.dispatch(SearchSubmitted(query)).generation
        try:
            location = await self.geocoder.locate(query)
            raw = await self.forecaster.get_forecast(location.latitude, location.longitude)
            model = normalize(raw, location.display_name, now=self.clock())
        except LocationNotFound:
            self.dispatch(SearchFailed(generation, LOCATION_NOT_FOUND_MESSAGE))
            raise
        except SkyviewError as e:
            logger.error("Search for %r failed: %s", query, e)
            self.dispatch(SearchFailed(generation, LOAD_FAILED_MESSAGE))
            raise

        self.dispatch(SearchSucceeded(generation, model))
        if generation == self.state.generation and self.advisor is not None:
            task = asyncio.create_task(self._attach_advisory(generation, model))
            # The loop only holds weak references to tasks.
            self._pending_tasks.add(task)
            task.add_done_callback(self._pending_tasks.discard)
            self._advisory_task = task
        return model

    async def _attach_advisory(self, generation: int, model: WeatherModel) -> None:
        try:
            text = await self.advisor.advise(
                model.current.city, model.current.temp, model.current.description
            )
        except Exception as e:
            logger.warning("Advisory unavailable for %s: %s", model.current.city, e)
            return
        self.dispatch(AdvisoryResolved(generation, text.strip()))

    async def wait_for_advisory(self, timeout: float | None = None) -> None:
        """Wait for a pending advisory, if any. Timeouts are not errors."""
        task = self._advisory_task
        if task is None or task.done():
            return
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout)
        except asyncio.TimeoutError:
            logger.debug("Advisory still pending after %.1fs", timeout)

    def select_day(self, index: int) -> AppState:
        return self.dispatch(DaySelected(index))

    def open_search(self) -> AppState:
        return self.dispatch(SearchOpened())

    def hourly_window(self) -> list[HourlySlot]:
        if self.state.model is None:
            return []
        return select_hourly_window(
            self.state.model, self.state.selected_day, self.clock(), self.window_hours
        )

    def view(self) -> SessionView | None:
        model = self.state.model
        if model is None:
            return None
        index = self.state.selected_day
        now = self.clock()
        return SessionView(
            model=model,
            selected_day=index,
            day=model.daily[index],
            hours=select_hourly_window(model, index, now, self.window_hours),
            gauges=detail_gauges(model, index, now),
        )
