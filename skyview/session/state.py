"""Application state and its pure update function.

Every transition is a discrete event applied by ``update``. Responses carry
the generation of the search that issued them; a response whose generation
is not the latest is discarded, so a slow reply can never overwrite the
result of a newer search.
"""

from dataclasses import dataclass, replace

from skyview.models.weather import WeatherModel

LOCATION_NOT_FOUND_MESSAGE = "Location not found"
LOAD_FAILED_MESSAGE = "Could not load weather"


@dataclass(frozen=True)
class AppState:
    model: WeatherModel | None = None
    selected_day: int = 0
    loading: bool = False
    error: str = ""
    searching: bool = True
    generation: int = 0


@dataclass(frozen=True)
class SearchSubmitted:
    query: str


@dataclass(frozen=True)
class SearchSucceeded:
    generation: int
    model: WeatherModel


@dataclass(frozen=True)
class SearchFailed:
    generation: int
    message: str


@dataclass(frozen=True)
class DaySelected:
    index: int


@dataclass(frozen=True)
class AdvisoryResolved:
    generation: int
    text: str


@dataclass(frozen=True)
class SearchOpened:
    pass


Event = SearchSubmitted | SearchSucceeded | SearchFailed | DaySelected | AdvisoryResolved | SearchOpened


def update(state: AppState, event: Event) -> AppState:
    """Apply one event and return the next state."""
    if isinstance(event, SearchSubmitted):
        return replace(state, loading=True, error="", generation=state.generation + 1)

    if isinstance(event, SearchSucceeded):
        if event.generation != state.generation:
            return state
        return replace(
            state,
            model=event.model,
            selected_day=0,
            loading=False,
            error="",
            searching=False,
        )

    if isinstance(event, SearchFailed):
        if event.generation != state.generation:
            return state
        return replace(state, loading=False, error=event.message)

    if isinstance(event, DaySelected):
        if state.model is None or not 0 <= event.index < len(state.model.daily):
            raise IndexError(f"Day index {event.index} out of range")
        return replace(state, selected_day=event.index)

    if isinstance(event, AdvisoryResolved):
        if event.generation != state.generation or state.model is None:
            return state
        return replace(state, model=replace(state.model, advice=event.text))

    if isinstance(event, SearchOpened):
        return replace(state, searching=True)

    raise TypeError(f"Unknown event: {event!r}")
