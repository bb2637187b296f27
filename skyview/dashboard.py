"""Weather dashboard: FastAPI backend serving the current session view.

One process holds one search session, so the server is single-location by
construction. Run with ``uvicorn skyview.dashboard:app``.
"""

import os
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from skyview.config.loader import load_config
from skyview.errors import DataShapeError, LocationNotFound, NetworkError
from skyview.reporting.formatters import view_to_dict
from skyview.session.controller import WeatherSession

CONFIG_PATH = os.environ.get("SKYVIEW_CONFIG", "configs/default.yaml")

app = FastAPI(title="Skyview Dashboard", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_session: WeatherSession | None = None


def get_session() -> WeatherSession:
    global _session
    if _session is None:
        _session = WeatherSession.from_config(load_config(CONFIG_PATH))
    return _session


def set_session(session: WeatherSession | None) -> None:
    """Swap the process-wide session (tests, embedding)."""
    global _session
    _session = session


class SearchRequest(BaseModel):
    city: str
    country: str = ""


def _current_view() -> dict:
    view = get_session().view()
    if view is None:
        raise HTTPException(404, "No location searched yet")
    return view_to_dict(view)


# ── View endpoints ──────────────────────────────────────────────


@app.post("/api/search")
async def search(request: SearchRequest):
    """Run a new search; the previous view survives a failed one."""
    if not request.city.strip():
        raise HTTPException(400, "City is required")
    session = get_session()
    try:
        await session.search(request.city, request.country)
    except LocationNotFound:
        raise HTTPException(404, session.state.error)
    except (NetworkError, DataShapeError):
        raise HTTPException(502, session.state.error)
    return _current_view()


@app.post("/api/day/{index}")
def select_day(index: int):
    """Select a forecast day; 0 is today."""
    session = get_session()
    if session.state.model is None:
        raise HTTPException(404, "No location searched yet")
    try:
        session.select_day(index)
    except IndexError as e:
        raise HTTPException(400, str(e))
    return _current_view()


@app.get("/api/view")
def get_view():
    """Current view: snapshot, hourly window, daily list, gauges and tip."""
    return _current_view()


@app.get("/api/health")
def get_health():
    state = get_session().state
    return {
        "has_model": state.model is not None,
        "loading": state.loading,
        "error": state.error,
        "generation": state.generation,
        "timestamp": datetime.now(UTC).isoformat(),
    }
