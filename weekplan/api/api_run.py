from fastapi import (
    FastAPI,
    Request,
    Depends,
    HTTPException
)
from fastapi.responses import JSONResponse

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional
import logging

from weekplan.infra.Storage import KeyValueStorage
from weekplan.logic.auth.gate import LoginForm
from weekplan.logic.planner.planner import Planner
from weekplan.logic.planner.store import WeekStore
from weekplan.utilities import config
from weekplan.utilities.validators import LoginInput, ThemeUpdateInput, ThemeDraftInput, EventTextInput

# Logging
logger = logging.getLogger("weekplan_app")


# -------------------- Helpers --------------------
def _planner(request: Request) -> Planner:
    return request.app.state.planner


def _require_auth(request: Request) -> Planner:
    planner = _planner(request)
    if not planner.gate.is_authenticated():
        raise HTTPException(status_code=401, detail="Not authenticated")
    return planner


def _store(planner: Planner = Depends(_require_auth)) -> WeekStore:
    return planner.ensure_loaded()


def _not_found(e: KeyError) -> HTTPException:
    return HTTPException(status_code=404, detail=str(e.args[0]) if e.args else "Not found")


def create_app(data_dir: Optional[Path] = None, storage: Optional[KeyValueStorage] = None,
               year: Optional[int] = None, password: Optional[str] = None,
               debounce: Optional[float] = None, purge_year: Optional[int] = config.LEGACY_PURGE_YEAR) -> FastAPI:
    """Build the planner API around one owned Planner (kept on app.state.planner)."""
    options = dict(
        year=year if year is not None else config.PLANNER_YEAR,
        password=password if password is not None else config.FAMILY_PASSWORD,
        app_name=config.APP_NAME,
        debounce=debounce if debounce is not None else config.SAVE_DEBOUNCE_SECONDS,
        purge_year=purge_year,
    )
    if storage is not None:
        planner = Planner(storage, **options)
    else:
        planner = Planner.from_data_dir(data_dir or config.DATA_DIR, **options)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        # Write any edit still waiting in the debounce window
        planner.shutdown()
        logger.info("Planner shut down")

    app = FastAPI(title="Family Weekly Planner API", debug=config.DEBUG, lifespan=lifespan)
    app.state.planner = planner

    # -------------------- Auth --------------------
    @app.post("/api/login")
    def login(payload: LoginInput, request: Request):
        gate = _planner(request).gate
        form = LoginForm(gate)
        if not form.submit(payload.password):
            return JSONResponse(status_code=401, content={"detail": form.error})
        return {"authenticated": True, "user": gate.user}

    @app.post("/api/logout")
    def logout(planner: Planner = Depends(_require_auth)):
        planner.gate.logout()
        return {"authenticated": False}

    @app.get("/api/session")
    def session(request: Request):
        gate = _planner(request).gate
        return {"authenticated": gate.is_authenticated(), "user": gate.user}

    # -------------------- Calendar & weeks --------------------
    @app.get("/api/calendar")
    def get_calendar(store: WeekStore = Depends(_store)):
        return store.calendar.to_dict()

    @app.get("/api/weeks/{week_id}")
    def get_week(week_id: int, store: WeekStore = Depends(_store)):
        try:
            return store.get_week(week_id).to_dict()
        except KeyError as e:
            raise _not_found(e)

    @app.put("/api/weeks/{week_id}/theme")
    def update_theme(week_id: int, payload: ThemeUpdateInput, store: WeekStore = Depends(_store)):
        try:
            return store.update_theme(week_id, payload.theme1, payload.theme2).to_dict()
        except KeyError as e:
            raise _not_found(e)

    @app.post("/api/weeks/{week_id}/toggle")
    def toggle_week(week_id: int, store: WeekStore = Depends(_store)):
        try:
            return store.toggle_expanded(week_id).to_dict()
        except KeyError as e:
            raise _not_found(e)

    # -------------------- Theme editing --------------------
    def _draft(store: WeekStore):
        return {"editing_week": store.editing_week,
                "theme1": store.temp_theme1, "theme2": store.temp_theme2}

    @app.post("/api/weeks/{week_id}/theme/edit")
    def start_theme_edit(week_id: int, store: WeekStore = Depends(_store)):
        try:
            store.start_editing_theme(week_id)
        except KeyError as e:
            raise _not_found(e)
        return _draft(store)

    @app.patch("/api/theme-draft")
    def update_theme_draft(payload: ThemeDraftInput, store: WeekStore = Depends(_store)):
        try:
            store.set_temp_themes(payload.theme1, payload.theme2)
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))
        return _draft(store)

    @app.post("/api/weeks/{week_id}/theme/commit")
    def finish_theme_edit(week_id: int, store: WeekStore = Depends(_store)):
        try:
            return store.finish_editing_theme(week_id).to_dict()
        except ValueError as e:
            raise HTTPException(status_code=409, detail=str(e))

    @app.delete("/api/theme-draft")
    def cancel_theme_edit(store: WeekStore = Depends(_store)):
        store.cancel_editing_theme()
        return _draft(store)

    # -------------------- Events --------------------
    @app.post("/api/weeks/{week_id}/events", status_code=201)
    def add_event(week_id: int, store: WeekStore = Depends(_store)):
        try:
            return store.add_event(week_id).to_dict()
        except KeyError as e:
            raise _not_found(e)

    @app.put("/api/weeks/{week_id}/events/{event_id}")
    def update_event(week_id: int, event_id: int, payload: EventTextInput, store: WeekStore = Depends(_store)):
        try:
            return store.update_event(week_id, event_id, payload.text).to_dict()
        except KeyError as e:
            raise _not_found(e)

    @app.delete("/api/weeks/{week_id}/events/{event_id}")
    def delete_event(week_id: int, event_id: int, store: WeekStore = Depends(_store)):
        try:
            store.delete_event(week_id, event_id)
        except KeyError as e:
            raise _not_found(e)
        return {"deleted": event_id}

    # -------------------- Persistence --------------------
    @app.post("/api/save")
    def save_now(planner: Planner = Depends(_require_auth)):
        written = planner.saver.flush()
        return {"written": written, "writes": planner.saver.writes, "failures": planner.saver.failures}

    return app


app = create_app()
