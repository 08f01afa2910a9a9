"""FastAPI server exposing player storage and the game session commands."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field
import uvicorn

from recall_app.constants.about import APP_NAME, APP_VERSION
from recall_app.constants.game_constants import (
    LIST_LENGTH_MAX,
    LIST_LENGTH_MIN,
    MAX_HINTS_MAX,
    MAX_HINTS_MIN,
    TIMER_MINUTES_MAX,
    TIMER_MINUTES_MIN,
)
from recall_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from recall_app.core.commands import (
    AdvanceToBriefing,
    Command,
    CommitResult,
    DeselectItem,
    FinishRound,
    RequestHint,
    ResetGame,
    SelectItem,
    StartPlaying,
    StartRound,
    UpdateSettings,
)
from recall_app.core.errors import InsufficientCatalogSize, InvalidSettings
from recall_app.core.models import HistorySummary, Item, Phase, RoundResult, Settings
from recall_app.core.services import scorer
from recall_app.core.services.history_ledger import HistoryLedger
from recall_app.core.services.kv_store import KeyValueStore
from recall_app.core.services.persistence import games_key, settings_key
from recall_app.core.session_controller import SessionController
from recall_app.core.state_machine import Transition

logger = logging.getLogger(__name__)

# The target list stays hidden while the player is searching for it.
_TARGETS_VISIBLE_IN = {Phase.MEMORIZING, Phase.RESULTS, Phase.HISTORY}
_SHELF_VISIBLE_IN = {Phase.PLAYING, Phase.RESULTS}


class SettingsPayload(BaseModel):
    """Stored settings record, in the camelCase shape of the web client."""

    model_config = ConfigDict(populate_by_name=True)

    list_length: int = Field(alias="listLength", ge=LIST_LENGTH_MIN, le=LIST_LENGTH_MAX)
    timer_enabled: bool = Field(alias="timerEnabled")
    timer_minutes: int = Field(alias="timerMinutes", ge=TIMER_MINUTES_MIN, le=TIMER_MINUTES_MAX)
    hints_enabled: bool = Field(alias="hintsEnabled")
    max_hints: int = Field(alias="maxHints", ge=MAX_HINTS_MIN, le=MAX_HINTS_MAX)


class GameRecordPayload(BaseModel):
    """Result of one finished round as posted by a client."""

    model_config = ConfigDict(populate_by_name=True)

    accuracy: int = Field(ge=0, le=100)
    time_taken: int = Field(alias="timeTaken", ge=0)
    hints_used: int = Field(alias="hintsUsed", ge=0)
    items_correct: int = Field(alias="itemsCorrect", ge=0)
    items_total: int = Field(alias="itemsTotal", ge=0)


class SettingsUpdatePayload(BaseModel):
    """Partial settings change; bounds are checked by the engine."""

    list_length: int | None = None
    timer_enabled: bool | None = None
    timer_minutes: int | None = None
    hints_enabled: bool | None = None
    max_hints: int | None = None


class ItemPayload(BaseModel):
    """Identifies an item on the shelf."""

    item_id: str


def _get_controller_dependency(controller: SessionController):
    def dependency() -> SessionController:
        return controller

    return dependency


def _get_store_dependency(store: KeyValueStore):
    def dependency() -> KeyValueStore:
        return store

    return dependency


def _item_to_dict(item: Item) -> dict[str, str]:
    return {"id": item.id, "name": item.name, "image": item.image_ref}


def _summary_to_dict(summary: HistorySummary) -> dict[str, object]:
    return {
        "totalGames": summary.total_games,
        "averageAccuracy": summary.average_accuracy,
        "bestAccuracy": summary.best_accuracy,
        "averageTime": summary.average_time,
        "bestTime": summary.best_time,
        "totalCorrectItems": summary.total_correct_items,
        "totalHintsUsed": summary.total_hints_used,
        "recentGames": [result.to_payload() for result in summary.recent],
    }


def _session_to_dict(controller: SessionController) -> dict[str, object]:
    state = controller.snapshot()
    round_state = state.round
    payload: dict[str, object] = {
        "phase": state.phase.value,
        "settings": state.settings.to_payload(),
        "target_list": None,
        "display_set": None,
        "selected_items": [],
        "hints_remaining": controller.hints_remaining(),
        "hint_cooldown_seconds": controller.hint_cooldown_remaining(),
        "current_hint": None,
        "briefing_message": controller.briefing_message(),
        "memorize_seconds_remaining": controller.memorize_time_remaining(),
        "time_remaining_seconds": controller.time_remaining(),
        "result": None,
        "history_length": len(state.history),
    }
    if round_state is not None:
        if state.phase in _TARGETS_VISIBLE_IN:
            payload["target_list"] = [_item_to_dict(item) for item in round_state.target_list]
        if state.phase in _SHELF_VISIBLE_IN:
            payload["display_set"] = [_item_to_dict(item) for item in round_state.display_set]
        payload["selected_items"] = [_item_to_dict(item) for item in round_state.selected_items]
    hint = controller.current_hint()
    if hint is not None:
        payload["current_hint"] = _item_to_dict(hint)
    if state.result is not None:
        breakdown = scorer.classify(round_state)
        payload["result"] = {
            **state.result.to_payload(),
            "label": scorer.performance_label(state.result.accuracy_percent),
            "share_text": scorer.share_text(state.result),
            "correct": [_item_to_dict(item) for item in breakdown.correct],
            "incorrect": [_item_to_dict(item) for item in breakdown.incorrect],
            "missed": [_item_to_dict(item) for item in breakdown.missed],
        }
    return payload


def _run_command(controller: SessionController, command: Command) -> Transition:
    try:
        outcome = controller.dispatch(command)
    except InvalidSettings as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except InsufficientCatalogSize as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    if not outcome.applied:
        raise HTTPException(
            status_code=409,
            detail=f"{type(command).__name__} is not available in phase '{outcome.state.phase.value}'.",
        )
    return outcome


def _register_storage_routes(app: FastAPI, store: KeyValueStore) -> None:
    store_dep = _get_store_dependency(store)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/players/{player_id}/settings")
    def get_player_settings(player_id: str, kv: KeyValueStore = Depends(store_dep)) -> dict[str, object]:
        stored = kv.get(settings_key(player_id))
        if stored is None:
            stored = Settings().to_payload()
            kv.set(settings_key(player_id), stored)
        return {"settings": stored}

    @app.post("/players/{player_id}/settings")
    def save_player_settings(
        player_id: str,
        payload: SettingsPayload,
        kv: KeyValueStore = Depends(store_dep),
    ) -> dict[str, object]:
        record = payload.model_dump(by_alias=True)
        kv.set(settings_key(player_id), record)
        return {"settings": record, "message": "Settings updated successfully"}

    @app.get("/players/{player_id}/games")
    def get_player_games(player_id: str, kv: KeyValueStore = Depends(store_dep)) -> dict[str, object]:
        return {"games": kv.get(games_key(player_id), [])}

    @app.post("/players/{player_id}/games", status_code=201)
    def save_player_game(
        player_id: str,
        payload: GameRecordPayload,
        kv: KeyValueStore = Depends(store_dep),
    ) -> dict[str, object]:
        record = {
            **payload.model_dump(by_alias=True),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        kv.append(games_key(player_id), record)
        logger.info("Saved game for player %s", player_id)
        return {"game": record, "message": "Game saved successfully"}

    @app.get("/players/{player_id}/stats")
    def get_player_stats(player_id: str, kv: KeyValueStore = Depends(store_dep)) -> dict[str, object]:
        results: list[RoundResult] = []
        for record in kv.get(games_key(player_id), []):
            try:
                results.append(RoundResult.from_payload(record))
            except ValueError:
                logger.warning("Skipping malformed game record for %s", player_id)
        return _summary_to_dict(HistoryLedger(loaded=tuple(results)).summary())


def _register_session_routes(app: FastAPI, controller: SessionController) -> None:
    controller_dep = _get_controller_dependency(controller)

    @app.get("/catalog")
    def get_catalog(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        return {"items": [_item_to_dict(item) for item in session.catalog.all_items()]}

    @app.get("/session")
    def get_session(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        return _session_to_dict(session)

    @app.post("/session/start")
    def start_round(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, StartRound())
        return _session_to_dict(session)

    @app.post("/session/briefing")
    def advance_to_briefing(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, AdvanceToBriefing())
        return _session_to_dict(session)

    @app.post("/session/play")
    def start_playing(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, StartPlaying())
        return _session_to_dict(session)

    @app.post("/session/select")
    def select_item(payload: ItemPayload, session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, SelectItem(payload.item_id))
        return _session_to_dict(session)

    @app.post("/session/deselect")
    def deselect_item(payload: ItemPayload, session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, DeselectItem(payload.item_id))
        return _session_to_dict(session)

    @app.post("/session/hint")
    def request_hint(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        outcome = _run_command(session, RequestHint())
        revealed = outcome.revealed_item
        return {
            "revealed_item": _item_to_dict(revealed) if revealed is not None else None,
            "session": _session_to_dict(session),
        }

    @app.post("/session/finish")
    def finish_round(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, FinishRound())
        return _session_to_dict(session)

    @app.post("/session/commit")
    def commit_result(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, CommitResult())
        return _session_to_dict(session)

    @app.post("/session/reset")
    def reset_game(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        _run_command(session, ResetGame())
        return _session_to_dict(session)

    @app.patch("/session/settings")
    def update_settings(
        payload: SettingsUpdatePayload,
        session: SessionController = Depends(controller_dep),
    ) -> dict[str, object]:
        changes = payload.model_dump(exclude_none=True)
        outcome = _run_command(session, UpdateSettings(changes))
        return {"settings": outcome.state.settings.to_payload()}

    @app.get("/session/history")
    def get_history(session: SessionController = Depends(controller_dep)) -> dict[str, object]:
        state = session.snapshot()
        return {
            "games": [result.to_payload() for result in state.history],
            "summary": _summary_to_dict(state.history.summary()),
        }


def create_api_app(controller: SessionController, store: KeyValueStore | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided controller and store."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    _register_storage_routes(app, store or KeyValueStore())
    _register_session_routes(app, controller)
    return app


def start_api_server(
    controller: SessionController,
    store: KeyValueStore | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(controller, store)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="RecallApiServer", daemon=True)
    thread.start()
    return thread
