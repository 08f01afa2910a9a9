"""Pure phase transitions for one player's game session.

``transition`` never mutates its input and never talks to persistence; the
controller decides what to do with the returned state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
import logging
import random
from typing import Callable

from recall_app.core.catalog import ItemCatalog
from recall_app.core.commands import (
    AdvanceToBriefing,
    Command,
    CommitResult,
    DeselectItem,
    FinishRound,
    LoadHistory,
    LoadSettings,
    RequestHint,
    ResetGame,
    SelectItem,
    StartPlaying,
    StartRound,
    UpdateSettings,
)
from recall_app.core.errors import InvalidSettings
from recall_app.core.game_settings import merge_settings, validate_settings
from recall_app.core.models import Item, Phase, RoundResult, RoundState, Settings
from recall_app.core.round_generator import generate_round
from recall_app.core.services import hint_limiter, scorer, selection_tracker
from recall_app.core.services.history_ledger import HistoryLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of a session."""

    phase: Phase = Phase.HOME
    settings: Settings = field(default_factory=Settings)
    round: RoundState | None = None
    result: RoundResult | None = None
    history: HistoryLedger = field(default_factory=HistoryLedger)


@dataclass(frozen=True, slots=True)
class Transition:
    """Outcome of applying one command."""

    state: SessionState
    revealed_item: Item | None = None
    applied: bool = True


@dataclass(frozen=True, slots=True)
class _Context:
    now: datetime
    rng: random.Random
    catalog: ItemCatalog


def transition(
    state: SessionState,
    command: Command,
    now: datetime,
    rng: random.Random,
    catalog: ItemCatalog,
) -> Transition:
    """Apply ``command`` to ``state``.

    Commands that do not apply to the current phase leave the state untouched
    and come back with ``applied=False``. Raises ``InvalidSettings`` and
    ``InsufficientCatalogSize``; everything else is total.
    """
    entry = _HANDLERS.get(type(command))
    if entry is None:
        raise TypeError(f"Unsupported command: {command!r}")
    allowed_phases, handler = entry
    if allowed_phases is not None and state.phase not in allowed_phases:
        logger.debug("Ignoring %s in phase %s", type(command).__name__, state.phase.value)
        return Transition(state=state, applied=False)
    return handler(state, command, _Context(now=now, rng=rng, catalog=catalog))


def _enter(state: SessionState, phase: Phase, now: datetime, **round_changes) -> SessionState:
    round_state = state.round
    if round_state is not None:
        round_state = replace(round_state, phase_entered_at=now, **round_changes)
    return replace(state, phase=phase, round=round_state)


def _start_round(state: SessionState, command: StartRound, ctx: _Context) -> Transition:
    generated = generate_round(ctx.catalog, state.settings.list_length, ctx.rng)
    round_state = RoundState(
        target_list=generated.target_list,
        display_set=generated.display_set,
        started_at=ctx.now,
        phase_entered_at=ctx.now,
    )
    logger.info(
        "Round started: %d target(s) among %d item(s)",
        len(generated.target_list),
        len(generated.display_set),
    )
    return Transition(replace(state, phase=Phase.MEMORIZING, round=round_state, result=None))


def _advance_to_briefing(state: SessionState, command: AdvanceToBriefing, ctx: _Context) -> Transition:
    return Transition(_enter(state, Phase.BRIEFING, ctx.now))


def _start_playing(state: SessionState, command: StartPlaying, ctx: _Context) -> Transition:
    return Transition(_enter(state, Phase.PLAYING, ctx.now, playing_started_at=ctx.now))


def _select_item(state: SessionState, command: SelectItem, ctx: _Context) -> Transition:
    return Transition(replace(state, round=selection_tracker.select(state.round, command.item_id)))


def _deselect_item(state: SessionState, command: DeselectItem, ctx: _Context) -> Transition:
    return Transition(replace(state, round=selection_tracker.deselect(state.round, command.item_id)))


def _request_hint(state: SessionState, command: RequestHint, ctx: _Context) -> Transition:
    outcome = hint_limiter.request_hint(state.round, state.settings, ctx.now, ctx.rng)
    return Transition(
        replace(state, round=outcome.round_state),
        revealed_item=outcome.revealed_item,
    )


def _finish_round(state: SessionState, command: FinishRound, ctx: _Context) -> Transition:
    result = scorer.finish(state.round, ctx.now)
    logger.info(
        "Round finished: %d/%d correct (%d%%) in %ds",
        result.items_correct,
        result.items_total,
        result.accuracy_percent,
        result.time_taken_seconds,
    )
    return Transition(replace(_enter(state, Phase.RESULTS, ctx.now), result=result))


def _commit_result(state: SessionState, command: CommitResult, ctx: _Context) -> Transition:
    history = state.history.append(state.result)
    return Transition(replace(_enter(state, Phase.HISTORY, ctx.now), history=history))


def _reset_game(state: SessionState, command: ResetGame, ctx: _Context) -> Transition:
    return Transition(SessionState(settings=state.settings, history=state.history))


def _update_settings(state: SessionState, command: UpdateSettings, ctx: _Context) -> Transition:
    settings = merge_settings(state.settings, command.changes)
    _check_round_compatible(state, settings)
    return Transition(replace(state, settings=settings))


def _load_settings(state: SessionState, command: LoadSettings, ctx: _Context) -> Transition:
    settings = validate_settings(command.settings)
    _check_round_compatible(state, settings)
    return Transition(replace(state, settings=settings))


def _load_history(state: SessionState, command: LoadHistory, ctx: _Context) -> Transition:
    return Transition(replace(state, history=state.history.merged_with(command.results)))


def _check_round_compatible(state: SessionState, settings: Settings) -> None:
    if state.round is not None and settings.max_hints < state.round.hints_granted:
        raise InvalidSettings(
            f"max_hints cannot drop below the {state.round.hints_granted} hint(s) already used this round."
        )


_Handler = Callable[[SessionState, Command, _Context], Transition]

# command type -> (phases it applies in, or None for any phase; handler)
_HANDLERS: dict[type, tuple[frozenset[Phase] | None, _Handler]] = {
    StartRound: (frozenset({Phase.HOME}), _start_round),
    AdvanceToBriefing: (frozenset({Phase.MEMORIZING}), _advance_to_briefing),
    StartPlaying: (frozenset({Phase.BRIEFING}), _start_playing),
    SelectItem: (frozenset({Phase.PLAYING}), _select_item),
    DeselectItem: (frozenset({Phase.PLAYING}), _deselect_item),
    RequestHint: (frozenset({Phase.PLAYING}), _request_hint),
    FinishRound: (frozenset({Phase.PLAYING}), _finish_round),
    CommitResult: (frozenset({Phase.RESULTS}), _commit_result),
    ResetGame: (None, _reset_game),
    UpdateSettings: (None, _update_settings),
    LoadSettings: (None, _load_settings),
    LoadHistory: (None, _load_history),
}
