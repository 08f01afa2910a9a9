"""Facade that owns one player's session and serialises every command."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging
import math
import random
from threading import Lock
from typing import Any, Callable

from recall_app.constants.game_constants import HINT_REVEAL_SECONDS, MEMORIZE_SECONDS
from recall_app.core.briefing_script import BriefingScript
from recall_app.core.catalog import ItemCatalog
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
from recall_app.core.errors import InvalidSettings
from recall_app.core.game_settings import validate_settings
from recall_app.core.models import HistorySummary, Item, Phase, RoundBreakdown, RoundResult, Settings
from recall_app.core.services import hint_limiter, scorer
from recall_app.core.services.persistence import PersistenceSync
from recall_app.core.state_machine import SessionState, Transition, transition

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SessionController:
    """Applies commands to the session state and runs the sync step after each one."""

    def __init__(
        self,
        catalog: ItemCatalog | None = None,
        rng: random.Random | None = None,
        sync: PersistenceSync | None = None,
        clock: Callable[[], datetime] = utc_now,
        auto_start_play: bool = True,
        settings: Settings | None = None,
    ) -> None:
        self._lock = Lock()
        self._catalog = catalog or ItemCatalog.default()
        self._rng = rng or random.Random()
        self._sync = sync or PersistenceSync.local()
        self._clock = clock
        self._auto_start_play = auto_start_play
        self._state = SessionState(settings=validate_settings(settings) if settings else Settings())
        self._revealed_item: Item | None = None
        self._revealed_until: datetime | None = None

    @property
    def catalog(self) -> ItemCatalog:
        return self._catalog

    # --- Command dispatch ---

    def dispatch(self, command: Command, now: datetime | None = None) -> Transition:
        with self._lock:
            return self._apply(command, now or self._clock())

    def load_persisted(self) -> None:
        """Replay stored settings and history into the session."""
        for command in self._sync.load():
            try:
                self.dispatch(command)
            except InvalidSettings as exc:
                logger.warning("Ignoring stored settings: %s", exc)

    def start_round(self) -> SessionState:
        return self.dispatch(StartRound()).state

    def advance_to_briefing(self) -> SessionState:
        return self.dispatch(AdvanceToBriefing()).state

    def start_playing(self) -> SessionState:
        return self.dispatch(StartPlaying()).state

    def select_item(self, item_id: str) -> SessionState:
        return self.dispatch(SelectItem(item_id)).state

    def deselect_item(self, item_id: str) -> SessionState:
        return self.dispatch(DeselectItem(item_id)).state

    def request_hint(self) -> Item | None:
        return self.dispatch(RequestHint()).revealed_item

    def finish_round(self) -> RoundResult | None:
        return self.dispatch(FinishRound()).state.result

    def commit_result(self) -> SessionState:
        return self.dispatch(CommitResult()).state

    def reset_game(self) -> SessionState:
        return self.dispatch(ResetGame()).state

    def update_settings(self, **changes: Any) -> Settings:
        return self.dispatch(UpdateSettings(changes)).state.settings

    # --- Timers ---

    def tick(self, now: datetime | None = None) -> list[Command]:
        """Fire every time-based transition that is due; returns what was dispatched."""
        now = now or self._clock()
        with self._lock:
            if self._revealed_until is not None and now >= self._revealed_until:
                self._clear_hint()
            # Due check and transition share one critical section.
            due = self._due_command(now)
            if due is None:
                return []
            outcome = self._apply(due, now)
        if not outcome.applied:
            return []
        logger.debug("Timer fired %s", type(due).__name__)
        return [due]

    def _due_command(self, now: datetime) -> Command | None:
        state = self._state
        round_state = state.round
        if round_state is None or round_state.phase_entered_at is None:
            return None
        in_phase = (now - round_state.phase_entered_at).total_seconds()
        if state.phase is Phase.MEMORIZING and in_phase >= MEMORIZE_SECONDS:
            return AdvanceToBriefing()
        if state.phase is Phase.BRIEFING and self._auto_start_play:
            if BriefingScript(len(round_state.target_list)).is_finished(in_phase):
                return StartPlaying()
        if state.phase is Phase.PLAYING and state.settings.timer_enabled:
            remaining = self._play_time_remaining(state, now)
            if remaining is not None and remaining <= 0:
                return FinishRound()
        return None

    # --- Read-only accessors ---

    def snapshot(self) -> SessionState:
        with self._lock:
            return self._state

    def phase(self) -> Phase:
        return self.snapshot().phase

    def current_hint(self, now: datetime | None = None) -> Item | None:
        now = now or self._clock()
        with self._lock:
            if self._revealed_until is None or now >= self._revealed_until:
                return None
            return self._revealed_item

    def briefing_message(self, now: datetime | None = None) -> str | None:
        now = now or self._clock()
        state = self.snapshot()
        if state.phase is not Phase.BRIEFING or state.round is None:
            return None
        elapsed = (now - state.round.phase_entered_at).total_seconds()
        return BriefingScript(len(state.round.target_list)).message_at(elapsed)

    def memorize_time_remaining(self, now: datetime | None = None) -> int | None:
        now = now or self._clock()
        state = self.snapshot()
        if state.phase is not Phase.MEMORIZING or state.round is None:
            return None
        elapsed = (now - state.round.phase_entered_at).total_seconds()
        return max(0, MEMORIZE_SECONDS - int(elapsed))

    def time_remaining(self, now: datetime | None = None) -> int | None:
        """Whole seconds left on the round timer, or None when no timer runs."""
        now = now or self._clock()
        state = self.snapshot()
        if state.phase is not Phase.PLAYING or not state.settings.timer_enabled:
            return None
        remaining = self._play_time_remaining(state, now)
        return None if remaining is None else max(0, math.ceil(remaining))

    def hints_remaining(self) -> int:
        state = self.snapshot()
        if state.round is None:
            return state.settings.max_hints
        return hint_limiter.hints_remaining(state.round, state.settings)

    def hint_cooldown_remaining(self, now: datetime | None = None) -> int:
        now = now or self._clock()
        state = self.snapshot()
        if state.round is None:
            return 0
        return hint_limiter.cooldown_remaining(state.round, now)

    def can_request_hint(self, now: datetime | None = None) -> bool:
        now = now or self._clock()
        state = self.snapshot()
        if state.phase is not Phase.PLAYING:
            return False
        return hint_limiter.can_request_hint(state.round, state.settings, now)

    def breakdown(self) -> RoundBreakdown | None:
        state = self.snapshot()
        if state.result is None or state.round is None:
            return None
        return scorer.classify(state.round)

    def history_summary(self) -> HistorySummary:
        return self.snapshot().history.summary()

    def shutdown(self) -> None:
        self._sync.shutdown()

    @staticmethod
    def _play_time_remaining(state: SessionState, now: datetime) -> float | None:
        if state.round is None or state.round.playing_started_at is None:
            return None
        elapsed = (now - state.round.playing_started_at).total_seconds()
        return state.settings.timer_minutes * 60 - elapsed

    def _apply(self, command: Command, now: datetime) -> Transition:
        """Run one command; the caller holds ``_lock``."""
        previous = self._state
        outcome = transition(previous, command, now, self._rng, self._catalog)
        self._state = outcome.state
        if outcome.revealed_item is not None:
            self._revealed_item = outcome.revealed_item
            self._revealed_until = now + timedelta(seconds=HINT_REVEAL_SECONDS)
        elif outcome.state.phase is not Phase.PLAYING:
            self._clear_hint()
        self._sync.after_transition(command, previous, outcome.state)
        return outcome

    def _clear_hint(self) -> None:
        self._revealed_item = None
        self._revealed_until = None
