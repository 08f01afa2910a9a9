from __future__ import annotations

import random
import threading

import pytest

from recall_app.core.commands import AdvanceToBriefing, FinishRound, ResetGame, StartPlaying, StartRound
from recall_app.core.models import Phase, RoundResult, Settings
from recall_app.core.services.persistence import PersistenceSync
from recall_app.core.session_controller import SessionController


class RecordingBoundary:
    def __init__(self, settings: Settings | None = None, history=None) -> None:
        self.stored_settings = settings
        self.history = list(history or [])
        self.saved_settings: list[Settings] = []
        self.appended: list[RoundResult] = []

    def load_settings(self):
        return self.stored_settings

    def save_settings(self, settings):
        self.saved_settings.append(settings)

    def load_history(self):
        return list(self.history)

    def append_history_record(self, result):
        self.appended.append(result)


@pytest.fixture
def boundary():
    return RecordingBoundary()


@pytest.fixture
def controller(clock, boundary, inline_executor):
    return SessionController(
        rng=random.Random(42),
        sync=PersistenceSync(boundary, executor=inline_executor),
        clock=clock,
    )


def _targets(controller):
    return [item.id for item in controller.snapshot().round.target_list]


def _distractors(controller):
    round_state = controller.snapshot().round
    target_ids = round_state.target_ids()
    return [item.id for item in round_state.display_set if item.id not in target_ids]


def test_round_scored_from_start_time(controller, clock, boundary):
    controller.start_round()
    clock.advance(10)
    controller.advance_to_briefing()
    clock.advance(2)
    controller.start_playing()

    targets = _targets(controller)
    wrong = _distractors(controller)
    for item_id in (targets[0], targets[1], wrong[0], wrong[1]):
        controller.select_item(item_id)
    clock.advance(30)
    result = controller.finish_round()

    assert result == RoundResult(
        accuracy_percent=40,
        time_taken_seconds=42,
        hints_used=0,
        items_correct=2,
        items_total=5,
    )
    assert controller.phase() is Phase.RESULTS
    breakdown = controller.breakdown()
    assert len(breakdown.correct) == 2
    assert len(breakdown.incorrect) == 2
    assert len(breakdown.missed) == 3

    controller.commit_result()
    assert controller.phase() is Phase.HISTORY
    assert boundary.appended == [result]
    assert controller.history_summary().total_games == 1


def test_timers_drive_the_round(controller, clock):
    controller.start_round()
    assert controller.memorize_time_remaining() == 30
    assert controller.tick() == []

    clock.advance(30)
    assert controller.tick() == [AdvanceToBriefing()]
    assert controller.phase() is Phase.BRIEFING
    assert controller.briefing_message() == "Welcome to our friendly neighborhood store!"

    clock.advance(15)
    assert controller.tick() == [StartPlaying()]
    assert controller.phase() is Phase.PLAYING
    assert controller.time_remaining() == 180

    clock.advance(179.5)
    assert controller.time_remaining() == 1
    assert controller.tick() == []

    clock.advance(0.5)
    assert controller.tick() == [FinishRound()]
    assert controller.phase() is Phase.RESULTS


def test_no_timeout_when_timer_disabled(controller, clock):
    controller.update_settings(timer_enabled=False)
    controller.start_round()
    controller.advance_to_briefing()
    controller.start_playing()
    clock.advance(3600)
    assert controller.tick() == []
    assert controller.time_remaining() is None
    assert controller.phase() is Phase.PLAYING


def test_briefing_waits_when_auto_start_is_off(clock):
    controller = SessionController(rng=random.Random(3), clock=clock, auto_start_play=False)
    controller.start_round()
    controller.advance_to_briefing()
    clock.advance(60)
    assert controller.tick() == []
    assert controller.phase() is Phase.BRIEFING


def test_hint_is_shown_briefly(controller, clock):
    controller.start_round()
    controller.advance_to_briefing()
    controller.start_playing()

    revealed = controller.request_hint()
    assert revealed is not None
    assert revealed.id in _targets(controller)
    assert controller.current_hint() == revealed
    assert controller.hints_remaining() == 1
    assert controller.hint_cooldown_remaining() == 5
    assert not controller.can_request_hint()

    clock.advance(3)
    controller.tick()
    assert controller.current_hint() is None

    clock.advance(2)
    assert controller.can_request_hint()


def test_settings_changes_are_saved(controller, boundary, inline_executor):
    settings = controller.update_settings(list_length=8)
    assert settings.list_length == 8
    assert boundary.saved_settings == [settings]
    assert inline_executor.calls == 1

    controller.start_round()
    assert len(_targets(controller)) == 8


def test_load_persisted_replays_stored_data(clock, inline_executor):
    stored = [RoundResult(80, 30, 0, 4, 5)]
    boundary = RecordingBoundary(settings=Settings(list_length=6), history=stored)
    controller = SessionController(
        rng=random.Random(5),
        sync=PersistenceSync(boundary, executor=inline_executor),
        clock=clock,
    )
    controller.load_persisted()

    state = controller.snapshot()
    assert state.settings.list_length == 6
    assert list(state.history) == stored
    assert boundary.saved_settings == []
    assert inline_executor.calls == 0


def test_local_only_session_never_writes(clock):
    controller = SessionController(rng=random.Random(8), clock=clock)
    controller.update_settings(max_hints=4)
    controller.start_round()
    controller.advance_to_briefing()
    controller.start_playing()
    controller.finish_round()
    controller.commit_result()
    controller.load_persisted()
    assert len(controller.snapshot().history) == 1


def test_reset_returns_home(controller):
    controller.start_round()
    state = controller.reset_game()
    assert state.phase is Phase.HOME
    assert state.round is None
    assert controller.hints_remaining() == 2


def test_timer_cannot_land_on_a_round_started_concurrently(controller, clock, monkeypatch):
    controller.start_round()
    clock.advance(30)

    def restart() -> None:
        controller.dispatch(ResetGame())
        controller.dispatch(StartRound())

    other = threading.Thread(target=restart)
    original_due = controller._due_command

    def due_while_other_thread_waits(now):
        other.start()
        other.join(timeout=0.2)
        assert other.is_alive()
        return original_due(now)

    monkeypatch.setattr(controller, "_due_command", due_while_other_thread_waits)
    assert controller.tick() == [AdvanceToBriefing()]
    other.join(timeout=5)
    monkeypatch.undo()

    assert controller.phase() is Phase.MEMORIZING
    assert controller.memorize_time_remaining() == 30
    assert controller.tick() == []
    assert controller.phase() is Phase.MEMORIZING
