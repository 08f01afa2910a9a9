from __future__ import annotations

from datetime import timedelta

import pytest

from recall_app.core.models import RoundResult
from recall_app.core.services import scorer
from recall_app.core.services.selection_tracker import select


def _pick(round_state, ids):
    for item_id in ids:
        round_state = select(round_state, item_id)
    return round_state


def test_partial_round_score(round_factory, start):
    round_state = _pick(round_factory(hints_granted=1), "ABXY")
    result = scorer.finish(round_state, start + timedelta(seconds=42))

    assert result == RoundResult(
        accuracy_percent=40,
        time_taken_seconds=42,
        hints_used=1,
        items_correct=2,
        items_total=5,
    )


def test_finish_is_repeatable(round_factory, start):
    round_state = _pick(round_factory(), "AB")
    now = start + timedelta(seconds=12)
    assert scorer.finish(round_state, now) == scorer.finish(round_state, now)
    assert round_state.selected_items == _pick(round_factory(), "AB").selected_items


def test_accuracy_rounds_half_up(round_factory, start):
    round_state = _pick(round_factory(targets="ABCDEFGH", distractors=""), "A")
    assert scorer.finish(round_state, start).accuracy_percent == 13


def test_time_taken_rounds_half_up(round_factory, start):
    result = scorer.finish(round_factory(), start + timedelta(seconds=7.5))
    assert result.time_taken_seconds == 8


def test_classify_splits_selection(round_factory):
    breakdown = scorer.classify(_pick(round_factory(), "AXB"))
    assert [item.id for item in breakdown.correct] == ["A", "B"]
    assert [item.id for item in breakdown.incorrect] == ["X"]
    assert [item.id for item in breakdown.missed] == ["C", "D", "E"]


@pytest.mark.parametrize(
    ("accuracy", "label"),
    [
        (100, "Excellent Memory!"),
        (90, "Excellent Memory!"),
        (89, "Great Job!"),
        (70, "Great Job!"),
        (50, "Good Try!"),
        (49, "Keep Practicing!"),
        (0, "Keep Practicing!"),
    ],
)
def test_performance_label(accuracy, label):
    assert scorer.performance_label(accuracy) == label


def test_share_text_lists_the_numbers():
    text = scorer.share_text(RoundResult(80, 37, 2, 4, 5))
    assert "Accuracy: 80%" in text
    assert "Time: 37s" in text
    assert "Items: 4/5" in text
    assert "Hints Used: 2" in text
