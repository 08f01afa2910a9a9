"""Scoring of finished rounds."""

from __future__ import annotations

from datetime import datetime
import math

from recall_app.core.models import RoundBreakdown, RoundResult, RoundState

_PERFORMANCE_TIERS: tuple[tuple[int, str], ...] = (
    (90, "Excellent Memory!"),
    (70, "Great Job!"),
    (50, "Good Try!"),
)
_FALLBACK_LABEL = "Keep Practicing!"


def round_half_up(value: float) -> int:
    """Round non-negative values the way the score display expects (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def finish(round_state: RoundState, now: datetime) -> RoundResult:
    """Score the round as of ``now`` without touching the round itself."""
    if round_state.started_at is None:
        time_taken = 0
    else:
        elapsed = max(0.0, (now - round_state.started_at).total_seconds())
        time_taken = round_half_up(elapsed)

    target_ids = round_state.target_ids()
    items_correct = sum(1 for item in round_state.selected_items if item.id in target_ids)
    items_total = len(round_state.target_list)
    accuracy = round_half_up(100 * items_correct / items_total) if items_total else 0

    return RoundResult(
        accuracy_percent=accuracy,
        time_taken_seconds=time_taken,
        hints_used=round_state.hints_granted,
        items_correct=items_correct,
        items_total=items_total,
    )


def classify(round_state: RoundState) -> RoundBreakdown:
    target_ids = round_state.target_ids()
    selected_ids = round_state.selected_ids()
    return RoundBreakdown(
        correct=tuple(item for item in round_state.selected_items if item.id in target_ids),
        incorrect=tuple(item for item in round_state.selected_items if item.id not in target_ids),
        missed=tuple(item for item in round_state.target_list if item.id not in selected_ids),
    )


def performance_label(accuracy_percent: int) -> str:
    for threshold, label in _PERFORMANCE_TIERS:
        if accuracy_percent >= threshold:
            return label
    return _FALLBACK_LABEL


def share_text(result: RoundResult) -> str:
    return (
        "Memory Shopping Game Results!\n\n"
        f"Accuracy: {result.accuracy_percent}%\n"
        f"Time: {result.time_taken_seconds}s\n"
        f"Items: {result.items_correct}/{result.items_total}\n"
        f"Hints Used: {result.hints_used}\n\n"
        "A great exercise for memory and cognitive health!"
    )
