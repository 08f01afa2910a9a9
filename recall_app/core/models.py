"""Domain models for the memory game."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from recall_app.constants.game_constants import (
    DEFAULT_HINTS_ENABLED,
    DEFAULT_LIST_LENGTH,
    DEFAULT_MAX_HINTS,
    DEFAULT_TIMER_ENABLED,
    DEFAULT_TIMER_MINUTES,
)


class Phase(str, Enum):
    """Pages the player moves through during one round."""

    HOME = "home"
    MEMORIZING = "memorizing"
    BRIEFING = "briefing"
    PLAYING = "playing"
    RESULTS = "results"
    HISTORY = "history"


@dataclass(frozen=True, slots=True)
class Item:
    """A catalog entry the player can memorize and pick."""

    id: str
    name: str
    image_ref: str


@dataclass(frozen=True, slots=True)
class Settings:
    """Player-adjustable game settings."""

    list_length: int = DEFAULT_LIST_LENGTH
    timer_enabled: bool = DEFAULT_TIMER_ENABLED
    timer_minutes: int = DEFAULT_TIMER_MINUTES
    hints_enabled: bool = DEFAULT_HINTS_ENABLED
    max_hints: int = DEFAULT_MAX_HINTS

    def to_payload(self) -> dict[str, object]:
        return {
            "listLength": self.list_length,
            "timerEnabled": self.timer_enabled,
            "timerMinutes": self.timer_minutes,
            "hintsEnabled": self.hints_enabled,
            "maxHints": self.max_hints,
        }


@dataclass(frozen=True, slots=True)
class RoundState:
    """Everything that belongs to the round currently in progress."""

    target_list: tuple[Item, ...]
    display_set: tuple[Item, ...]
    selected_items: tuple[Item, ...] = ()
    hints_granted: int = 0
    last_hint_at: datetime | None = None
    started_at: datetime | None = None
    phase_entered_at: datetime | None = None
    playing_started_at: datetime | None = None

    def target_ids(self) -> set[str]:
        return {item.id for item in self.target_list}

    def selected_ids(self) -> set[str]:
        return {item.id for item in self.selected_items}

    def find_displayed(self, item_id: str) -> Item | None:
        return next((item for item in self.display_set if item.id == item_id), None)


@dataclass(frozen=True, slots=True)
class RoundResult:
    """Score of a finished round, as stored in the history ledger."""

    accuracy_percent: int
    time_taken_seconds: int
    hints_used: int
    items_correct: int
    items_total: int

    def to_payload(self) -> dict[str, int]:
        return {
            "accuracy": self.accuracy_percent,
            "timeTaken": self.time_taken_seconds,
            "hintsUsed": self.hints_used,
            "itemsCorrect": self.items_correct,
            "itemsTotal": self.items_total,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "RoundResult":
        """Build a result from the stored record shape (extra keys are ignored)."""
        try:
            return cls(
                accuracy_percent=int(payload["accuracy"]),
                time_taken_seconds=int(round(float(payload["timeTaken"]))),
                hints_used=int(payload["hintsUsed"]),
                items_correct=int(payload["itemsCorrect"]),
                items_total=int(payload["itemsTotal"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed game record: {payload!r}") from exc


@dataclass(frozen=True, slots=True)
class RoundBreakdown:
    """Per-item classification shown on the results page."""

    correct: tuple[Item, ...]
    incorrect: tuple[Item, ...]
    missed: tuple[Item, ...]


@dataclass(frozen=True, slots=True)
class HistorySummary:
    """Aggregate statistics over the history ledger."""

    total_games: int = 0
    average_accuracy: int = 0
    best_accuracy: int = 0
    average_time: int = 0
    best_time: int = 0
    total_correct_items: int = 0
    total_hints_used: int = 0
    recent: tuple[RoundResult, ...] = field(default_factory=tuple)
