"""Append-only record of finished rounds and the statistics derived from it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from recall_app.constants.game_constants import RECENT_GAMES_LIMIT
from recall_app.core.models import HistorySummary, RoundResult
from recall_app.core.services.scorer import round_half_up


@dataclass(frozen=True, slots=True)
class HistoryLedger:
    """Immutable snapshot of the ledger; every change returns a new ledger.

    ``loaded`` holds records fetched from persistence and ``appended`` the
    rounds committed during this process, so a late load never reorders or
    drops local results.
    """

    loaded: tuple[RoundResult, ...] = ()
    appended: tuple[RoundResult, ...] = ()

    def append(self, result: RoundResult) -> "HistoryLedger":
        return HistoryLedger(loaded=self.loaded, appended=self.appended + (result,))

    def merged_with(self, stored: Iterable[RoundResult]) -> "HistoryLedger":
        return HistoryLedger(loaded=tuple(stored), appended=self.appended)

    def entries(self) -> tuple[RoundResult, ...]:
        return self.loaded + self.appended

    def latest(self) -> RoundResult | None:
        entries = self.entries()
        return entries[-1] if entries else None

    def summary(self, recent_limit: int = RECENT_GAMES_LIMIT) -> HistorySummary:
        entries = self.entries()
        if not entries:
            return HistorySummary()
        total = len(entries)
        return HistorySummary(
            total_games=total,
            average_accuracy=round_half_up(sum(e.accuracy_percent for e in entries) / total),
            best_accuracy=max(e.accuracy_percent for e in entries),
            average_time=round_half_up(sum(e.time_taken_seconds for e in entries) / total),
            best_time=min(e.time_taken_seconds for e in entries),
            total_correct_items=sum(e.items_correct for e in entries),
            total_hints_used=sum(e.hints_used for e in entries),
            recent=tuple(reversed(entries))[:recent_limit],
        )

    def __len__(self) -> int:
        return len(self.loaded) + len(self.appended)

    def __iter__(self) -> Iterator[RoundResult]:
        return iter(self.entries())
