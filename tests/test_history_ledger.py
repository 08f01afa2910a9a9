from __future__ import annotations

from recall_app.core.models import HistorySummary, RoundResult
from recall_app.core.services.history_ledger import HistoryLedger


def _result(accuracy: int, seconds: int, hints: int = 0, correct: int = 3, total: int = 5) -> RoundResult:
    return RoundResult(accuracy, seconds, hints, correct, total)


def test_append_returns_new_ledger():
    ledger = HistoryLedger()
    grown = ledger.append(_result(60, 30))
    assert len(ledger) == 0
    assert len(grown) == 1
    assert grown.latest() == _result(60, 30)


def test_late_load_keeps_local_results_last():
    local = HistoryLedger().append(_result(100, 20))
    merged = local.merged_with([_result(40, 50), _result(60, 45)])
    assert [entry.accuracy_percent for entry in merged] == [40, 60, 100]


def test_empty_summary():
    assert HistoryLedger().summary() == HistorySummary()


def test_summary_statistics():
    ledger = HistoryLedger(loaded=(_result(40, 50, hints=1, correct=2), _result(81, 33, hints=2, correct=4)))
    summary = ledger.summary()
    assert summary.total_games == 2
    assert summary.average_accuracy == 61
    assert summary.best_accuracy == 81
    assert summary.average_time == 42
    assert summary.best_time == 33
    assert summary.total_correct_items == 6
    assert summary.total_hints_used == 3
    assert summary.recent[0].accuracy_percent == 81


def test_recent_is_limited_and_newest_first():
    ledger = HistoryLedger()
    for n in range(12):
        ledger = ledger.append(_result(n, 10 + n))
    recent = ledger.summary(recent_limit=10).recent
    assert len(recent) == 10
    assert recent[0].accuracy_percent == 11
    assert recent[-1].accuracy_percent == 2
