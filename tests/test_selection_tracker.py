from __future__ import annotations

from recall_app.core.services.selection_tracker import deselect, select


def test_select_appends_in_order(round_factory):
    round_state = select(select(round_factory(), "B"), "X")
    assert [item.id for item in round_state.selected_items] == ["B", "X"]


def test_select_twice_is_idempotent(round_factory):
    once = select(round_factory(), "A")
    twice = select(once, "A")
    assert twice.selected_items == once.selected_items
    assert twice is once


def test_select_unknown_item_is_ignored(round_factory):
    round_state = round_factory()
    assert select(round_state, "Q") is round_state


def test_deselect_removes_only_that_item(round_factory):
    round_state = select(select(select(round_factory(), "A"), "B"), "C")
    round_state = deselect(round_state, "B")
    assert [item.id for item in round_state.selected_items] == ["A", "C"]
    assert "B" not in round_state.selected_ids()


def test_deselect_missing_item_is_a_no_op(round_factory):
    round_state = select(round_factory(), "A")
    assert deselect(round_state, "Z") is round_state
