"""Tracks which items the player has put in the basket this round."""

from __future__ import annotations

from dataclasses import replace

from recall_app.core.models import RoundState


def select(round_state: RoundState, item_id: str) -> RoundState:
    """Append the item to the selection; double clicks and unknown ids are ignored."""
    if item_id in round_state.selected_ids():
        return round_state
    item = round_state.find_displayed(item_id)
    if item is None:
        return round_state
    return replace(round_state, selected_items=round_state.selected_items + (item,))


def deselect(round_state: RoundState, item_id: str) -> RoundState:
    if item_id not in round_state.selected_ids():
        return round_state
    remaining = tuple(item for item in round_state.selected_items if item.id != item_id)
    return replace(round_state, selected_items=remaining)
