"""Rate limiting and item choice for in-game hints."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
import logging
import math
import random

from recall_app.constants.game_constants import HINT_COOLDOWN_SECONDS
from recall_app.core.models import Item, RoundState, Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HintOutcome:
    """Round after a hint request, and the item to reveal if one was granted."""

    round_state: RoundState
    revealed_item: Item | None = None

    @property
    def granted(self) -> bool:
        return self.revealed_item is not None


def hints_remaining(round_state: RoundState, settings: Settings) -> int:
    return max(0, settings.max_hints - round_state.hints_granted)


def cooldown_remaining(round_state: RoundState, now: datetime) -> int:
    """Whole seconds until the next hint may be granted (0 when ready)."""
    if round_state.last_hint_at is None:
        return 0
    elapsed = (now - round_state.last_hint_at).total_seconds()
    return max(0, math.ceil(HINT_COOLDOWN_SECONDS - elapsed))


def can_request_hint(round_state: RoundState, settings: Settings, now: datetime) -> bool:
    if not settings.hints_enabled:
        return False
    if round_state.hints_granted >= settings.max_hints:
        return False
    if round_state.last_hint_at is None:
        return True
    return (now - round_state.last_hint_at).total_seconds() >= HINT_COOLDOWN_SECONDS


def request_hint(
    round_state: RoundState,
    settings: Settings,
    now: datetime,
    rng: random.Random,
) -> HintOutcome:
    """Reveal one target item the player has not picked yet.

    Denied requests return the round unchanged and no item.
    """
    if not can_request_hint(round_state, settings, now):
        logger.debug("Hint denied: limit reached or cooling down.")
        return HintOutcome(round_state=round_state)

    selected = round_state.selected_ids()
    candidates = [item for item in round_state.target_list if item.id not in selected]
    if not candidates:
        logger.debug("Hint denied: every target is already selected.")
        return HintOutcome(round_state=round_state)

    revealed = rng.choice(candidates)
    updated = replace(
        round_state,
        hints_granted=round_state.hints_granted + 1,
        last_hint_at=now,
    )
    return HintOutcome(round_state=updated, revealed_item=revealed)
