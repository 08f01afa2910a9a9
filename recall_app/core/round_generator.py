"""Builds the shopping list and the shelf of items shown during play."""

from __future__ import annotations

from dataclasses import dataclass
import random

from recall_app.constants.game_constants import (
    DISPLAY_SIZE_BANDS,
    DISPLAY_SIZE_LARGEST,
    LIST_LENGTH_MAX,
    LIST_LENGTH_MIN,
)
from recall_app.core.catalog import ItemCatalog
from recall_app.core.errors import InsufficientCatalogSize
from recall_app.core.models import Item


@dataclass(frozen=True, slots=True)
class GeneratedRound:
    """Target list plus the shuffled display set that contains it."""

    target_list: tuple[Item, ...]
    display_set: tuple[Item, ...]

    @property
    def distractor_count(self) -> int:
        return len(self.display_set) - len(self.target_list)


def display_size_for(list_length: int) -> int:
    """Total number of items on display for a list of ``list_length`` targets.

    Longer lists get more distractors so the search stays about as hard.
    """
    for upper_bound, display_size in DISPLAY_SIZE_BANDS:
        if list_length <= upper_bound:
            return display_size
    return DISPLAY_SIZE_LARGEST


def generate_round(catalog: ItemCatalog, list_length: int, rng: random.Random) -> GeneratedRound:
    if not LIST_LENGTH_MIN <= list_length <= LIST_LENGTH_MAX:
        raise ValueError(
            f"List length must be between {LIST_LENGTH_MIN} and {LIST_LENGTH_MAX}, got {list_length}."
        )
    if len(catalog) < list_length:
        raise InsufficientCatalogSize(len(catalog), list_length)

    shuffled = list(catalog.all_items())
    rng.shuffle(shuffled)
    target_list = shuffled[:list_length]

    target_ids = {item.id for item in target_list}
    remaining = [item for item in catalog.all_items() if item.id not in target_ids]
    rng.shuffle(remaining)
    # Small catalogs run out of distractors; show what is left.
    distractor_count = display_size_for(list_length) - list_length
    distractors = remaining[:distractor_count]

    display_set = target_list + distractors
    rng.shuffle(display_set)
    return GeneratedRound(target_list=tuple(target_list), display_set=tuple(display_set))
