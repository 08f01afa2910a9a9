from __future__ import annotations

from datetime import datetime, timedelta, timezone
import random

import pytest

from recall_app.core.catalog import ItemCatalog
from recall_app.core.models import Item, RoundState

START = datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)


class InlineExecutor:
    """Runs submitted work immediately so persistence writes are observable in tests."""

    def __init__(self) -> None:
        self.calls = 0

    def submit(self, fn, *args, **kwargs):
        self.calls += 1
        fn(*args, **kwargs)

    def shutdown(self, wait: bool = True) -> None:
        pass


class FakeClock:
    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


def make_item(item_id: str) -> Item:
    return Item(id=item_id, name=f"Item {item_id}", image_ref=f"https://example.test/{item_id}.jpg")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def start() -> datetime:
    return START


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def inline_executor() -> InlineExecutor:
    return InlineExecutor()


@pytest.fixture
def catalog() -> ItemCatalog:
    return ItemCatalog.default()


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def round_factory():
    """Build a round whose targets are A-E and whose shelf adds X and Y."""

    def build(targets: str = "ABCDE", distractors: str = "XY", **overrides) -> RoundState:
        target_list = tuple(make_item(letter) for letter in targets)
        display_set = target_list + tuple(make_item(letter) for letter in distractors)
        fields = {"started_at": START, "phase_entered_at": START}
        fields.update(overrides)
        return RoundState(target_list=target_list, display_set=display_set, **fields)

    return build
