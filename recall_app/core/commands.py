"""Commands accepted by the session state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from recall_app.core.models import RoundResult, Settings


@dataclass(frozen=True, slots=True)
class StartRound:
    pass


@dataclass(frozen=True, slots=True)
class AdvanceToBriefing:
    pass


@dataclass(frozen=True, slots=True)
class StartPlaying:
    pass


@dataclass(frozen=True, slots=True)
class SelectItem:
    item_id: str


@dataclass(frozen=True, slots=True)
class DeselectItem:
    item_id: str


@dataclass(frozen=True, slots=True)
class RequestHint:
    pass


@dataclass(frozen=True, slots=True)
class FinishRound:
    pass


@dataclass(frozen=True, slots=True)
class CommitResult:
    pass


@dataclass(frozen=True, slots=True)
class ResetGame:
    pass


@dataclass(frozen=True, slots=True)
class UpdateSettings:
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class LoadSettings:
    """Replace the settings with a copy fetched from persistence."""

    settings: Settings


@dataclass(frozen=True, slots=True)
class LoadHistory:
    """Merge stored results ahead of the rounds committed locally."""

    results: tuple[RoundResult, ...]


Command = Union[
    StartRound,
    AdvanceToBriefing,
    StartPlaying,
    SelectItem,
    DeselectItem,
    RequestHint,
    FinishRound,
    CommitResult,
    ResetGame,
    UpdateSettings,
    LoadSettings,
    LoadHistory,
]
