"""Validation and merging of player settings."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

from recall_app.constants.game_constants import (
    LIST_LENGTH_MAX,
    LIST_LENGTH_MIN,
    MAX_HINTS_MAX,
    MAX_HINTS_MIN,
    TIMER_MINUTES_MAX,
    TIMER_MINUTES_MIN,
)
from recall_app.core.errors import InvalidSettings
from recall_app.core.models import Settings

_INT_BOUNDS: dict[str, tuple[int, int]] = {
    "list_length": (LIST_LENGTH_MIN, LIST_LENGTH_MAX),
    "timer_minutes": (TIMER_MINUTES_MIN, TIMER_MINUTES_MAX),
    "max_hints": (MAX_HINTS_MIN, MAX_HINTS_MAX),
}
_BOOL_FIELDS = ("timer_enabled", "hints_enabled")

# Stored records use the camelCase keys of the web client.
_PAYLOAD_KEYS: dict[str, str] = {
    "listLength": "list_length",
    "timerEnabled": "timer_enabled",
    "timerMinutes": "timer_minutes",
    "hintsEnabled": "hints_enabled",
    "maxHints": "max_hints",
}


def validate_settings(settings: Settings) -> Settings:
    for name, (low, high) in _INT_BOUNDS.items():
        value = getattr(settings, name)
        # bool is an int subclass; True must not pass as a list length.
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSettings(f"{name} must be an integer, got {value!r}.")
        if not low <= value <= high:
            raise InvalidSettings(f"{name} must be between {low} and {high}, got {value}.")
    for name in _BOOL_FIELDS:
        value = getattr(settings, name)
        if not isinstance(value, bool):
            raise InvalidSettings(f"{name} must be true or false, got {value!r}.")
    return settings


def merge_settings(current: Settings, changes: Mapping[str, Any]) -> Settings:
    """Apply a partial update and validate the result.

    Raises :class:`InvalidSettings` for unknown fields or out-of-range values;
    ``current`` is never modified.
    """
    unknown = set(changes) - set(_INT_BOUNDS) - set(_BOOL_FIELDS)
    if unknown:
        raise InvalidSettings(f"Unknown setting(s): {', '.join(sorted(unknown))}.")
    return validate_settings(replace(current, **dict(changes)))


def settings_from_payload(payload: Mapping[str, Any]) -> Settings:
    """Parse a stored settings record, rejecting anything out of bounds."""
    if not isinstance(payload, Mapping):
        raise InvalidSettings(f"Stored settings must be a mapping, got {type(payload).__name__}.")
    changes: dict[str, Any] = {}
    for key, value in payload.items():
        field_name = _PAYLOAD_KEYS.get(key)
        if field_name is not None:
            changes[field_name] = value
    return merge_settings(Settings(), changes)
