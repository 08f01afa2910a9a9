"""Persistence adapters and the post-transition synchronisation step.

The session state is the source of truth. Adapters only mirror it, and the
sync step pushes changes on a background worker so a slow or failing backend
never holds up a command.
"""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
import logging
from typing import Any, Callable, Protocol
from urllib.parse import quote

import requests

from recall_app.constants.network_constants import PERSISTENCE_TIMEOUT_SECONDS, PERSISTENCE_WORKER_COUNT
from recall_app.core.commands import Command, LoadHistory, LoadSettings
from recall_app.core.errors import InvalidSettings, PersistenceFailure
from recall_app.core.game_settings import settings_from_payload
from recall_app.core.models import RoundResult, Settings
from recall_app.core.services.kv_store import KeyValueStore
from recall_app.core.state_machine import SessionState

logger = logging.getLogger(__name__)


class PersistenceBoundary(Protocol):
    def load_settings(self) -> Settings | None: ...

    def save_settings(self, settings: Settings) -> None: ...

    def load_history(self) -> list[RoundResult]: ...

    def append_history_record(self, result: RoundResult) -> None: ...


@dataclass(frozen=True, slots=True)
class PlayerIdentity:
    """Opaque player id handed over at startup; ``None`` means anonymous."""

    player_id: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return not self.player_id


def settings_key(player_id: str) -> str:
    return f"player:{player_id}:settings"


def games_key(player_id: str) -> str:
    return f"player:{player_id}:games"


class LocalOnlyPersistence:
    """Used when nobody is signed in: nothing is loaded and nothing is kept."""

    def load_settings(self) -> Settings | None:
        return None

    def save_settings(self, settings: Settings) -> None:
        return None

    def load_history(self) -> list[RoundResult]:
        return []

    def append_history_record(self, result: RoundResult) -> None:
        return None


class KeyValuePersistence:
    """Reads and writes a player's records directly in an in-process store."""

    def __init__(self, store: KeyValueStore, player_id: str) -> None:
        self._store = store
        self._player_id = player_id

    def load_settings(self) -> Settings | None:
        payload = self._store.get(settings_key(self._player_id))
        if payload is None:
            return None
        return settings_from_payload(payload)

    def save_settings(self, settings: Settings) -> None:
        self._store.set(settings_key(self._player_id), settings.to_payload())

    def load_history(self) -> list[RoundResult]:
        records = self._store.get(games_key(self._player_id), [])
        return _results_from_records(records)

    def append_history_record(self, result: RoundResult) -> None:
        self._store.append(games_key(self._player_id), result.to_payload())


class HttpPersistence:
    """Talks to the storage routes of the RecallCart API over HTTP."""

    def __init__(
        self,
        base_url: str,
        player_id: str,
        session: requests.Session | None = None,
        timeout: float = PERSISTENCE_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._player_path = f"/players/{quote(player_id, safe='')}"
        self._session = session or requests.Session()
        self._timeout = timeout

    def load_settings(self) -> Settings | None:
        body = self._request("GET", "/settings")
        payload = body.get("settings")
        if payload is None:
            return None
        if not isinstance(payload, dict):
            raise PersistenceFailure("Stored settings are not a JSON object.")
        return settings_from_payload(payload)

    def save_settings(self, settings: Settings) -> None:
        self._request("POST", "/settings", settings.to_payload())

    def load_history(self) -> list[RoundResult]:
        body = self._request("GET", "/games")
        return _results_from_records(body.get("games") or [])

    def append_history_record(self, result: RoundResult) -> None:
        self._request("POST", "/games", result.to_payload())

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{self._player_path}{path}"
        try:
            response = self._session.request(method, url, json=payload, timeout=self._timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise PersistenceFailure(f"{method} {url} failed: {exc}") from exc
        if not isinstance(body, dict):
            raise PersistenceFailure(f"{method} {url} returned an unexpected body.")
        return body


def _results_from_records(records: Any) -> list[RoundResult]:
    if not isinstance(records, list):
        raise PersistenceFailure("Stored game history is not a list.")
    results: list[RoundResult] = []
    for record in records:
        try:
            results.append(RoundResult.from_payload(record))
        except ValueError:
            logger.warning("Skipping malformed game record: %r", record)
    return results


class PersistenceSync:
    """Forwards settings changes and committed results to a boundary."""

    def __init__(
        self,
        boundary: PersistenceBoundary,
        executor: Executor | None = None,
        local_only: bool = False,
    ) -> None:
        self._boundary = boundary
        self._local_only = local_only
        self._executor = executor
        self._owns_executor = executor is None

    @classmethod
    def local(cls) -> "PersistenceSync":
        return cls(LocalOnlyPersistence(), local_only=True)

    @classmethod
    def for_identity(
        cls,
        identity: PlayerIdentity,
        store: KeyValueStore | None = None,
        storage_url: str | None = None,
    ) -> "PersistenceSync":
        """Pick the adapter for this player; anonymous players stay local-only."""
        if identity.is_anonymous:
            logger.info("No player identity: progress will not be saved.")
            return cls.local()
        if storage_url:
            logger.info("Syncing player %s with %s", identity.player_id, storage_url)
            return cls(HttpPersistence(storage_url, identity.player_id))
        return cls(KeyValuePersistence(store or KeyValueStore(), identity.player_id))

    @property
    def local_only(self) -> bool:
        return self._local_only

    def load(self) -> list[Command]:
        """Fetch stored settings and history as commands to replay.

        Runs synchronously at session start. Anything that fails to load is
        logged and skipped so the session starts from its defaults.
        """
        if self._local_only:
            return []
        commands: list[Command] = []
        try:
            settings = self._boundary.load_settings()
        except PersistenceFailure as exc:
            logger.warning("Could not load settings: %s", exc)
        except InvalidSettings as exc:
            logger.warning("Ignoring stored settings: %s", exc)
        else:
            if settings is not None:
                commands.append(LoadSettings(settings))
        try:
            history = self._boundary.load_history()
        except PersistenceFailure as exc:
            logger.warning("Could not load game history: %s", exc)
        else:
            commands.append(LoadHistory(tuple(history)))
        return commands

    def after_transition(self, command: Command, previous: SessionState, current: SessionState) -> None:
        """Queue the writes implied by moving from ``previous`` to ``current``."""
        if self._local_only or isinstance(command, (LoadSettings, LoadHistory)):
            return
        if current.settings != previous.settings:
            self._submit("save settings", self._boundary.save_settings, current.settings)
        new_results = current.history.appended[len(previous.history.appended):]
        for result in new_results:
            self._submit("append game result", self._boundary.append_history_record, result)

    def shutdown(self, wait: bool = True) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None

    def _submit(self, description: str, call: Callable[..., None], *args: Any) -> None:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=PERSISTENCE_WORKER_COUNT,
                thread_name_prefix="RecallPersistence",
            )
        self._executor.submit(self._run, description, call, *args)

    @staticmethod
    def _run(description: str, call: Callable[..., None], *args: Any) -> None:
        try:
            call(*args)
        except PersistenceFailure as exc:
            logger.warning("Failed to %s: %s", description, exc)
        except Exception:
            logger.exception("Unexpected error while trying to %s", description)
