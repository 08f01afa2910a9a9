"""Environment-driven runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from recall_app.constants.network_constants import DEFAULT_HOST, DEFAULT_LOG_LEVEL, DEFAULT_PORT

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """Deployment settings read once at startup."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    player_id: str | None = None
    storage_url: str | None = None
    data_file: Path | None = None
    catalog_file: Path | None = None
    seed: int | None = None
    auto_start_play: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "RuntimeConfig":
        """Build the config from ``RECALL_*`` variables.

        A ``.env`` file in the working directory is loaded first when reading
        the real process environment.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ
        return cls(
            host=environ.get("RECALL_HOST") or DEFAULT_HOST,
            port=_parse_int(environ, "RECALL_PORT", DEFAULT_PORT),
            player_id=_blank_to_none(environ.get("RECALL_PLAYER_ID")),
            storage_url=_blank_to_none(environ.get("RECALL_STORAGE_URL")),
            data_file=_parse_path(environ, "RECALL_DATA_FILE"),
            catalog_file=_parse_path(environ, "RECALL_CATALOG_FILE"),
            seed=_parse_int(environ, "RECALL_SEED", None),
            auto_start_play=_parse_bool(environ, "RECALL_AUTO_START_PLAY", True),
            log_level=(_blank_to_none(environ.get("RECALL_LOG_LEVEL")) or DEFAULT_LOG_LEVEL).upper(),
        )


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _parse_int(environ: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = _blank_to_none(environ.get(name))
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def _parse_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = _blank_to_none(environ.get(name))
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}.")


def _parse_path(environ: Mapping[str, str], name: str) -> Path | None:
    raw = _blank_to_none(environ.get(name))
    return Path(raw).expanduser() if raw is not None else None
