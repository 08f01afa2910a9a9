from __future__ import annotations

from pathlib import Path

import pytest

from recall_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from recall_app.utils.runtime_config import RuntimeConfig


def test_defaults_from_empty_environment():
    config = RuntimeConfig.from_env({})
    assert config == RuntimeConfig()
    assert config.host == DEFAULT_HOST
    assert config.port == DEFAULT_PORT
    assert config.player_id is None
    assert config.auto_start_play is True


def test_values_are_parsed():
    config = RuntimeConfig.from_env(
        {
            "RECALL_HOST": "127.0.0.1",
            "RECALL_PORT": "9001",
            "RECALL_PLAYER_ID": " player-7 ",
            "RECALL_STORAGE_URL": "http://storage.test",
            "RECALL_DATA_FILE": "/tmp/recall.json",
            "RECALL_SEED": "12",
            "RECALL_AUTO_START_PLAY": "off",
        }
    )
    assert config.host == "127.0.0.1"
    assert config.port == 9001
    assert config.player_id == "player-7"
    assert config.storage_url == "http://storage.test"
    assert config.data_file == Path("/tmp/recall.json")
    assert config.catalog_file is None
    assert config.seed == 12
    assert config.auto_start_play is False


def test_blank_values_count_as_unset():
    config = RuntimeConfig.from_env({"RECALL_PLAYER_ID": "  ", "RECALL_PORT": ""})
    assert config.player_id is None
    assert config.port == DEFAULT_PORT


@pytest.mark.parametrize(("name", "value"), [("RECALL_PORT", "eighty"), ("RECALL_AUTO_START_PLAY", "maybe")])
def test_bad_values_raise(name, value):
    with pytest.raises(ValueError):
        RuntimeConfig.from_env({name: value})


def test_log_level_is_normalised():
    assert RuntimeConfig.from_env({"RECALL_LOG_LEVEL": " debug "}).log_level == "DEBUG"
    assert RuntimeConfig.from_env({}).log_level == "INFO"
