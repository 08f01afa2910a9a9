from __future__ import annotations

import logging

import pytest

from recall_app.utils.logging_config import configure_logging


def test_returns_package_logger():
    assert configure_logging().name == "recall_app"


def test_level_names_are_accepted():
    configure_logging("debug")
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_unknown_level_name_is_rejected():
    with pytest.raises(ValueError):
        configure_logging("chatty")
