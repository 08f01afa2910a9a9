from __future__ import annotations

import random

from PySide6.QtCore import QCoreApplication
import pytest

from recall_app.core.models import Phase
from recall_app.core.session_controller import SessionController
from recall_app.ui.round_ticker import RoundTicker


@pytest.fixture(scope="module")
def qt_app():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


def test_tick_emits_phase_changes(qt_app, clock):
    controller = SessionController(rng=random.Random(2), clock=clock)
    ticker = RoundTicker(controller, interval_ms=50)
    seen: list[str] = []
    ticker.phase_changed.connect(seen.append)

    controller.start_round()
    ticker._on_tick()
    clock.advance(30)
    ticker._on_tick()

    assert controller.phase() is Phase.BRIEFING
    assert seen == ["memorizing", "briefing"]


def test_start_and_stop(qt_app, clock):
    ticker = RoundTicker(SessionController(clock=clock))
    assert not ticker.is_running()
    ticker.start()
    assert ticker.is_running()
    ticker.stop()
    assert not ticker.is_running()
