"""Qt timer that drives the session's time-based transitions."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

from recall_app.constants.game_constants import TICK_INTERVAL_MS
from recall_app.core.session_controller import SessionController


class RoundTicker(QObject):
    """Calls ``SessionController.tick`` once per interval on the Qt event loop."""

    phase_changed = Signal(str)

    def __init__(
        self,
        controller: SessionController,
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self._last_phase = controller.phase()
        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self._on_tick)

    def start(self) -> None:
        self.timer.start()

    def stop(self) -> None:
        self.timer.stop()

    def is_running(self) -> bool:
        return self.timer.isActive()

    def _on_tick(self) -> None:
        self.controller.tick()
        phase = self.controller.phase()
        if phase is not self._last_phase:
            self._last_phase = phase
            self.phase_changed.emit(phase.value)
