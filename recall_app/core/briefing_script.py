"""Store-keeper messages shown between memorizing and shopping."""

from __future__ import annotations

from recall_app.constants.game_constants import BRIEFING_MESSAGE_INTERVAL_SECONDS


class BriefingScript:
    """Fixed message sequence that advances one message per interval."""

    def __init__(self, target_count: int, interval_seconds: float = BRIEFING_MESSAGE_INTERVAL_SECONDS) -> None:
        if interval_seconds <= 0:
            raise ValueError("Message interval must be positive.")
        self._interval = interval_seconds
        self._messages = (
            "Welcome to our friendly neighborhood store!",
            "I'm here to help you with your shopping today.",
            f"I see you need to find {target_count} items for your list.",
            "Take your time and look carefully at all the items on the shelves.",
            "Click on the items you need to add them to your basket.",
            "Good luck, and happy shopping!",
        )

    @property
    def messages(self) -> tuple[str, ...]:
        return self._messages

    def message_index_at(self, elapsed_seconds: float) -> int:
        if elapsed_seconds <= 0:
            return 0
        return min(int(elapsed_seconds // self._interval), len(self._messages) - 1)

    def message_at(self, elapsed_seconds: float) -> str:
        return self._messages[self.message_index_at(elapsed_seconds)]

    def is_finished(self, elapsed_seconds: float) -> bool:
        """True once the last message has been on screen for a full interval."""
        return elapsed_seconds >= self._interval * len(self._messages)
