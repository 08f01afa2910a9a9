"""Game tunables shared across the engine, controller, and API layers."""

LIST_LENGTH_MIN: int = 3
LIST_LENGTH_MAX: int = 10
TIMER_MINUTES_MIN: int = 1
TIMER_MINUTES_MAX: int = 10
MAX_HINTS_MIN: int = 1
MAX_HINTS_MAX: int = 5

DEFAULT_LIST_LENGTH: int = 5
DEFAULT_TIMER_ENABLED: bool = True
DEFAULT_TIMER_MINUTES: int = 3
DEFAULT_HINTS_ENABLED: bool = True
DEFAULT_MAX_HINTS: int = 2

# (upper bound of list length, total items on display)
DISPLAY_SIZE_BANDS: tuple[tuple[int, int], ...] = ((5, 20), (8, 22))
DISPLAY_SIZE_LARGEST: int = 24

HINT_COOLDOWN_SECONDS: int = 5
HINT_REVEAL_SECONDS: int = 3
MEMORIZE_SECONDS: int = 30
BRIEFING_MESSAGE_INTERVAL_SECONDS: float = 2.5
TICK_INTERVAL_MS: int = 1000
RECENT_GAMES_LIMIT: int = 10
