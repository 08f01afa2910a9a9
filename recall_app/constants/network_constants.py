"""Network and persistence constants for the memory game."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000
DEFAULT_LOG_LEVEL: str = "INFO"

# One writer keeps settings and game records in commit order.
PERSISTENCE_WORKER_COUNT: int = 1
PERSISTENCE_TIMEOUT_SECONDS: float = 10.0
